"""Allow running tmenu as a module: python -m tmenu."""

from tmenu.cli import main

if __name__ == "__main__":
    main()
