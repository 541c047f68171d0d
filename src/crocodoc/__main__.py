"""Main entry point for the crocodoc command line."""

from crocodoc.cli.main import main

if __name__ == "__main__":
    main()
