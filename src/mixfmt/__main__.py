"""Module entry point for `python -m mixfmt`."""

from mixfmt.cli.main import main

if __name__ == "__main__":
    main()
