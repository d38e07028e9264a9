"""Entrypoint for `python -m navrouter`."""

from navrouter.cli import main


if __name__ == "__main__":
    main()
