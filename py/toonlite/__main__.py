"""Module entrypoint for running toonlite as ``python -m toonlite``."""

from __future__ import annotations

from toonlite.cli import main


if __name__ == "__main__":
    main()
