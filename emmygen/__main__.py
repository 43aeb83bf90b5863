"""Entry point: python -m emmygen

Reads the LÖVE API description and writes EmmyLua files to api/.
"""

from __future__ import annotations

from .cli import app


def main() -> None:
    app()


if __name__ == "__main__":
    main()
