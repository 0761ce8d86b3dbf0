"""Entry point for ``python -m btts``."""

from btts.cli import app

if __name__ == "__main__":
    app()
