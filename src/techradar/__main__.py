"""``python -m techradar``."""

from techradar.cli.app import app

if __name__ == "__main__":
    app()
