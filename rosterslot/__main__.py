"""
Entry point for ``python -m rosterslot``.
"""

from .cli.app import app

if __name__ == "__main__":
    app()
