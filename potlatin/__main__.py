"""
Entry point for running potlatin as a module.

Usage:
    python -m potlatin --help
    python -m potlatin translate messages.pot -o -
    python -m potlatin transforms
"""
from .cli import app


if __name__ == "__main__":
    app()
