"""
Main entry point for the reldoc CLI.

This module is executed when running `python -m reldoc` or via the `reldoc` executable.
"""

from .cli import app


def main():
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
