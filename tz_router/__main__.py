"""
Main entry point for the tz_router package.

Allows running the client as: python -m tz_router
"""

from tz_router.cli import main

if __name__ == "__main__":
    main()
