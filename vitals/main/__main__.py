"""
Main module entry point.

This allows running the HTTP server as: python -m vitals.main
"""

from .server import main

if __name__ == "__main__":
    main()
