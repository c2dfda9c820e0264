"""
Entry point for running protokit CLI as a module.

Usage: python -m protokit.cli [command] [options]
"""

from .parser import main

if __name__ == "__main__":
    main()
