"""
Entry point for running protokit CLI as a module.

Usage: python -m protokit [command] [options]
"""

from protokit.cli.parser import main

if __name__ == "__main__":
    main()
