"""
Entry point for running ddexport as a module.

Usage:
    python -m ddexport [command] [options]
"""

from ddexport.cli import main

if __name__ == "__main__":
    main()
