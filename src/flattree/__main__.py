"""
flattree Package Main Entry Point

This module serves as the main entry point when the package is run as a module
using ``python -m flattree``. It delegates to the Typer application.
"""

from flattree.cli.typer_app import main

if __name__ == "__main__":
    main()
