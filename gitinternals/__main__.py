"""Entry point for running gitinternals as a module.

This module allows gitinternals to be run as a Python module using the -m flag:
    python -m gitinternals
"""

from . import cli

if __name__ == "__main__":
    cli._main()
