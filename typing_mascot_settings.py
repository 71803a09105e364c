#!/usr/bin/env python3
"""Convenience entry point.

Runs the settings CLI from a source checkout without installing the package.
"""

from typing_mascot.cli import main as _main


if __name__ == "__main__":
    raise SystemExit(_main())
