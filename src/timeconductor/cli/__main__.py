#!/usr/bin/env python3
"""
CLI entry point for timeconductor.cli module.

This allows running: python -m timeconductor.cli
"""

from .main import cli

if __name__ == "__main__":
    cli()
