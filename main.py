#!/usr/bin/env python3
"""
ABOUTME: Entry point for the environment configuration checker
ABOUTME: Simple wrapper that imports and runs the CLI
"""

from envreader.cli import main

if __name__ == "__main__":
    main()
