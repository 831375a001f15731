#!/usr/bin/env python3
"""
Product Manager - Launcher
Cross-platform (Mac, Windows, Linux)

Runs the interactive product catalog console. Configuration is read from
environment variables or a .env file in the current directory (see
.env.example).
"""

from catalog.main import main


if __name__ == "__main__":
    raise SystemExit(main())
