#!/usr/bin/env python3
"""
ISSP Request Client - Entry Point

Usage:
    python main.py <command> [options]

Examples:
    python main.py requests
    python main.py group 2024-2026
    python main.py cycle 2024-2026

For more options:
    python main.py --help
"""

import sys

from issp_client.cli import main

if __name__ == "__main__":
    sys.exit(main())
