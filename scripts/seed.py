#!/usr/bin/env python
"""
Populate or inspect the users collection with mock data.

Usage:
    python scripts/seed.py [seed|clear|count|reseed|cleanup]
"""

from __future__ import annotations

import sys

from simple_api.cli import main

if __name__ == "__main__":
    main(["seed", *sys.argv[1:]])
