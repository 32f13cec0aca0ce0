#!/usr/bin/env python
"""
Command-line entry point for running from a source checkout

Usage:
    python cli.py map.osm.pbf dem.tif slopes.json
"""

import os
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from wayslope.cli import main


if __name__ == "__main__":
    sys.exit(main())
