#!/usr/bin/env python
"""
Run script for Prospector.
Use: python run_prospector.py "refacciones motosierras" --location Durango --niche dealer_specialist
"""
import sys

from prospector.cli import main


if __name__ == "__main__":
    sys.exit(main())
