#!/usr/bin/env python3
"""
Script for running the occupancy simulations.
Usage: python run_simulations.py [--turns 1000,10000] [--trials 10] [--seed 42]
"""

import sys

from monopoly_sim.cli import main

if __name__ == "__main__":
    sys.exit(main())
