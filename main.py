#!/usr/bin/env python3
"""
Bending Arena - terminal edition

Thin wrapper around the CLI driver. The battle engine itself lives in the
bending package:
- battle: fighters, matchups, effects, cooldowns, turn state machine
- core: errors, logging, element metadata
- system: settings

To run: python main.py --mode endless --fighter avatar
"""
import sys

from bending.cli import run

if __name__ == "__main__":
    sys.exit(run())
