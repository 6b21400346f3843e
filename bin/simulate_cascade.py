#!/usr/bin/env python3
"""
Cascade Simulation CLI

Thin wrapper so the simulator runs from a source checkout without
installation. See netcascade/cli/main.py for commands and options.

Usage Examples:
    python bin/simulate_cascade.py scenario dns-collapse
    python bin/simulate_cascade.py site github.com --scenario aws-outage -d 50
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from netcascade.cli.main import main


if __name__ == "__main__":
    sys.exit(main())
