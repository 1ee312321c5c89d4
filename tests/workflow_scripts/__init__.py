#!/usr/bin/env python3
# file: tests/workflow_scripts/__init__.py
# version: 1.1.0
# guid: 4f8a2c61-0d3b-4e97-b1c5-9a6e3f2d7b08

"""Test package configuration for the verified commit scripts."""

from __future__ import annotations

from pathlib import Path
import sys

SCRIPTS_PATH = Path(__file__).resolve().parents[2] / ".github/workflows/scripts"
if str(SCRIPTS_PATH) not in sys.path:
    sys.path.insert(0, str(SCRIPTS_PATH))
