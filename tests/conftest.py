"""
Shared pytest configuration.

Installing the project is optional for running the unit tests:
    pip install -e ".[test]"
    pytest -q tests
"""

from __future__ import annotations

import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_ROOT = PROJECT_ROOT / "src"

src_str = str(SRC_ROOT)
if src_str not in sys.path:
    sys.path.insert(0, src_str)
