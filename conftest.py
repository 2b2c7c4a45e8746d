"""Pytest configuration ensuring the project root is importable.

Tests import ``swms_risk`` straight from the checkout. When pytest collects
tests from another working directory the repository root is not guaranteed to
appear on ``sys.path``, so it is inserted here.
"""

from __future__ import annotations

import sys
from pathlib import Path


PROJECT_ROOT = Path(__file__).resolve().parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))
