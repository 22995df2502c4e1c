#!/usr/bin/env python3
"""Run the four_word_phrase command line without installing the package."""

from __future__ import annotations

import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from four_word_phrase.cli import main  # noqa: E402

if __name__ == "__main__":
    sys.exit(main())
