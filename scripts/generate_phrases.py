#!/usr/bin/env python3
"""Read a text, build an in-memory dictionary from it and print phrases."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional, Sequence

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from four_word_phrase.app.app import PhraseApp  # noqa: E402
from four_word_phrase.core.errors import PhraseError, format_error_text  # noqa: E402
from four_word_phrase.utils.logging_config import configure_logging  # noqa: E402


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("text", type=Path, help="Plain text file, e.g. a novel.")
    parser.add_argument("--seed", default="a random seed", help="Base seed for the sequence.")
    parser.add_argument("--length", type=int, default=4, help="Words per phrase.")
    parser.add_argument("--count", type=int, default=10, help="Number of phrases.")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    configure_logging("WARNING")

    app = PhraseApp(base_seed=args.seed)
    try:
        app.import_file(args.text)
        print(app.render_phrases(args.count, args.length))
    except (PhraseError, OSError) as exc:
        print(format_error_text(exc), file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
