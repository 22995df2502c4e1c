"""Command line entry point: build dictionaries and print phrases."""

from __future__ import annotations

import argparse
import math
import os
import sys
from pathlib import Path
from typing import List, Optional, Sequence, TextIO

from four_word_phrase.app.app import SEED_ENV, PhraseApp
from four_word_phrase.app.data.dictionary_file import write_dictionary
from four_word_phrase.app.data.word_store import MemoryWordStore
from four_word_phrase.app.services.corpus_builder import CorpusBuildConfig, CorpusDictionaryBuilder
from four_word_phrase.app.services.importer import StreamImporter
from four_word_phrase.app.services.phrase_sink import TextPhraseSink, emit_phrases
from four_word_phrase.core.errors import PhraseError, format_error_text
from four_word_phrase.core.tokenizer import (
    DEFAULT_ACCEPTANCE_PATTERN,
    DEFAULT_REJECTION_PATTERN,
    DEFAULT_WORD_DELIMITER,
)
from four_word_phrase.core.transform import TransformConfig
from four_word_phrase.utils.logging_config import LOG_LEVEL_ENV, configure_logging


def _parse_capacity(value: str) -> Optional[int]:
    normalized = value.strip().lower()
    if normalized in {"inf", "infinity", "unbounded", "none"}:
        return None
    try:
        capacity = int(normalized)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid cache size: {value!r}") from exc
    if capacity <= 0:
        raise argparse.ArgumentTypeError("cache size must be positive")
    return capacity


def _add_transform_arguments(parser: argparse.ArgumentParser, acceptance: str) -> None:
    parser.add_argument(
        "--delimiter",
        default=DEFAULT_WORD_DELIMITER,
        help="Regular expression separating words (default: %(default)s).",
    )
    parser.add_argument(
        "--acceptance",
        default=acceptance,
        help="Lowercased words must match this pattern (default: %(default)s).",
    )
    parser.add_argument(
        "--rejection",
        default=DEFAULT_REJECTION_PATTERN,
        help="Words matching this pattern are dropped (default: %(default)s).",
    )
    parser.add_argument(
        "--cache-size",
        type=_parse_capacity,
        default=None,
        metavar="N",
        help="Duplicate cache capacity; 'inf' for unbounded (default).",
    )


def _transform_config(args: argparse.Namespace) -> TransformConfig:
    return TransformConfig(
        word_delimiter=args.delimiter,
        acceptance_pattern=args.acceptance,
        rejection_pattern=args.rejection,
        dedup_cache_capacity=args.cache_size if args.cache_size is not None else math.inf,
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="four-word-phrase",
        description="Turn raw text into a word dictionary and generate reproducible phrases.",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (defaults to $FOUR_WORD_PHRASE_LOG_LEVEL or WARNING).",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    dictionary = subparsers.add_parser(
        "dictionary",
        help="Build a dictionary file from one or more text files.",
    )
    dictionary.add_argument("sources", nargs="+", type=Path, help="Text files to read.")
    dictionary.add_argument(
        "-o",
        "--output",
        type=Path,
        required=True,
        help="Dictionary file to write (one word per line, sorted).",
    )
    _add_transform_arguments(dictionary, DEFAULT_ACCEPTANCE_PATTERN)

    phrases = subparsers.add_parser("phrases", help="Print phrases drawn from a dictionary.")
    phrases.add_argument("dictionary", type=Path, help="Dictionary file to sample from.")
    phrases.add_argument(
        "--seed",
        default=os.environ.get(SEED_ENV, ""),
        help="Base seed (defaults to $FOUR_WORD_PHRASE_SEED).",
    )
    phrases.add_argument("--length", type=int, default=4, help="Words per phrase.")
    phrases.add_argument("--count", type=int, default=10, help="Number of phrases.")
    phrases.add_argument(
        "--start",
        type=int,
        default=0,
        help="Request counter to start from, for replaying a sequence.",
    )
    phrases.add_argument("--separator", default=" ", help="Separator between words.")

    corpus = subparsers.add_parser(
        "corpus",
        help="Build a dictionary from a directory tree, checkpointing progress.",
    )
    corpus.add_argument("directory", type=Path, help="Corpus directory to walk.")
    corpus.add_argument(
        "--output-dir",
        type=Path,
        default=None,
        help="Where the dictionary and checkpoints go (default: parent of directory).",
    )
    corpus.add_argument(
        "--preferred",
        nargs="*",
        default=[],
        metavar="FILENAME",
        help="File names to process first; they set the novelty yardstick.",
    )
    corpus.add_argument("--checkpoint-every", type=int, default=500)
    corpus.add_argument("--max-novel-fraction", type=float, default=0.6)
    _add_transform_arguments(corpus, r"^[a-z\-]{5,14}$")

    serve = subparsers.add_parser("serve", help="Launch the Gradio interface.")
    serve.add_argument("dictionary", type=Path, help="Dictionary file to serve phrases from.")
    serve.add_argument("--seed", default=os.environ.get(SEED_ENV, ""))
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=7860)

    return parser


def _run_dictionary(args: argparse.Namespace, stdout: TextIO) -> int:
    store = MemoryWordStore()
    importer = StreamImporter(store, config=_transform_config(args))
    for source in args.sources:
        importer.import_path(source)
    count = write_dictionary(args.output, store)
    stdout.write(f"Wrote {count} words to {args.output}\n")
    return 0


def _run_phrases(args: argparse.Namespace, stdout: TextIO) -> int:
    app = PhraseApp(base_seed=args.seed)
    app.load_dictionary(args.dictionary)
    app.generator.set_count(args.start)
    emit_phrases(app.generator, TextPhraseSink(stdout, args.separator), args.count, args.length)
    return 0


def _run_corpus(args: argparse.Namespace, stdout: TextIO) -> int:
    config = CorpusBuildConfig.for_directory(
        args.directory,
        args.output_dir,
        preferred_files=tuple(args.preferred),
        checkpoint_every=args.checkpoint_every,
        maximum_novel_words_fraction=args.max_novel_fraction,
        transform=_transform_config(args),
    )
    summary = CorpusDictionaryBuilder(config).build()
    stdout.write(
        f"Processed {summary.files_processed} files ({summary.files_rejected} rejected); "
        f"wrote {summary.dictionary_size} words to {summary.dictionary_path}\n"
    )
    return 0


def _run_serve(args: argparse.Namespace, stdout: TextIO) -> int:
    from four_word_phrase.app.ui.gradio import create_interface, should_share_interface

    app = PhraseApp(base_seed=args.seed)
    app.load_dictionary(args.dictionary)
    create_interface(app).launch(
        server_name=args.host,
        server_port=args.port,
        share=should_share_interface(),
    )
    return 0


_COMMANDS = {
    "dictionary": _run_dictionary,
    "phrases": _run_phrases,
    "corpus": _run_corpus,
    "serve": _run_serve,
}


def main(
    argv: Optional[Sequence[str]] = None,
    *,
    stdout: Optional[TextIO] = None,
    stderr: Optional[TextIO] = None,
) -> int:
    stdout = stdout or sys.stdout
    stderr = stderr or sys.stderr
    args = _build_parser().parse_args(list(argv) if argv is not None else None)
    level = args.log_level if args.log_level is not None else os.environ.get(LOG_LEVEL_ENV, "WARNING")
    try:
        configure_logging(level)
        return _COMMANDS[args.command](args, stdout)
    except (PhraseError, OSError) as exc:
        stderr.write(format_error_text(exc) + "\n")
        return 1


def run(argv: Optional[List[str]] = None) -> None:
    sys.exit(main(argv))


if __name__ == "__main__":
    run()
