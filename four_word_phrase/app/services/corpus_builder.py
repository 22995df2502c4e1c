"""Build one dictionary from a directory tree of text files.

The builder walks a corpus (for example a Project Gutenberg mirror), runs
each file through its own :class:`TokenizingTransform` and merges the words
into a single dictionary.  Progress is checkpointed to disk periodically so
an interrupted build resumes where it stopped.

The first files processed are assumed to be good English; any later file
that contributes too large a fraction of never-seen words is rejected as
probably being in another language.
"""

from __future__ import annotations

import json
import os
import re
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Set, Tuple

from four_word_phrase.core.errors import ConfigurationError
from four_word_phrase.core.transform import TokenizingTransform, TransformConfig, read_chunks
from four_word_phrase.utils.observability import create_counter, get_logger

from ..data.dictionary_file import write_dictionary

_METRIC_FILES = create_counter(
    "four_word_phrase_corpus_files_total",
    "Corpus files processed by the dictionary builder.",
    label_names=("outcome",),
)

CORPUS_TRANSFORM_CONFIG = TransformConfig(acceptance_pattern=r"^[a-z\-]{5,14}$")


@dataclass(frozen=True)
class CorpusBuildConfig:
    files_directory: Path
    dictionary_path: Path
    partial_dictionary_path: Path
    partial_processed_path: Path
    # Moved to the front of the queue; they set the yardstick for novelty.
    preferred_files: Tuple[str, ...] = ()
    check_novelty_after_file_count: int = 2
    maximum_novel_words_fraction: float = 0.6
    checkpoint_every: int = 500
    max_file_size: int = 24 * 1024 * 1024
    skip_name_pattern: Optional[str] = r"^\d+hgp\d+"
    transform: TransformConfig = field(default_factory=lambda: CORPUS_TRANSFORM_CONFIG)

    @classmethod
    def for_directory(
        cls,
        files_directory: os.PathLike | str,
        output_directory: os.PathLike | str | None = None,
        **kwargs,
    ) -> "CorpusBuildConfig":
        """Config with the dictionary and checkpoints in ``output_directory``.

        Defaults to the parent of ``files_directory``.
        """

        files_directory = Path(files_directory)
        output = Path(output_directory) if output_directory is not None else files_directory.parent
        return cls(
            files_directory=files_directory,
            dictionary_path=output / "dictionary.txt",
            partial_dictionary_path=output / "dictionary.partial.json",
            partial_processed_path=output / "files.partial.json",
            **kwargs,
        )


@dataclass(frozen=True)
class FileOutcome:
    path: Path
    unique_words: int
    novel_words: int
    accepted: bool
    elapsed: float


@dataclass(frozen=True)
class BuildSummary:
    files_processed: int
    files_rejected: int
    dictionary_size: int
    dictionary_path: Path
    resumed: bool


class CorpusDictionaryBuilder:
    def __init__(self, config: CorpusBuildConfig) -> None:
        if config.checkpoint_every <= 0:
            raise ConfigurationError("checkpoint_every must be positive")
        if not 0.0 <= config.maximum_novel_words_fraction <= 1.0:
            raise ConfigurationError("maximum_novel_words_fraction must be within [0, 1]")
        self.config = config
        self._skip_name = re.compile(config.skip_name_pattern) if config.skip_name_pattern else None
        self._output_paths = {
            path.resolve()
            for output in (
                config.dictionary_path,
                config.partial_dictionary_path,
                config.partial_processed_path,
            )
            for path in (Path(output), Path(output).with_name(Path(output).name + ".tmp"))
        }
        # write_dictionary stages into ".<name>.XXXX" beside the target.
        self._dictionary_file = Path(config.dictionary_path).resolve()
        self.dictionary: Set[str] = set()
        self.processed_files: Set[str] = set()
        self._logger = get_logger(__name__).bind(
            component="corpus_builder",
            files_directory=str(config.files_directory),
        )

    # ------------------------------------------------------------------
    # Checkpoints
    # ------------------------------------------------------------------

    def _read_json_list(self, path: Path) -> Optional[List[str]]:
        if not path.exists():
            return None
        try:
            with path.open("r", encoding="utf-8") as handle:
                payload = json.load(handle)
        except (OSError, ValueError) as exc:
            raise ConfigurationError(f"Corrupt checkpoint {path}: {exc}") from exc
        if not isinstance(payload, list) or not all(isinstance(item, str) for item in payload):
            raise ConfigurationError(f"Corrupt checkpoint {path}: expected a list of strings")
        return payload

    def load_checkpoint(self) -> bool:
        """Restore partial progress; return whether a checkpoint was found."""

        processed = self._read_json_list(self.config.partial_processed_path)
        words = self._read_json_list(self.config.partial_dictionary_path)
        if processed is None and words is None:
            self._logger.info("No checkpoint found; starting from scratch")
            return False

        self.processed_files = set(processed or ())
        self.dictionary = set(words or ())
        self._logger.info(
            "Checkpoint loaded",
            context={
                "files_processed": len(self.processed_files),
                "dictionary_size": len(self.dictionary),
            },
        )
        return True

    def _write_json_list(self, path: Path, values: Set[str]) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = path.with_name(path.name + ".tmp")
        with tmp_path.open("w", encoding="utf-8") as handle:
            json.dump(sorted(values), handle, indent=2)
        os.replace(tmp_path, path)

    def write_checkpoint(self) -> None:
        self._write_json_list(self.config.partial_dictionary_path, self.dictionary)
        self._write_json_list(self.config.partial_processed_path, self.processed_files)
        self._logger.info(
            "Checkpoint written",
            context={"files_processed": len(self.processed_files)},
        )

    def clear_checkpoint(self) -> None:
        for path in (self.config.partial_dictionary_path, self.config.partial_processed_path):
            if path.exists():
                path.unlink()

    # ------------------------------------------------------------------
    # File selection
    # ------------------------------------------------------------------

    def is_output_file(self, path: Path) -> bool:
        """Whether ``path`` is the dictionary, a checkpoint or one of their temp files."""

        resolved = path.resolve()
        if resolved in self._output_paths:
            return True
        staged_prefix = f".{self._dictionary_file.name}."
        return resolved.parent == self._dictionary_file.parent and resolved.name.startswith(
            staged_prefix
        )

    def should_skip(self, path: Path, size: int) -> bool:
        if str(path) in self.processed_files:
            return True
        if self.is_output_file(path):
            return True
        if size > self.config.max_file_size:
            return True
        if self._skip_name is not None and self._skip_name.search(path.name):
            return True
        return False

    def list_unprocessed_files(self) -> List[Path]:
        root = self.config.files_directory
        if not root.is_dir():
            raise ConfigurationError(f"Corpus directory {root} does not exist")

        preferred: Dict[str, List[Path]] = {name: [] for name in self.config.preferred_files}
        others: List[Path] = []
        for directory, subdirectories, filenames in os.walk(root):
            subdirectories.sort()
            for filename in sorted(filenames):
                path = Path(directory) / filename
                try:
                    size = path.stat().st_size
                except OSError:
                    continue
                if self.should_skip(path, size):
                    continue
                if filename in preferred:
                    preferred[filename].append(path)
                else:
                    others.append(path)

        ordered: List[Path] = []
        for name in self.config.preferred_files:
            ordered.extend(preferred[name])
        ordered.extend(others)
        return ordered

    # ------------------------------------------------------------------
    # Processing
    # ------------------------------------------------------------------

    def process_file(self, path: Path) -> FileOutcome:
        started = time.perf_counter()
        file_number = len(self.processed_files) + 1
        transform = TokenizingTransform(self.config.transform)

        unique_words = 0
        novel_words: List[str] = []
        with path.open("rb") as handle:
            for word in transform.stream(read_chunks(handle)):
                unique_words += 1
                if word not in self.dictionary:
                    novel_words.append(word)

        self.processed_files.add(str(path))
        accepted = True
        if file_number > self.config.check_novelty_after_file_count and unique_words:
            if len(novel_words) / unique_words > self.config.maximum_novel_words_fraction:
                accepted = False
        if accepted:
            self.dictionary.update(novel_words)

        outcome = FileOutcome(
            path=path,
            unique_words=unique_words,
            novel_words=len(novel_words),
            accepted=accepted,
            elapsed=time.perf_counter() - started,
        )
        _METRIC_FILES.labels(outcome="accepted" if accepted else "rejected").inc()
        self._logger.info(
            "File processed" if accepted else "Novel word fraction too high; rejecting as non-English",
            context={
                "file_number": file_number,
                "path": str(path),
                "elapsed_ms": round(outcome.elapsed * 1000),
                "unique_words": unique_words,
                "novel_words": len(novel_words),
                "dictionary_size": len(self.dictionary),
            },
        )
        return outcome

    def build(self) -> BuildSummary:
        resumed = self.load_checkpoint()
        files = self.list_unprocessed_files()
        self._logger.info("Processing corpus", context={"files": len(files)})

        rejected = 0
        for path in files:
            outcome = self.process_file(path)
            if not outcome.accepted:
                rejected += 1
            if len(self.processed_files) % self.config.checkpoint_every == 0:
                self.write_checkpoint()

        size = write_dictionary(self.config.dictionary_path, self.dictionary)
        self.clear_checkpoint()
        self._logger.info(
            "Final dictionary written",
            context={"dictionary_size": size, "path": str(self.config.dictionary_path)},
        )
        return BuildSummary(
            files_processed=len(files),
            files_rejected=rejected,
            dictionary_size=size,
            dictionary_path=self.config.dictionary_path,
            resumed=resumed,
        )


__all__ = [
    "CORPUS_TRANSFORM_CONFIG",
    "CorpusBuildConfig",
    "CorpusDictionaryBuilder",
    "FileOutcome",
    "BuildSummary",
]
