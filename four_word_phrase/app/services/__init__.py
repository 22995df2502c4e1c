"""Services wiring the core transform and generator to storage."""

from .corpus_builder import BuildSummary, CorpusBuildConfig, CorpusDictionaryBuilder
from .importer import ImportSummary, StreamImporter
from .phrase_sink import CollectingPhraseSink, PhraseSink, TextPhraseSink, emit_phrases

__all__ = [
    "BuildSummary",
    "CorpusBuildConfig",
    "CorpusDictionaryBuilder",
    "ImportSummary",
    "StreamImporter",
    "CollectingPhraseSink",
    "PhraseSink",
    "TextPhraseSink",
    "emit_phrases",
]
