"""Storage, services and application wiring around the core subsystems."""

from .app import PhraseApp

__all__ = ["PhraseApp"]
