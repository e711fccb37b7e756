"""LavaSrc: streaming catalog, TTS and lyrics backends for a host audio framework."""

__version__ = "0.1.0"
