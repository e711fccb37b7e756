"""Contracts of the host audio framework the plugin registers into.

The host owns the three registries and the capability interfaces. Backends
implement one or more of AudioSourceManager, AudioSearchManager and
AudioLyricsManager; the plugin registers each into the matching registry.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Protocol, TypeVar


class Capability(str, Enum):
    SOURCE = "source"
    SEARCH = "search"
    LYRICS = "lyrics"


@dataclass(frozen=True)
class AudioReference:
    """An identifier a source manager recognised and knows how to load."""

    source: str
    kind: str  # track, album, playlist, artist, search, tts, ...
    identifier: str
    uri: str | None = None


@dataclass(frozen=True)
class SearchRequest:
    """A search query accepted by a search manager."""

    source: str
    query: str
    types: tuple[str, ...] = ()


@dataclass(frozen=True)
class TrackInfo:
    """Minimal track description handed to lyrics managers and mirroring."""

    title: str
    author: str
    identifier: str
    source_name: str
    isrc: str | None = None
    uri: str | None = None


@dataclass(frozen=True)
class LyricsRequest:
    """A lyrics lookup accepted by a lyrics manager."""

    source: str
    track_identifier: str
    title: str
    author: str


class AudioSourceManager(ABC):
    """Resolves identifiers (URLs, search prefixes) into loadable references."""

    @property
    @abstractmethod
    def source_name(self) -> str:
        """Unique identifier for this source (e.g., 'spotify')."""

    @abstractmethod
    def load_item(self, identifier: str) -> AudioReference | None:
        """Return a reference if this source handles the identifier, else None."""


class AudioSearchManager(ABC):
    @abstractmethod
    def load_search(self, query: str, types: tuple[str, ...] = ()) -> SearchRequest | None:
        """Return a request if the query carries this manager's prefix, else None."""


class AudioLyricsManager(ABC):
    @abstractmethod
    def load_lyrics(self, track: TrackInfo) -> LyricsRequest | None:
        """Return a request if this manager can provide lyrics for the track."""


class YoutubeAudioSourceManager(AudioSourceManager, ABC):
    """The host's own YouTube source manager.

    Implemented by the host framework, not by this plugin. The YouTube search
    backend looks it up from the source registry by this type.
    """


S = TypeVar("S", bound=AudioSourceManager)


class SourceRegistry(Protocol):
    def register_source_manager(self, manager: AudioSourceManager) -> None: ...

    def source(self, kind: type[S]) -> S | None: ...

    def load_item(self, identifier: str) -> AudioReference | None: ...


class SearchRegistry(Protocol):
    def register_search_manager(self, manager: AudioSearchManager) -> None: ...


class LyricsRegistry(Protocol):
    def register_lyrics_manager(self, manager: AudioLyricsManager) -> None: ...


@dataclass
class HostRegistries:
    """The three host-owned registries, passed by reference to the plugin."""

    source: SourceRegistry
    search: SearchRegistry
    lyrics: LyricsRegistry
