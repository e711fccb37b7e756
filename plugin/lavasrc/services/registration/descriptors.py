"""Static description of every backend the plugin can register.

DESCRIPTORS is in declaration order. That order drives construction and every
registration pass, so adding a backend here is a deliberate change.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from lavasrc.core.config import (
    AppleMusicConfig,
    BackendSection,
    DeezerConfig,
    FloweryTTSConfig,
    SpotifyConfig,
    YandexMusicConfig,
    YouTubeConfig,
)
from lavasrc.host import AudioSourceManager, Capability, YoutubeAudioSourceManager


class BackendKind(str, Enum):
    SPOTIFY = "spotify"
    APPLE_MUSIC = "applemusic"
    DEEZER = "deezer"
    YANDEX_MUSIC = "yandexmusic"
    FLOWERY_TTS = "flowerytts"
    YOUTUBE = "youtube"


@dataclass(frozen=True)
class CrossDependency:
    """A host source manager that must be registered before a backend can activate."""

    name: str
    source_type: type[AudioSourceManager]


@dataclass(frozen=True)
class BackendDescriptor:
    kind: BackendKind
    display_name: str
    section: str  # attribute name on LavaSrcSettings and SourcesConfig
    config_type: type[BackendSection]
    capabilities: frozenset[Capability]
    requires: CrossDependency | None = None


_ALL = frozenset(Capability)

DESCRIPTORS: tuple[BackendDescriptor, ...] = (
    BackendDescriptor(
        kind=BackendKind.SPOTIFY,
        display_name="Spotify",
        section="spotify",
        config_type=SpotifyConfig,
        capabilities=_ALL,
    ),
    BackendDescriptor(
        kind=BackendKind.APPLE_MUSIC,
        display_name="Apple Music",
        section="apple_music",
        config_type=AppleMusicConfig,
        capabilities=frozenset({Capability.SOURCE, Capability.SEARCH}),
    ),
    BackendDescriptor(
        kind=BackendKind.DEEZER,
        display_name="Deezer",
        section="deezer",
        config_type=DeezerConfig,
        capabilities=_ALL,
    ),
    BackendDescriptor(
        kind=BackendKind.YANDEX_MUSIC,
        display_name="Yandex Music",
        section="yandex_music",
        config_type=YandexMusicConfig,
        capabilities=frozenset({Capability.SOURCE}),
    ),
    BackendDescriptor(
        kind=BackendKind.FLOWERY_TTS,
        display_name="Flowery TTS",
        section="flowery_tts",
        config_type=FloweryTTSConfig,
        capabilities=frozenset({Capability.SOURCE}),
    ),
    BackendDescriptor(
        kind=BackendKind.YOUTUBE,
        display_name="YouTube",
        section="youtube",
        config_type=YouTubeConfig,
        capabilities=frozenset({Capability.SEARCH, Capability.LYRICS}),
        requires=CrossDependency("YoutubeAudioSourceManager", YoutubeAudioSourceManager),
    ),
)

_BY_KIND = {descriptor.kind: descriptor for descriptor in DESCRIPTORS}


def get_descriptor(kind: BackendKind) -> BackendDescriptor:
    return _BY_KIND[BackendKind(kind)]
