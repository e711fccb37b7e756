"""Backend factory: turns one configuration section into a backend instance.

Construction is lightweight. No backend performs network I/O here.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from lavasrc.core.config import (
    AppleMusicConfig,
    DeezerConfig,
    FloweryTTSConfig,
    LavaSrcSettings,
    SpotifyConfig,
    YandexMusicConfig,
    YouTubeConfig,
)
from lavasrc.core.errors import ConfigurationError
from lavasrc.core.handles import HostHandle
from lavasrc.host import (
    AudioLyricsManager,
    AudioSearchManager,
    AudioSourceManager,
    Capability,
    SourceRegistry,
)
from lavasrc.services.registration.descriptors import (
    BackendDescriptor,
    BackendKind,
    get_descriptor,
)
from lavasrc.sources.applemusic import AppleMusicSourceManager
from lavasrc.sources.deezer import DeezerAudioSourceManager
from lavasrc.sources.flowerytts import FloweryTTSSourceManager
from lavasrc.sources.mirror import MirroringTrackResolver
from lavasrc.sources.spotify import SpotifySourceManager
from lavasrc.sources.yandexmusic import YandexMusicSourceManager
from lavasrc.sources.youtube import YoutubeSearchManager

logger = logging.getLogger(__name__)


@dataclass
class BackendInstance:
    """A constructed backend and the capability slots it fills.

    A slot is set only when the descriptor declares that capability, so the
    binder never needs to inspect the manager's type.
    """

    descriptor: BackendDescriptor
    manager: object
    source: AudioSourceManager | None = None
    search: AudioSearchManager | None = None
    lyrics: AudioLyricsManager | None = None
    dependency: HostHandle | None = None

    @property
    def kind(self) -> BackendKind:
        return self.descriptor.kind

    def provider(self, capability: Capability) -> object | None:
        if capability == Capability.SOURCE:
            return self.source
        if capability == Capability.SEARCH:
            return self.search
        return self.lyrics


@dataclass
class BuildContext:
    providers: list[str]
    player: HostHandle[SourceRegistry]
    dependency: HostHandle | None = None


def apply_limit(
    value: int | float, setter: Callable[[int | float], None], name: str = "limit"
) -> bool:
    """Apply a limit override only when it is positive; otherwise keep the default.

    A negative value is ignored like zero but logged, since it was set on purpose.
    """
    if value > 0:
        setter(value)
        return True
    if value < 0:
        logger.warning(f"{name} is negative ({value}); the backend default will be used")
    return False


def _build_spotify(config: SpotifyConfig, context: BuildContext) -> SpotifySourceManager:
    return SpotifySourceManager(
        config.client_id,
        config.client_secret,
        config.sp_dc,
        config.country_code,
        context.player,
        MirroringTrackResolver(context.providers),
    )


def _build_apple_music(config: AppleMusicConfig, context: BuildContext) -> AppleMusicSourceManager:
    return AppleMusicSourceManager(
        context.providers, config.media_api_token, config.country_code, context.player
    )


def _build_deezer(config: DeezerConfig, context: BuildContext) -> DeezerAudioSourceManager:
    return DeezerAudioSourceManager(config.master_decryption_key)


def _build_yandex_music(
    config: YandexMusicConfig, context: BuildContext
) -> YandexMusicSourceManager:
    return YandexMusicSourceManager(config.access_token)


def _build_flowery_tts(config: FloweryTTSConfig, context: BuildContext) -> FloweryTTSSourceManager:
    manager = FloweryTTSSourceManager(config.voice)
    if config.translate:
        manager.set_translate(config.translate)
    if config.audio_format is not None:
        manager.set_audio_format(config.audio_format)
    return manager


def _build_youtube(config: YouTubeConfig, context: BuildContext) -> YoutubeSearchManager:
    return YoutubeSearchManager(context.dependency, config.country_code)


_BUILDERS: dict[BackendKind, Callable] = {
    BackendKind.SPOTIFY: _build_spotify,
    BackendKind.APPLE_MUSIC: _build_apple_music,
    BackendKind.DEEZER: _build_deezer,
    BackendKind.YANDEX_MUSIC: _build_yandex_music,
    BackendKind.FLOWERY_TTS: _build_flowery_tts,
    BackendKind.YOUTUBE: _build_youtube,
}

# config field -> manager setter, for every "limit" style override
_LIMIT_SETTERS: dict[BackendKind, dict[str, str]] = {
    BackendKind.SPOTIFY: {
        "playlist_load_limit": "set_playlist_page_limit",
        "album_load_limit": "set_album_page_limit",
    },
    BackendKind.APPLE_MUSIC: {
        "playlist_load_limit": "set_playlist_page_limit",
        "album_load_limit": "set_album_page_limit",
    },
    BackendKind.FLOWERY_TTS: {
        "silence": "set_silence",
        "speed": "set_speed",
    },
}


def build(
    kind: BackendKind,
    settings: LavaSrcSettings,
    player: HostHandle[SourceRegistry],
) -> BackendInstance | None:
    """Construct the backend for ``kind``, or return None when it is disabled.

    The configuration section of a disabled backend is never read.

    Raises:
        ConfigurationError: If the backend is enabled but a required field is blank
    """
    descriptor = get_descriptor(kind)
    if not settings.is_enabled(descriptor.section):
        return None

    config = getattr(settings, descriptor.section)
    missing = config.missing_fields()
    if missing:
        raise ConfigurationError(descriptor.kind.value, [f"{name} is required" for name in missing])

    context = BuildContext(providers=list(settings.providers), player=player)
    if descriptor.requires is not None:
        context.dependency = HostHandle(descriptor.kind.value, descriptor.requires.name)

    try:
        manager = _BUILDERS[descriptor.kind](config, context)
    except ValueError as e:
        raise ConfigurationError(descriptor.kind.value, [str(e)]) from e

    for field_name, setter_name in _LIMIT_SETTERS.get(descriptor.kind, {}).items():
        apply_limit(
            getattr(config, field_name),
            getattr(manager, setter_name),
            f"{descriptor.kind.value}.{field_name}",
        )

    capabilities = descriptor.capabilities
    logger.debug(
        f"Built {descriptor.display_name} backend with "
        f"{', '.join(sorted(c.value for c in capabilities))}"
    )
    return BackendInstance(
        descriptor=descriptor,
        manager=manager,
        source=manager if Capability.SOURCE in capabilities else None,
        search=manager if Capability.SEARCH in capabilities else None,
        lyrics=manager if Capability.LYRICS in capabilities else None,
        dependency=context.dependency,
    )
