import logging
from functools import lru_cache
from pathlib import Path
from typing import ClassVar

import yaml
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, model_validator
from pydantic.alias_generators import to_camel
from pydantic_settings import BaseSettings, SettingsConfigDict

from lavasrc.core.errors import ConfigurationError

logger = logging.getLogger(__name__)

# Mirroring templates used when the host config does not list any
DEFAULT_PROVIDERS = ['ytsearch:"%ISRC%"', "ytsearch:%QUERY%"]

# Lavalink application.yml spells some section names differently from our field names
_YAML_SECTION_KEYS = {
    "applemusic": "apple_music",
    "appleMusic": "apple_music",
    "yandexmusic": "yandex_music",
    "yandexMusic": "yandex_music",
    "flowerytts": "flowery_tts",
    "floweryTTS": "flowery_tts",
}

_TRUTHY = {"true", "1", "yes", "on"}


def _toggle(*aliases: str):
    """A source toggle that also accepts the backend kind tag and camelCase spellings."""
    return Field(default=False, validation_alias=AliasChoices(*aliases))


class BackendSection(BaseModel):
    """Base for one backend's configuration block.

    Accepts both the camelCase keys used by Lavalink's application.yml and
    the snake_case names used by environment variables.
    """

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="ignore", frozen=True
    )

    # Backend kind tag used in messages shown to operators
    KIND: ClassVar[str] = ""
    # Fields that must be non-blank when the backend is enabled
    REQUIRED: ClassVar[tuple[str, ...]] = ()
    # "limit" style fields: a value > 0 overrides the backend default
    LIMITS: ClassVar[tuple[str, ...]] = ()

    def missing_fields(self) -> list[str]:
        missing = []
        for name in self.REQUIRED:
            value = getattr(self, name)
            if value is None or (isinstance(value, str) and not value.strip()):
                missing.append(name)
        return missing


class SourcesConfig(BaseModel):
    """Top-level enable/disable toggle per backend kind.

    Unknown toggles are tolerated while off, so configs written for newer
    plugin releases still load. An unknown toggle that is on is an error.
    """

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="allow", frozen=True
    )

    spotify: bool = False
    apple_music: bool = _toggle("apple_music", "applemusic", "appleMusic")
    deezer: bool = False
    yandex_music: bool = _toggle("yandex_music", "yandexmusic", "yandexMusic")
    flowery_tts: bool = _toggle("flowery_tts", "flowerytts", "floweryTTS")
    youtube: bool = False

    @model_validator(mode="after")
    def _reject_unknown_enabled(self) -> "SourcesConfig":
        enabled = [
            key
            for key, value in (self.model_extra or {}).items()
            if value is True or str(value).strip().lower() in _TRUTHY
        ]
        if enabled:
            raise ValueError(f"unknown backend enabled: {', '.join(enabled)}")
        return self


class SpotifyConfig(BackendSection):
    KIND: ClassVar[str] = "spotify"
    REQUIRED: ClassVar[tuple[str, ...]] = ("client_id", "client_secret")
    LIMITS: ClassVar[tuple[str, ...]] = ("playlist_load_limit", "album_load_limit")

    client_id: str | None = None
    client_secret: str | None = None
    sp_dc: str | None = None
    country_code: str = "US"
    playlist_load_limit: int = 0
    album_load_limit: int = 0


class AppleMusicConfig(BackendSection):
    KIND: ClassVar[str] = "applemusic"
    REQUIRED: ClassVar[tuple[str, ...]] = ("media_api_token",)
    LIMITS: ClassVar[tuple[str, ...]] = ("playlist_load_limit", "album_load_limit")

    media_api_token: str | None = Field(default=None, alias="mediaAPIToken")
    country_code: str = "us"
    playlist_load_limit: int = 0
    album_load_limit: int = 0


class DeezerConfig(BackendSection):
    KIND: ClassVar[str] = "deezer"
    REQUIRED: ClassVar[tuple[str, ...]] = ("master_decryption_key",)

    master_decryption_key: str | None = None


class YandexMusicConfig(BackendSection):
    KIND: ClassVar[str] = "yandexmusic"
    REQUIRED: ClassVar[tuple[str, ...]] = ("access_token",)

    access_token: str | None = None


class FloweryTTSConfig(BackendSection):
    KIND: ClassVar[str] = "flowerytts"
    LIMITS: ClassVar[tuple[str, ...]] = ("silence", "speed")

    voice: str | None = None
    translate: bool = False
    silence: int = 0
    speed: float = 0.0
    audio_format: str | None = None


class YouTubeConfig(BackendSection):
    KIND: ClassVar[str] = "youtube"

    country_code: str = "US"


class LavaSrcSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="LAVASRC_", env_nested_delimiter="__", extra="ignore"
    )

    # Search templates the mirroring resolver tries, in order
    providers: list[str] = Field(default_factory=lambda: list(DEFAULT_PROVIDERS))

    sources: SourcesConfig = Field(default_factory=SourcesConfig)
    spotify: SpotifyConfig = Field(default_factory=SpotifyConfig)
    apple_music: AppleMusicConfig = Field(default_factory=AppleMusicConfig)
    deezer: DeezerConfig = Field(default_factory=DeezerConfig)
    yandex_music: YandexMusicConfig = Field(default_factory=YandexMusicConfig)
    flowery_tts: FloweryTTSConfig = Field(default_factory=FloweryTTSConfig)
    youtube: YouTubeConfig = Field(default_factory=YouTubeConfig)

    def is_enabled(self, section: str) -> bool:
        """Check the top-level toggle for a section (e.g. "apple_music")."""
        return bool(getattr(self.sources, section))

    def enabled_sections(self) -> list[tuple[str, BackendSection]]:
        """Return (name, config) for every enabled backend, in declaration order."""
        return [
            (name, getattr(self, name))
            for name in SourcesConfig.model_fields
            if self.is_enabled(name)
        ]


def validate_settings(settings: LavaSrcSettings) -> None:
    """Validate every enabled backend and raise one error listing all problems.

    Disabled sections are never inspected, so a disabled backend may be left
    entirely unconfigured. Negative limits are not errors; the factory warns
    about them when it builds the backend.
    """
    errors = []

    for _, section in settings.enabled_sections():
        for field_name in section.missing_fields():
            errors.append(f"{section.KIND}.{field_name} is required")

    if errors:
        for error in errors:
            logger.error("Configuration error: %s", error)
        raise ConfigurationError("lavasrc", errors)


def _kind_name(field_name: str) -> str:
    field = LavaSrcSettings.model_fields.get(field_name)
    section = field.annotation if field is not None else None
    if isinstance(section, type) and issubclass(section, BackendSection):
        return section.KIND
    return field_name


def _settings_from_mapping(data: dict) -> LavaSrcSettings:
    normalized = {_YAML_SECTION_KEYS.get(key, key): value for key, value in data.items()}
    try:
        return LavaSrcSettings(**normalized)
    except ValidationError as e:
        # Only report locations; input values may be credentials
        problems = [
            f"{'.'.join(_kind_name(str(p)) for p in err['loc'])}: {err['msg']}"
            for err in e.errors()
        ]
        raise ConfigurationError("lavasrc", problems) from None


def load_settings(path: str | Path) -> LavaSrcSettings:
    """Load settings from the plugins.lavasrc block of a Lavalink application.yml.

    A file without that block yields default settings (everything disabled).
    Environment variables still apply for keys the file does not set.
    """
    try:
        with open(path, encoding="utf-8") as f:
            document = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigurationError("lavasrc", [f"cannot read {path}: {type(e).__name__}"]) from e

    if not isinstance(document, dict):
        raise ConfigurationError("lavasrc", [f"{path} is not a mapping"])

    plugins = document.get("plugins") or {}
    if not isinstance(plugins, dict):
        raise ConfigurationError("lavasrc", ["plugins must be a mapping"])

    block = plugins.get("lavasrc") or {}
    if not isinstance(block, dict):
        raise ConfigurationError("lavasrc", ["plugins.lavasrc must be a mapping"])

    return _settings_from_mapping(block)


@lru_cache
def get_settings() -> LavaSrcSettings:
    settings = LavaSrcSettings()
    validate_settings(settings)
    return settings
