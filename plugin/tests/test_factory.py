"""Tests for the backend factory."""

import logging
from unittest.mock import MagicMock

import pytest

from lavasrc.core.errors import ConfigurationError
from lavasrc.core.handles import HostHandle
from lavasrc.host import AudioLyricsManager, AudioSearchManager, AudioSourceManager, Capability
from lavasrc.services.registration.descriptors import DESCRIPTORS, BackendKind
from lavasrc.services.registration.factory import apply_limit, build
from lavasrc.sources.flowerytts import FloweryTTSSourceManager
from lavasrc.sources.spotify import SpotifySourceManager


def _player() -> HostHandle:
    return HostHandle("lavasrc", "host source registry")


class ToggleOnlySettings:
    """Settings where every backend is off and any section read fails the test."""

    providers: list[str] = []

    def is_enabled(self, section: str) -> bool:
        return False

    def __getattr__(self, name):
        raise AssertionError(f"configuration section {name!r} was read")


class TestApplyLimit:
    @pytest.mark.parametrize("value", [0, -1, -100, 0.0])
    def test_non_positive_keeps_default(self, value):
        setter = MagicMock()
        assert apply_limit(value, setter) is False
        setter.assert_not_called()

    @pytest.mark.parametrize("value", [1, 25, 0.5])
    def test_positive_overrides_exactly(self, value):
        setter = MagicMock()
        assert apply_limit(value, setter) is True
        setter.assert_called_once_with(value)

    def test_negative_warns(self, caplog):
        with caplog.at_level(logging.WARNING, logger="lavasrc"):
            apply_limit(-3, MagicMock(), "spotify.playlist_load_limit")
        assert "spotify.playlist_load_limit is negative" in caplog.text

    def test_zero_is_silent(self, caplog):
        with caplog.at_level(logging.WARNING, logger="lavasrc"):
            apply_limit(0, MagicMock(), "spotify.playlist_load_limit")
        assert caplog.text == ""


class TestBuildDisabled:
    @pytest.mark.parametrize("descriptor", DESCRIPTORS, ids=lambda d: d.kind.value)
    def test_disabled_returns_none_without_reading_config(self, descriptor):
        assert build(descriptor.kind, ToggleOnlySettings(), _player()) is None

    def test_disabled_with_missing_config(self, make_settings):
        settings = make_settings("deezer", spotify={})
        assert build(BackendKind.SPOTIFY, settings, _player()) is None


class TestBuildEnabled:
    def test_missing_required_field(self, make_settings):
        settings = make_settings("spotify", spotify={"client_id": "only-the-id"})
        with pytest.raises(ConfigurationError) as exc_info:
            build(BackendKind.SPOTIFY, settings, _player())
        assert exc_info.value.backend == "spotify"
        assert exc_info.value.problems == ["client_secret is required"]
        assert "only-the-id" not in str(exc_info.value)

    def test_missing_required_field_named_by_kind(self, make_settings):
        settings = make_settings("apple_music", apple_music={})
        with pytest.raises(ConfigurationError) as exc_info:
            build(BackendKind.APPLE_MUSIC, settings, _player())
        assert exc_info.value.backend == "applemusic"

    def test_spotify_limits_default_when_zero(self, make_settings):
        settings = make_settings(
            "spotify",
            spotify={"client_id": "a", "client_secret": "b", "playlist_load_limit": 0},
        )
        manager = build(BackendKind.SPOTIFY, settings, _player()).manager
        assert manager.playlist_page_limit == SpotifySourceManager.DEFAULT_PLAYLIST_PAGE_LIMIT
        assert manager.album_page_limit == SpotifySourceManager.DEFAULT_ALBUM_PAGE_LIMIT

    def test_spotify_limits_override_when_positive(self, make_settings):
        settings = make_settings(
            "spotify",
            spotify={
                "client_id": "a",
                "client_secret": "b",
                "playlist_load_limit": 20,
                "album_load_limit": -5,
            },
        )
        manager = build(BackendKind.SPOTIFY, settings, _player()).manager
        assert manager.playlist_page_limit == 20
        assert manager.album_page_limit == SpotifySourceManager.DEFAULT_ALBUM_PAGE_LIMIT

    def test_apple_music_limits(self, make_settings):
        settings = make_settings(
            "apple_music", apple_music={"media_api_token": "t", "album_load_limit": 3}
        )
        manager = build(BackendKind.APPLE_MUSIC, settings, _player()).manager
        assert manager.album_page_limit == 3
        assert manager.playlist_page_limit == 0

    def test_flowery_tts_defaults(self, make_settings):
        settings = make_settings("flowery_tts", flowery_tts={})
        manager = build(BackendKind.FLOWERY_TTS, settings, _player()).manager
        assert manager.voice is None
        assert manager.translate is False
        assert manager.silence == FloweryTTSSourceManager.DEFAULT_SILENCE
        assert manager.speed == FloweryTTSSourceManager.DEFAULT_SPEED
        assert manager.audio_format == FloweryTTSSourceManager.DEFAULT_AUDIO_FORMAT

    def test_flowery_tts_overrides(self, make_settings):
        settings = make_settings(
            "flowery_tts",
            flowery_tts={
                "voice": "Eric",
                "translate": True,
                "silence": 300,
                "speed": 1.5,
                "audio_format": "wav",
            },
        )
        manager = build(BackendKind.FLOWERY_TTS, settings, _player()).manager
        assert manager.voice == "Eric"
        assert manager.translate is True
        assert manager.silence == 300
        assert manager.speed == 1.5
        assert manager.audio_format == "wav"

    def test_spotify_shares_the_player_handle(self, make_settings):
        player = _player()
        manager = build(BackendKind.SPOTIFY, make_settings("spotify"), player).manager
        assert manager._player is player


class TestCapabilitySlots:
    @pytest.mark.parametrize("descriptor", DESCRIPTORS, ids=lambda d: d.kind.value)
    def test_slots_match_declared_capabilities(self, make_settings, descriptor):
        instance = build(descriptor.kind, make_settings(descriptor.section), _player())
        for capability in Capability:
            provider = instance.provider(capability)
            if capability in descriptor.capabilities:
                assert provider is instance.manager
            else:
                assert provider is None

    @pytest.mark.parametrize("descriptor", DESCRIPTORS, ids=lambda d: d.kind.value)
    def test_slots_implement_their_interface(self, make_settings, descriptor):
        interfaces = {
            Capability.SOURCE: AudioSourceManager,
            Capability.SEARCH: AudioSearchManager,
            Capability.LYRICS: AudioLyricsManager,
        }
        instance = build(descriptor.kind, make_settings(descriptor.section), _player())
        for capability in descriptor.capabilities:
            assert isinstance(instance.provider(capability), interfaces[capability])

    def test_youtube_gets_an_empty_dependency_handle(self, make_settings):
        instance = build(BackendKind.YOUTUBE, make_settings("youtube"), _player())
        assert instance.dependency is not None
        assert instance.dependency.is_resolved is False
        assert instance.manager.country_code == "DE"

    def test_other_backends_have_no_dependency(self, make_settings):
        instance = build(BackendKind.DEEZER, make_settings("deezer"), _player())
        assert instance.dependency is None
