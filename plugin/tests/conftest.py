"""Pytest configuration and fixtures for LavaSrc tests."""

import os
from collections.abc import Callable

import pytest
from fakes import FakeHost

from lavasrc.core.config import LavaSrcSettings

FULL_CONFIG = {
    "spotify": {"client_id": "sp-id", "client_secret": "sp-secret", "sp_dc": "sp-cookie"},
    "apple_music": {"media_api_token": "am-token"},
    "deezer": {"master_decryption_key": "dz-key"},
    "yandex_music": {"access_token": "ym-token"},
    "flowery_tts": {"voice": "Eric"},
    "youtube": {"country_code": "DE"},
}


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Keep LAVASRC_* variables from the developer's shell out of tests."""
    for key in list(os.environ):
        if key.startswith("LAVASRC_"):
            monkeypatch.delenv(key)


@pytest.fixture
def host() -> FakeHost:
    return FakeHost()


@pytest.fixture
def host_without_youtube() -> FakeHost:
    return FakeHost(with_youtube=False)


@pytest.fixture
def make_settings() -> Callable[..., LavaSrcSettings]:
    """Build settings with the given backends enabled and fully configured.

    Keyword overrides replace whole sections (e.g. spotify={...}).
    """

    def _make(*enabled: str, **overrides) -> LavaSrcSettings:
        sections = {name: dict(config) for name, config in FULL_CONFIG.items()}
        sections.update(overrides)
        sources = {name: name in enabled for name in FULL_CONFIG}
        return LavaSrcSettings(sources=sources, **sections)

    return _make
