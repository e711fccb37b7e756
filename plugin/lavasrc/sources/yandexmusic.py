"""Yandex Music backend: source only."""

from __future__ import annotations

import re

from lavasrc.host import AudioReference, AudioSourceManager

SEARCH_PREFIX = "ymsearch:"

URL_PATTERN = re.compile(
    r"^https?://music\.yandex\.(?:ru|com|kz|by)/"
    r"(?:(?P<type>artist|album)/(?P<id>\d+)(?:/track/(?P<track>\d+))?"
    r"|users/(?P<user>[^/]+)/playlists/(?P<playlist>\d+))"
)


class YandexMusicSourceManager(AudioSourceManager):
    def __init__(self, access_token: str):
        if not access_token:
            raise ValueError("Yandex Music access token must be set")
        self._access_token = access_token

    @property
    def source_name(self) -> str:
        return "yandexmusic"

    def load_item(self, identifier: str) -> AudioReference | None:
        if identifier.startswith(SEARCH_PREFIX):
            return AudioReference(self.source_name, "search", identifier[len(SEARCH_PREFIX) :])

        match = URL_PATTERN.match(identifier)
        if not match:
            return None
        if match.group("playlist"):
            return AudioReference(
                self.source_name,
                "playlist",
                f"{match.group('user')}:{match.group('playlist')}",
                uri=identifier,
            )
        if match.group("track"):
            return AudioReference(self.source_name, "track", match.group("track"), uri=identifier)
        return AudioReference(self.source_name, match.group("type"), match.group("id"), uri=identifier)
