"""Apple Music catalog backend: source and search."""

from __future__ import annotations

import re

from lavasrc.core.handles import HostHandle
from lavasrc.host import (
    AudioReference,
    AudioSearchManager,
    AudioSourceManager,
    SearchRequest,
    SourceRegistry,
    TrackInfo,
)
from lavasrc.sources.mirror import MirroringTrackResolver

SEARCH_PREFIX = "amsearch:"
SEARCH_TYPES = ("song", "album", "playlist", "artist")

URL_PATTERN = re.compile(
    r"^https?://(?:www\.)?music\.apple\.com/(?P<country>[a-zA-Z]{2})/"
    r"(?P<type>album|playlist|artist|song)(?:/[^/?]+)?/(?P<id>[a-zA-Z0-9.\-]+)"
    r"(?:\?i=(?P<track>\d+))?"
)


class AppleMusicSourceManager(AudioSourceManager, AudioSearchManager):
    # 0 means "no page limit"
    DEFAULT_PLAYLIST_PAGE_LIMIT = 0
    DEFAULT_ALBUM_PAGE_LIMIT = 0

    def __init__(
        self,
        providers: list[str],
        media_api_token: str,
        country_code: str,
        player: HostHandle[SourceRegistry],
    ):
        if not media_api_token:
            raise ValueError("Apple Music media API token must be set")
        self._media_api_token = media_api_token
        self.country_code = country_code or "us"
        self._player = player
        self._resolver = MirroringTrackResolver(providers)
        self.playlist_page_limit = self.DEFAULT_PLAYLIST_PAGE_LIMIT
        self.album_page_limit = self.DEFAULT_ALBUM_PAGE_LIMIT

    @property
    def source_name(self) -> str:
        return "applemusic"

    def set_playlist_page_limit(self, limit: int) -> None:
        self.playlist_page_limit = limit

    def set_album_page_limit(self, limit: int) -> None:
        self.album_page_limit = limit

    def load_item(self, identifier: str) -> AudioReference | None:
        if identifier.startswith(SEARCH_PREFIX):
            return AudioReference(self.source_name, "search", identifier[len(SEARCH_PREFIX) :])

        match = URL_PATTERN.match(identifier)
        if not match:
            return None
        kind, item_id = match.group("type"), match.group("id")
        # An album link with ?i= points at a single song on that album
        if kind == "album" and match.group("track"):
            kind, item_id = "song", match.group("track")
        return AudioReference(self.source_name, kind, item_id, uri=identifier)

    def load_search(self, query: str, types: tuple[str, ...] = ()) -> SearchRequest | None:
        if not query.startswith(SEARCH_PREFIX):
            return None
        return SearchRequest(self.source_name, query[len(SEARCH_PREFIX) :], types or SEARCH_TYPES)

    def mirror(self, track: TrackInfo) -> AudioReference | None:
        return self._resolver.resolve(track, self._player.get())
