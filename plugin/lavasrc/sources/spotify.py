"""Spotify catalog backend: source, search and lyrics.

Spotify provides metadata only; playable audio comes from the mirroring
resolver, which needs the host's source registry once startup is done.
"""

from __future__ import annotations

import logging
import re

from lavasrc.core.handles import HostHandle
from lavasrc.host import (
    AudioLyricsManager,
    AudioReference,
    AudioSearchManager,
    AudioSourceManager,
    LyricsRequest,
    SearchRequest,
    SourceRegistry,
    TrackInfo,
)
from lavasrc.sources.mirror import MirroringTrackResolver

logger = logging.getLogger(__name__)

SEARCH_PREFIX = "spsearch:"
RECOMMENDATIONS_PREFIX = "sprec:"
SEARCH_TYPES = ("track", "album", "playlist", "artist")

URL_PATTERN = re.compile(
    r"^(?:https?://(?:www\.)?open\.spotify\.com/(?:intl-[a-zA-Z-]+/)?|spotify:)"
    r"(?P<type>track|album|playlist|artist)[/:](?P<id>[a-zA-Z0-9]+)"
)


class SpotifySourceManager(AudioSourceManager, AudioSearchManager, AudioLyricsManager):
    DEFAULT_PLAYLIST_PAGE_LIMIT = 6
    DEFAULT_ALBUM_PAGE_LIMIT = 6

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        sp_dc: str | None,
        country_code: str,
        player: HostHandle[SourceRegistry],
        resolver: MirroringTrackResolver,
    ):
        if not client_id:
            raise ValueError("Spotify client id must be set")
        if not client_secret:
            raise ValueError("Spotify client secret must be set")
        self._client_id = client_id
        self._client_secret = client_secret
        self._sp_dc = sp_dc
        self.country_code = country_code or "US"
        self._player = player
        self._resolver = resolver
        self.playlist_page_limit = self.DEFAULT_PLAYLIST_PAGE_LIMIT
        self.album_page_limit = self.DEFAULT_ALBUM_PAGE_LIMIT

    @property
    def source_name(self) -> str:
        return "spotify"

    def set_playlist_page_limit(self, limit: int) -> None:
        self.playlist_page_limit = limit

    def set_album_page_limit(self, limit: int) -> None:
        self.album_page_limit = limit

    def load_item(self, identifier: str) -> AudioReference | None:
        if identifier.startswith(SEARCH_PREFIX):
            return AudioReference(self.source_name, "search", identifier[len(SEARCH_PREFIX) :])
        if identifier.startswith(RECOMMENDATIONS_PREFIX):
            return AudioReference(
                self.source_name, "recommendations", identifier[len(RECOMMENDATIONS_PREFIX) :]
            )

        match = URL_PATTERN.match(identifier)
        if not match:
            return None
        kind, item_id = match.group("type"), match.group("id")
        return AudioReference(
            self.source_name, kind, item_id, uri=f"https://open.spotify.com/{kind}/{item_id}"
        )

    def load_search(self, query: str, types: tuple[str, ...] = ()) -> SearchRequest | None:
        if not query.startswith(SEARCH_PREFIX):
            return None
        return SearchRequest(self.source_name, query[len(SEARCH_PREFIX) :], types or SEARCH_TYPES)

    def load_lyrics(self, track: TrackInfo) -> LyricsRequest | None:
        if track.source_name != self.source_name:
            return None
        if not self._sp_dc:
            # Lyrics need a logged-in web session cookie
            logger.debug("Spotify lyrics requested but sp_dc is not configured")
            return None
        return LyricsRequest(self.source_name, track.identifier, track.title, track.author)

    def mirror(self, track: TrackInfo) -> AudioReference | None:
        """Find playable audio for a Spotify track through the host's sources."""
        return self._resolver.resolve(track, self._player.get())
