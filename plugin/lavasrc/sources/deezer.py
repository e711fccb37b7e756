"""Deezer backend: source (with stream decryption), search and lyrics."""

from __future__ import annotations

import re

from lavasrc.host import (
    AudioLyricsManager,
    AudioReference,
    AudioSearchManager,
    AudioSourceManager,
    LyricsRequest,
    SearchRequest,
    TrackInfo,
)

SEARCH_PREFIX = "dzsearch:"
ISRC_PREFIX = "dzisrc:"
SEARCH_TYPES = ("track", "album", "playlist", "artist")

URL_PATTERN = re.compile(
    r"^https?://(?:www\.)?deezer\.com/(?:[a-z]{2}(?:-[a-z]{2})?/)?"
    r"(?P<type>track|album|playlist|artist)/(?P<id>\d+)"
)


class DeezerAudioSourceManager(AudioSourceManager, AudioSearchManager, AudioLyricsManager):
    def __init__(self, master_decryption_key: str):
        if not master_decryption_key:
            raise ValueError("Deezer master decryption key must be set")
        self._master_decryption_key = master_decryption_key

    @property
    def source_name(self) -> str:
        return "deezer"

    def load_item(self, identifier: str) -> AudioReference | None:
        if identifier.startswith(SEARCH_PREFIX):
            return AudioReference(self.source_name, "search", identifier[len(SEARCH_PREFIX) :])
        if identifier.startswith(ISRC_PREFIX):
            return AudioReference(self.source_name, "isrc", identifier[len(ISRC_PREFIX) :])

        match = URL_PATTERN.match(identifier)
        if not match:
            return None
        kind, item_id = match.group("type"), match.group("id")
        return AudioReference(
            self.source_name, kind, item_id, uri=f"https://www.deezer.com/{kind}/{item_id}"
        )

    def load_search(self, query: str, types: tuple[str, ...] = ()) -> SearchRequest | None:
        if not query.startswith(SEARCH_PREFIX):
            return None
        return SearchRequest(self.source_name, query[len(SEARCH_PREFIX) :], types or SEARCH_TYPES)

    def load_lyrics(self, track: TrackInfo) -> LyricsRequest | None:
        if track.source_name != self.source_name:
            return None
        return LyricsRequest(self.source_name, track.identifier, track.title, track.author)
