"""YouTube search and lyrics backend.

Does not load audio itself. Search results and lyrics refer to tracks played
by the host's own YouTube source manager, so that manager must be registered
in the host before this backend can be activated.
"""

from __future__ import annotations

from lavasrc.core.handles import HostHandle
from lavasrc.host import (
    AudioLyricsManager,
    AudioSearchManager,
    LyricsRequest,
    SearchRequest,
    TrackInfo,
    YoutubeAudioSourceManager,
)

SEARCH_PREFIXES = ("ytsearch:", "ytmsearch:")
SEARCH_TYPES = ("track", "album", "playlist", "artist")


class YoutubeSearchManager(AudioSearchManager, AudioLyricsManager):
    def __init__(self, youtube: HostHandle[YoutubeAudioSourceManager], country_code: str):
        self._youtube = youtube
        self.country_code = country_code or "US"

    def load_search(self, query: str, types: tuple[str, ...] = ()) -> SearchRequest | None:
        for prefix in SEARCH_PREFIXES:
            if query.startswith(prefix):
                source = self._youtube.get().source_name
                return SearchRequest(source, query[len(prefix) :], types or SEARCH_TYPES)
        return None

    def load_lyrics(self, track: TrackInfo) -> LyricsRequest | None:
        source = self._youtube.get().source_name
        if track.source_name != source:
            return None
        return LyricsRequest(source, track.identifier, track.title, track.author)
