"""Mirroring resolver: finds playable audio for catalog-only tracks.

Spotify and Apple Music only provide metadata. Their tracks are played by
searching another source with the track's ISRC or title/author.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

from lavasrc.host import AudioReference, SourceRegistry, TrackInfo

logger = logging.getLogger(__name__)

ISRC_PATTERN = "%ISRC%"
QUERY_PATTERN = "%QUERY%"


class MirroringTrackResolver:
    """Expands provider templates into search identifiers and tries them in order."""

    def __init__(self, providers: list[str]):
        self.providers = list(providers)

    def queries(self, track: TrackInfo) -> Iterator[str]:
        for provider in self.providers:
            if ISRC_PATTERN in provider:
                if not track.isrc:
                    logger.debug(f"Skipping provider {provider!r}: track has no ISRC")
                    continue
                provider = provider.replace(ISRC_PATTERN, track.isrc)
            yield provider.replace(QUERY_PATTERN, f"{track.title} {track.author}")

    def resolve(self, track: TrackInfo, registry: SourceRegistry) -> AudioReference | None:
        """Return the first reference any registered source can load, or None."""
        for query in self.queries(track):
            reference = registry.load_item(query)
            if reference is not None:
                logger.info(f"Mirrored '{track.title}' via {query!r}")
                return reference
        logger.info(f"No mirror found for '{track.title}' by '{track.author}'")
        return None
