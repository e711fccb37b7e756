"""Flowery text-to-speech backend: source only.

Identifiers look like ``ftts://Hello%20world``. The synthesis request URL is
built here; fetching the audio is left to the host's HTTP stream loader.
"""

from __future__ import annotations

from urllib.parse import unquote

import httpx

from lavasrc.host import AudioReference, AudioSourceManager

PREFIX = "ftts://"
API_BASE = "https://api.flowery.pw/v1/tts"


class FloweryTTSSourceManager(AudioSourceManager):
    DEFAULT_SILENCE = 0
    DEFAULT_SPEED = 1.0
    DEFAULT_AUDIO_FORMAT = "mp3"

    def __init__(self, voice: str | None):
        self.voice = voice
        self.translate = False
        self.silence = self.DEFAULT_SILENCE
        self.speed = self.DEFAULT_SPEED
        self.audio_format = self.DEFAULT_AUDIO_FORMAT

    @property
    def source_name(self) -> str:
        return "flowerytts"

    def set_translate(self, translate: bool) -> None:
        self.translate = translate

    def set_silence(self, silence: int) -> None:
        self.silence = silence

    def set_speed(self, speed: float) -> None:
        self.speed = speed

    def set_audio_format(self, audio_format: str) -> None:
        self.audio_format = audio_format

    def build_request_url(self, text: str) -> httpx.URL:
        """Build the synthesis URL for a piece of text with the configured voice settings."""
        params: dict[str, str | int | float] = {"text": text}
        if self.voice:
            params["voice"] = self.voice
        params["translate"] = str(self.translate).lower()
        params["silence"] = self.silence
        params["speed"] = self.speed
        params["audio_format"] = self.audio_format
        return httpx.URL(API_BASE, params=params)

    def load_item(self, identifier: str) -> AudioReference | None:
        if not identifier.startswith(PREFIX):
            return None
        text = unquote(identifier[len(PREFIX) :]).strip()
        if not text:
            return None
        return AudioReference(
            self.source_name, "tts", text, uri=str(self.build_request_url(text))
        )
