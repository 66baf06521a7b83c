"""Audio generation package for narrated outputs."""

from app.core.audio.tts_service import TTSService, TTSResult

__all__ = ["TTSService", "TTSResult"]
