"""Speech recognition and synthesis controllers."""

from .controller import (
    SpeechIOController,
    CallbackSpeechEngine,
    CallbackSpeechBridge,
    TextSpeechController,
)

__all__ = [
    "SpeechIOController",
    "CallbackSpeechEngine",
    "CallbackSpeechBridge",
    "TextSpeechController",
]
