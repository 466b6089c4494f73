"""Infrastructure components for the mock interview system.

This module contains low-level technical components that provide
foundational capabilities for the interview orchestrator.
"""

# LLM infrastructure
from .llm import VertexRestClient, EdgeFunctionClient

# Speech and camera
from .speech import SpeechIOController, CallbackSpeechBridge, TextSpeechController
from .media import CameraController, HeadlessCamera

# Progress data
from .data import JsonProgressStore

__all__ = [
    # LLM clients
    "VertexRestClient", "EdgeFunctionClient",

    # Speech and camera
    "SpeechIOController", "CallbackSpeechBridge", "TextSpeechController",
    "CameraController", "HeadlessCamera",

    # Progress
    "JsonProgressStore",
]
