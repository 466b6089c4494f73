"""
Camera capture contract.
"""
import logging
from typing import Protocol, runtime_checkable

logger = logging.getLogger("media")


@runtime_checkable
class CameraController(Protocol):
    """Camera stream owned by the orchestrator for the session's lifetime."""

    @property
    def is_active(self) -> bool: ...

    def start(self) -> None:
        """Start capture; raises if the device is missing or permission is denied."""
        ...

    def stop(self) -> None:
        """Stop capture. Safe to call when already stopped."""
        ...


class HeadlessCamera:
    """Camera for terminal sessions; no frames, only the on/off state."""

    def __init__(self, available: bool = True):
        self.available = available
        self._active = False

    @property
    def is_active(self) -> bool:
        return self._active

    def start(self) -> None:
        if not self.available:
            raise RuntimeError("Camera permission denied")
        if not self._active:
            logger.info("Camera started")
        self._active = True

    def stop(self) -> None:
        if self._active:
            logger.info("Camera stopped")
        self._active = False
