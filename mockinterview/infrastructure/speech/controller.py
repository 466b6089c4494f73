"""
Speech I/O controllers.

The orchestrator talks to speech through ``SpeechIOController``: synthesis is
an awaitable that finishes when playback ends, recognition is started, then
stopped with an awaitable returning the final transcript.
"""
import asyncio
import logging
import threading
from typing import Callable, Optional, Protocol, runtime_checkable

logger = logging.getLogger("speech")


@runtime_checkable
class SpeechIOController(Protocol):
    """Speech recognition and synthesis as seen by the orchestrator."""

    is_speech_supported: bool
    is_tts_supported: bool

    async def speak(self, text: str) -> None:
        """Speak text; returns when playback ends or is cancelled."""
        ...

    def start_listening(self) -> None:
        ...

    async def stop_listening(self) -> str:
        """Stop recognition and return the final transcript."""
        ...

    @property
    def transcript(self) -> str:
        """Transcript captured so far (final plus interim)."""
        ...

    def cancel(self) -> None:
        """Abort recognition and synthesis. Safe to call repeatedly."""
        ...


@runtime_checkable
class CallbackSpeechEngine(Protocol):
    """A callback-style engine, e.g. a browser or vendor speech SDK binding."""

    speech_supported: bool
    tts_supported: bool

    def speak(self, text: str, on_end: Callable[[], None]) -> None: ...

    def cancel_speech(self) -> None: ...

    def start_recognition(self, on_result: Callable[[str, bool], None]) -> None: ...

    def stop_recognition(self, on_end: Callable[[], None]) -> None: ...

    def abort_recognition(self) -> None: ...


class CallbackSpeechBridge:
    """
    Adapts a CallbackSpeechEngine to the awaitable SpeechIOController contract.

    Engine callbacks may arrive on any thread; they are marshalled back onto
    the event loop that issued the request.
    """

    def __init__(self, engine: CallbackSpeechEngine):
        self.engine = engine
        self._lock = threading.Lock()
        self._final = ""
        self._interim = ""
        self._listening = False
        self._speech_done: Optional[asyncio.Future] = None
        self._recognition_done: Optional[asyncio.Future] = None

    @property
    def is_speech_supported(self) -> bool:
        return bool(self.engine.speech_supported)

    @property
    def is_tts_supported(self) -> bool:
        return bool(self.engine.tts_supported)

    @property
    def transcript(self) -> str:
        with self._lock:
            return (self._final + self._interim).strip()

    @staticmethod
    def _resolver(future: asyncio.Future) -> Callable[[], None]:
        loop = future.get_loop()

        def _resolve():
            if not future.done():
                future.set_result(None)

        def _callback():
            loop.call_soon_threadsafe(_resolve)

        return _callback

    async def speak(self, text: str) -> None:
        if not self.is_tts_supported:
            return
        done = asyncio.get_running_loop().create_future()
        self._speech_done = done
        self.engine.speak(text, on_end=self._resolver(done))
        try:
            await done
        finally:
            if self._speech_done is done:
                self._speech_done = None

    def _on_result(self, text: str, is_final: bool) -> None:
        with self._lock:
            if is_final:
                self._final += text + " "
                self._interim = ""
            else:
                self._interim = text

    def start_listening(self) -> None:
        if not self.is_speech_supported:
            logger.warning("Speech recognition not supported; ignoring start_listening")
            return
        with self._lock:
            self._final = ""
            self._interim = ""
        self._listening = True
        self.engine.start_recognition(on_result=self._on_result)

    async def stop_listening(self) -> str:
        if not self._listening:
            return self.transcript
        self._listening = False
        done = asyncio.get_running_loop().create_future()
        self._recognition_done = done
        self.engine.stop_recognition(on_end=self._resolver(done))
        try:
            await done
        finally:
            self._recognition_done = None
        return self.transcript

    def cancel(self) -> None:
        if self._listening:
            self._listening = False
            try:
                self.engine.abort_recognition()
            except Exception as e:
                logger.warning("Failed to abort recognition: %s", e)
        try:
            self.engine.cancel_speech()
        except Exception as e:
            logger.warning("Failed to cancel speech: %s", e)
        for future in (self._speech_done, self._recognition_done):
            if future is not None and not future.done():
                future.set_result(None)


class TextSpeechController:
    """
    Terminal stand-in for speech: questions are printed, answers are typed.

    ``feed`` appends a typed line to the transcript while listening.
    """

    is_speech_supported = True
    is_tts_supported = True

    def __init__(self, output: Callable[[str], None] = print, prefix: str = "🤖"):
        self.output = output
        self.prefix = prefix
        self._lines = []
        self._listening = False

    @property
    def transcript(self) -> str:
        return " ".join(self._lines).strip()

    @property
    def listening(self) -> bool:
        return self._listening

    async def speak(self, text: str) -> None:
        self.output(f"{self.prefix} {text}")

    def start_listening(self) -> None:
        self._lines = []
        self._listening = True

    def feed(self, text: str) -> None:
        if not self._listening:
            logger.debug("Dropping typed text while not listening")
            return
        if text.strip():
            self._lines.append(text.strip())

    async def stop_listening(self) -> str:
        self._listening = False
        return self.transcript

    def cancel(self) -> None:
        self._listening = False
        self._lines = []
