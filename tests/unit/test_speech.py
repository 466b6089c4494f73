import asyncio
import threading

import pytest

from mockinterview.infrastructure.media import CameraController, HeadlessCamera
from mockinterview.infrastructure.speech import (
    CallbackSpeechBridge, SpeechIOController, TextSpeechController,
)


class FakeEngine:
    def __init__(self, speech_supported=True, tts_supported=True, finish_speech=True):
        self.speech_supported = speech_supported
        self.tts_supported = tts_supported
        self.finish_speech = finish_speech
        self.spoken = []
        self.on_result = None
        self.aborted = 0
        self.speech_cancelled = 0

    def speak(self, text, on_end):
        self.spoken.append(text)
        if self.finish_speech:
            # Engines report completion from their own thread
            threading.Thread(target=on_end).start()

    def cancel_speech(self):
        self.speech_cancelled += 1

    def start_recognition(self, on_result):
        self.on_result = on_result

    def stop_recognition(self, on_end):
        on_end()

    def abort_recognition(self):
        self.aborted += 1


def test_text_controller_collects_typed_lines():
    printed = []
    speech = TextSpeechController(output=printed.append)

    async def scenario():
        await speech.speak("Hello?")
        speech.feed("dropped, not listening")
        speech.start_listening()
        speech.feed("first part")
        speech.feed("   ")
        speech.feed("second part")
        return await speech.stop_listening()

    assert asyncio.run(scenario()) == "first part second part"
    assert printed == ["🤖 Hello?"]
    assert speech.listening is False


def test_text_controller_cancel_clears_transcript():
    speech = TextSpeechController(output=lambda _: None)
    speech.start_listening()
    speech.feed("something")
    speech.cancel()
    assert speech.transcript == ""
    assert isinstance(speech, SpeechIOController)


def test_bridge_speak_resolves_from_engine_thread():
    engine = FakeEngine()
    bridge = CallbackSpeechBridge(engine)
    asyncio.run(asyncio.wait_for(bridge.speak("Tell me about yourself"), timeout=2))
    assert engine.spoken == ["Tell me about yourself"]


def test_bridge_skips_speech_without_tts():
    engine = FakeEngine(tts_supported=False)
    asyncio.run(CallbackSpeechBridge(engine).speak("Hello"))
    assert engine.spoken == []


def test_bridge_transcript_combines_final_and_interim():
    engine = FakeEngine()
    bridge = CallbackSpeechBridge(engine)

    async def scenario():
        bridge.start_listening()
        engine.on_result("I led", True)
        engine.on_result("the migra", False)
        assert bridge.transcript == "I led the migra"
        engine.on_result("the migration", True)
        return await asyncio.wait_for(bridge.stop_listening(), timeout=2)

    assert asyncio.run(scenario()) == "I led the migration"


def test_bridge_cancel_releases_pending_speech():
    engine = FakeEngine(finish_speech=False)
    bridge = CallbackSpeechBridge(engine)

    async def scenario():
        bridge.start_listening()
        task = asyncio.create_task(bridge.speak("A long question"))
        await asyncio.sleep(0)
        bridge.cancel()
        bridge.cancel()
        await asyncio.wait_for(task, timeout=2)

    asyncio.run(scenario())
    assert engine.aborted == 1
    assert engine.speech_cancelled == 2


def test_headless_camera():
    camera = HeadlessCamera()
    assert isinstance(camera, CameraController)
    camera.start()
    assert camera.is_active
    camera.stop()
    camera.stop()
    assert not camera.is_active


def test_headless_camera_denied():
    camera = HeadlessCamera(available=False)
    with pytest.raises(RuntimeError, match="permission"):
        camera.start()
    assert not camera.is_active
