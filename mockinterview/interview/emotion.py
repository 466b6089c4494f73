"""
Stage-direction parsing for generated interviewer text.

The question service embeds bracketed cues such as ``[warm smile]`` in its
output. They drive the avatar's display emotion and must never be shown or
spoken, so they are stripped here.
"""
import re
from dataclasses import dataclass
from typing import Dict

from .models import Emotion

# Closed vocabulary of stage directions
EMOTION_TAGS: Dict[str, Emotion] = {
    "slight nod": Emotion.SLIGHT_NOD,
    "thoughtful pause": Emotion.THOUGHTFUL_PAUSE,
    "warm smile": Emotion.WARM_SMILE,
    "thinking": Emotion.THINKING,
    "encouraging nod": Emotion.ENCOURAGING_NOD,
    "lean forward": Emotion.LEAN_FORWARD,
    "raised eyebrow": Emotion.RAISED_EYEBROW,
}

_TAG_PATTERN = re.compile(
    r"\[\s*(" + "|".join(re.escape(tag) for tag in EMOTION_TAGS) + r")\s*\]",
    re.IGNORECASE,
)
_SPACE_RUNS = re.compile(r"[ \t]{2,}")


@dataclass(frozen=True)
class ParsedText:
    """Generated text with stage directions removed."""
    clean: str
    emotion: Emotion


def parse_emotion_tags(raw: str) -> ParsedText:
    """
    Strip recognized stage directions and derive the display emotion.

    The first recognized tag in reading order decides the emotion. Every
    occurrence of every recognized tag is removed; anything else in brackets
    is ordinary text and stays.

    Args:
        raw: Generated text, possibly containing tags

    Returns:
        ParsedText with the cleaned text and emotion
    """
    if not raw:
        return ParsedText(clean="", emotion=Emotion.NEUTRAL)

    first = _TAG_PATTERN.search(raw)
    if first is None:
        return ParsedText(clean=raw, emotion=Emotion.NEUTRAL)

    emotion = EMOTION_TAGS[first.group(1).lower()]
    clean = _TAG_PATTERN.sub("", raw)
    clean = _SPACE_RUNS.sub(" ", clean).strip()
    return ParsedText(clean=clean, emotion=emotion)
