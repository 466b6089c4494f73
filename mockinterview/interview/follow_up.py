"""
Follow-up policy: decide whether an answer deserves a probing follow-up.
"""
from ..config import MAX_FOLLOW_UPS, FOLLOW_UP_MIN_WORDS

VAGUE_ANSWERS = frozenset({
    "i don't know",
    "not sure",
    "maybe",
    "i guess",
    "um",
    "uh",
    "i think so",
    "yes",
    "no",
    "ok",
    "okay",
})


def _normalize(answer: str) -> str:
    return answer.strip().lower().rstrip(".!?,").strip()


def needs_follow_up(answer: str, follow_up_count: int) -> bool:
    """
    Return True when the answer is too short or too vague to accept yet.

    Rules, in order: the follow-up cap always wins; fewer than
    FOLLOW_UP_MIN_WORDS whitespace tokens asks for more; a whole-answer match
    against the vague filler list asks for more; anything else is final.
    """
    if follow_up_count >= MAX_FOLLOW_UPS:
        return False
    if len(answer.split()) < FOLLOW_UP_MIN_WORDS:
        return True
    if _normalize(answer) in VAGUE_ANSWERS:
        return True
    return False
