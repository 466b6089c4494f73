from mockinterview.interview.emotion import EMOTION_TAGS, parse_emotion_tags
from mockinterview.interview.models import Emotion


def test_leading_tag_sets_emotion_and_is_removed():
    parsed = parse_emotion_tags("[warm smile] Tell me about yourself")
    assert parsed.emotion == Emotion.WARM_SMILE
    assert parsed.clean == "Tell me about yourself"


def test_untagged_text_is_neutral_and_unchanged():
    parsed = parse_emotion_tags("What is your biggest strength?")
    assert parsed.emotion == Emotion.NEUTRAL
    assert parsed.clean == "What is your biggest strength?"


def test_empty_text():
    parsed = parse_emotion_tags("")
    assert parsed.emotion == Emotion.NEUTRAL
    assert parsed.clean == ""


def test_first_tag_in_reading_order_wins():
    parsed = parse_emotion_tags("Got it. [lean forward] So, [warm smile] what happened next?")
    assert parsed.emotion == Emotion.LEAN_FORWARD
    assert parsed.clean == "Got it. So, what happened next?"


def test_every_occurrence_of_every_tag_is_removed():
    raw = " ".join(f"[{tag}] word" for tag in EMOTION_TAGS) + " [slight nod] end"
    parsed = parse_emotion_tags(raw)
    assert "[" not in parsed.clean
    assert parsed.emotion == Emotion.SLIGHT_NOD
    assert parsed.clean.endswith("end")


def test_unknown_brackets_are_ordinary_text():
    parsed = parse_emotion_tags("[thinking] Walk me through [Project X] in detail.")
    assert parsed.emotion == Emotion.THINKING
    assert parsed.clean == "Walk me through [Project X] in detail."


def test_tags_match_case_insensitively():
    parsed = parse_emotion_tags("[Raised Eyebrow] Really? Tell me more.")
    assert parsed.emotion == Emotion.RAISED_EYEBROW
    assert parsed.clean == "Really? Tell me more."


def test_only_tags_leaves_empty_text():
    parsed = parse_emotion_tags("[encouraging nod]")
    assert parsed.emotion == Emotion.ENCOURAGING_NOD
    assert parsed.clean == ""
