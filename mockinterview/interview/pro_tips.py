"""
Coaching tips matched to the question being asked.
"""
from typing import List, Tuple

# Checked in order; the first group with a matching keyword wins.
TIP_RULES: List[Tuple[Tuple[str, ...], str]] = [
    (
        ("tell me about yourself", "introduce yourself", "your background", "your journey",
         "brought you to where you are"),
        "Pro tip: Keep your introduction to about 90 seconds. Go present, past, future "
        "and end with why this role fits.",
    ),
    (
        ("challenge", "obstacle", "difficult", "setback", "failure", "failed"),
        "Pro tip: Use the STAR method. Spend most of your time on the actions you took "
        "and close with a measurable result.",
    ),
    (
        ("leadership", "lead a", "led a", "take initiative", "took initiative", "mentor"),
        "Pro tip: Show how you influenced people, not just tasks. Mention how you aligned "
        "the team and what changed because of it.",
    ),
    (
        ("weakness", "improve on", "area of improvement", "areas for improvement"),
        "Pro tip: Pick a real but non-critical weakness and spend most of the answer on "
        "the concrete steps you are taking to improve it.",
    ),
    (
        ("why do you want", "why this company", "why our company", "why us", "why this role",
         "why are you interested", "why should we hire"),
        "Pro tip: Connect something specific about the company or role to your own "
        "experience and goals. Avoid generic praise.",
    ),
    (
        ("conflict", "disagree", "disagreement", "difficult coworker", "difficult colleague"),
        "Pro tip: Stay neutral about the other person. Focus on how you listened, found "
        "common ground and what the relationship looked like afterwards.",
    ),
    (
        ("system design", "design a", "architecture", "scalab", "technical", "algorithm",
         "database", "trade-off", "tradeoff"),
        "Pro tip: Clarify requirements first, then think out loud. Name the trade-offs "
        "you considered and why you chose your approach.",
    ),
]

GENERIC_TIP = (
    "Pro tip: Structure your answer with a clear beginning, middle and end, and back it "
    "up with a specific example."
)


def select_tip(question_text: str) -> str:
    """Return the coaching tip for a question, or the generic tip if nothing matches."""
    lowered = question_text.lower()
    for keywords, tip in TIP_RULES:
        if any(keyword in lowered for keyword in keywords):
            return tip
    return GENERIC_TIP
