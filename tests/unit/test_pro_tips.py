from mockinterview.interview.pro_tips import GENERIC_TIP, TIP_RULES, select_tip


def _tip_for(keyword):
    for keywords, tip in TIP_RULES:
        if keyword in keywords:
            return tip
    raise AssertionError(f"no rule for {keyword}")


def test_introduction_question():
    assert select_tip("So, tell me about yourself.") == _tip_for("tell me about yourself")


def test_matching_is_case_insensitive():
    assert select_tip("Describe a CHALLENGE you faced") == _tip_for("challenge")


def test_earlier_rule_wins_when_several_match():
    question = "Tell me about a conflict that turned into a difficult challenge"
    assert select_tip(question) == _tip_for("challenge")


def test_technical_question():
    assert select_tip("How would you approach the system design of a chat app?") == _tip_for("system design")


def test_generic_fallback():
    assert select_tip("What do you enjoy doing on weekends?") == GENERIC_TIP
    assert select_tip("") == GENERIC_TIP
