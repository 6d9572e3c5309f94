"""
Confidence Scoring
==================

Heuristic signal of how much textual evidence backed a triage decision.
Not a calibrated probability.
"""

from src.incidents.domain.classifier import combine_text

BASE_CONFIDENCE = 0.5
MAX_CONFIDENCE = 1.0

# (minimum description length exceeded, bonus); bonuses accumulate
LENGTH_BONUSES = ((100, 0.2), (300, 0.1))

TECHNICAL_TERMS = ("error", "exception", "timeout", "failure", "crash", "bug", "issue")
TERM_BONUS = 0.1
MAX_TERM_BONUS = 0.3


def score_confidence(title: str, description: str) -> float:
    """
    Score triage confidence in [0.5, 1.0].

    Longer descriptions and more distinct technical terms in the title or
    description raise the score from the 0.5 base.
    """
    confidence = BASE_CONFIDENCE

    for threshold, bonus in LENGTH_BONUSES:
        if len(description) > threshold:
            confidence += bonus

    text = combine_text(title, description)
    term_count = sum(1 for term in TECHNICAL_TERMS if term in text)
    confidence += min(term_count * TERM_BONUS, MAX_TERM_BONUS)

    return round(min(confidence, MAX_CONFIDENCE), 2)
