from __future__ import annotations

FILTERED_PHRASES = (
    "i'm an ai",
    "as an ai",
    "as a language model",
    "i cannot",
    "i'm unable",
    "the user said",
)


def is_filtered(reply: str) -> bool:
    lowered = reply.lower()
    return any(phrase in lowered for phrase in FILTERED_PHRASES)
