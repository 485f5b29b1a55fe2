"""Normalize punctuation artifacts that break JSON parsing."""

import re

_DOUBLE_QUOTES = str.maketrans(dict.fromkeys("\u201c\u201d\u201e\u201f", '"'))
_SINGLE_QUOTES = str.maketrans(dict.fromkeys("\u2018\u2019\u201a\u201b", "'"))
# zero-width space, non-breaking space
_SPACES = str.maketrans(dict.fromkeys("\u200b\u00a0", " "))

# A comma followed only by commas/whitespace up to a closer. Matching the whole
# run keeps the substitution idempotent (",,}" -> "}" in one pass).
_TRAILING_COMMA_RE = re.compile(r",[\s,]*(?=[}\]])")


def sanitize(text: str) -> str:
    """Return *text* with smart quotes, odd spaces and trailing commas fixed.

    Steps run in a fixed order so the comma pass sees normalized text.
    """
    text = text.translate(_DOUBLE_QUOTES)
    text = text.translate(_SINGLE_QUOTES)
    text = text.translate(_SPACES)
    return _TRAILING_COMMA_RE.sub(lambda m: m.group(0).replace(",", ""), text)
