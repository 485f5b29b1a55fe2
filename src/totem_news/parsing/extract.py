"""Locate and parse the JSON object embedded in a model response.

Instruction-following models do not reliably return "JSON only": the object
may be wrapped in prose or a markdown fence, or carry cosmetic deviations
such as unquoted keys and single-quoted strings. :func:`extract` runs an
ordered cascade of increasingly permissive strategies and stops at the first
one that yields an object.
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import TypeAlias

from totem_news.parsing.sanitize import sanitize

logger = logging.getLogger(__name__)

JSONValue: TypeAlias = "dict[str, JSONValue] | list[JSONValue] | str | int | float | bool | None"
JSONObject: TypeAlias = "dict[str, JSONValue]"

_FENCE_RE = re.compile(r"```[ \t]*[A-Za-z0-9_+-]*[ \t]*\r?\n?(.*?)```", re.DOTALL)
_BARE_KEY_RE = re.compile(r"(\s*)([A-Za-z0-9_]+)(\s*:)")


class ExtractionError(ValueError):
    """Raised when no strategy could recover a JSON object."""


@dataclass(frozen=True)
class _Source:
    """Sanitized response text plus the content of its first fenced block."""

    text: str
    fenced: str | None

    @property
    def candidate(self) -> str:
        return self.fenced if self.fenced is not None else self.text


def extract(raw_text: str) -> JSONObject:
    """Return the JSON object embedded in *raw_text*.

    Raises :class:`ExtractionError` once every strategy is exhausted.
    """
    text = sanitize(raw_text)
    fenced = _find_fenced_block(text)
    source = _Source(text=text, fenced=sanitize(fenced) if fenced is not None else None)

    for name, strategy in _STRATEGIES:
        result = strategy(source)
        if result is not None:
            logger.debug("Extracted JSON object via %s strategy", name)
            return result
        logger.debug("JSON extraction strategy %s failed", name)

    raise ExtractionError("Failed to parse JSON from model response")


# ------------------------------------------------------------------
# Strategies
# ------------------------------------------------------------------


def _parse_bare_object(source: _Source) -> JSONObject | None:
    trimmed = source.text.strip()
    if trimmed.startswith("{") and trimmed.endswith("}"):
        return _loads_object(trimmed)
    return None


def _parse_fenced_block(source: _Source) -> JSONObject | None:
    if source.fenced is None:
        return None
    return _loads_object(source.fenced)


def _parse_candidate(source: _Source) -> JSONObject | None:
    return _loads_object(source.candidate)


def _parse_brace_slice(source: _Source) -> JSONObject | None:
    sliced = _slice_outer_braces(source.candidate)
    if sliced is None:
        return None
    return _loads_object(sanitize(sliced))


def _parse_repaired(source: _Source) -> JSONObject | None:
    # Leading prose ("Here's the summary: {...}") would otherwise open a bogus
    # single-quoted string, so repair the braced region when there is one.
    text = _slice_outer_braces(source.candidate) or source.candidate
    text = _repair_literals(text)
    text = _slice_outer_braces(text) or text
    return _loads_object(sanitize(text))


_STRATEGIES: tuple[tuple[str, Callable[[_Source], JSONObject | None]], ...] = (
    ("bare_object", _parse_bare_object),
    ("fenced_block", _parse_fenced_block),
    ("candidate", _parse_candidate),
    ("brace_slice", _parse_brace_slice),
    ("repair", _parse_repaired),
)


# ------------------------------------------------------------------
# Helpers
# ------------------------------------------------------------------


def _loads_object(text: str) -> JSONObject | None:
    """Parse *text* as JSON, returning ``None`` unless it is an object."""
    try:
        value = json.loads(text)
    except ValueError:
        return None
    return value if isinstance(value, dict) else None


def _find_fenced_block(text: str) -> str | None:
    match = _FENCE_RE.search(text)
    return match.group(1) if match else None


def _slice_outer_braces(text: str) -> str | None:
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end <= start:
        return None
    return text[start : end + 1]


def _repair_literals(text: str) -> str:
    """Quote bare keys and rewrite single-quoted strings as JSON strings.

    Both rewrites apply outside string literals only, so a value such as
    ``"BTC rose, ETH: flat"`` or ``"it's up"`` passes through untouched. An
    unterminated single-quoted literal is emitted unchanged.
    """
    out: list[str] = []
    i = 0
    n = len(text)
    while i < n:
        ch = text[i]
        if ch == '"':
            end = _skip_double_quoted(text, i)
            out.append(text[i:end])
            i = end
        elif ch == "'":
            literal, end = _read_single_quoted(text, i)
            out.append(literal)
            i = end
        elif ch in "{,":
            out.append(ch)
            i += 1
            match = _BARE_KEY_RE.match(text, i)
            if match:
                space, key, colon = match.groups()
                out.append(f'{space}"{key}"{colon}')
                i = match.end()
        else:
            out.append(ch)
            i += 1
    return "".join(out)


def _skip_double_quoted(text: str, start: int) -> int:
    i = start + 1
    while i < len(text):
        if text[i] == "\\":
            i += 2
            continue
        if text[i] == '"':
            return i + 1
        i += 1
    return len(text)


def _read_single_quoted(text: str, start: int) -> tuple[str, int]:
    buf: list[str] = []
    i = start + 1
    while i < len(text):
        ch = text[i]
        if ch == "\\" and i + 1 < len(text):
            nxt = text[i + 1]
            # \' is not a valid JSON escape; everything else passes through
            buf.append("'" if nxt == "'" else ch + nxt)
            i += 2
            continue
        if ch == "'":
            return '"' + "".join(buf) + '"', i + 1
        buf.append('\\"' if ch == '"' else ch)
        i += 1
    return text[start:], len(text)
