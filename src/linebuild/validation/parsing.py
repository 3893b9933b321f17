"""Verdict parsing for reasoning service answers.

The service is asked for `{"pass": bool, "reasoning": str, "failures": [str]}`
but answers in free-form text. Extraction is an ordered list of strategies,
each returning the parsed JSON value or None; the first non-None wins:

1. the whole text is JSON
2. the interior of a fenced code block is JSON
3. the first balanced {...} substring that is JSON

Exhausting the strategies, or getting something that is not a verdict, is
reported as a ParseFailure value. Nothing here raises.
"""

import json
import re
from collections.abc import Callable
from typing import Any

from pydantic import BaseModel, ConfigDict

_FENCE_PATTERN = re.compile(r"```[a-zA-Z0-9_-]*[ \t]*\n?(.*?)```", re.DOTALL)


class Verdict(BaseModel):
    """Parsed pass/fail answer."""

    passed: bool
    reasoning: str = ""
    failures: list[str] = []

    model_config = ConfigDict(frozen=True)


class ParseFailure(BaseModel):
    """Why an answer could not be turned into a Verdict."""

    message: str

    model_config = ConfigDict(frozen=True)


def parse_whole(text: str) -> Any | None:
    """Strategy 1: parse the entire text."""
    return _loads(text.strip())


def parse_fenced(text: str) -> Any | None:
    """Strategy 2: parse the interior of the first fenced code block that is JSON."""
    for match in _FENCE_PATTERN.finditer(text):
        parsed = _loads(match.group(1).strip())
        if parsed is not None:
            return parsed
    return None


def parse_balanced_object(text: str) -> Any | None:
    """Strategy 3: parse the first balanced {...} substring that is JSON.

    Braces inside JSON string literals are not counted.
    """
    start = text.find("{")
    while start != -1:
        end = _matching_brace(text, start)
        if end is None:
            # every later brace sits inside this unclosed one
            return None
        parsed = _loads(text[start : end + 1])
        if parsed is not None:
            return parsed
        start = text.find("{", start + 1)
    return None


STRATEGIES: list[Callable[[str], Any | None]] = [
    parse_whole,
    parse_fenced,
    parse_balanced_object,
]


def extract_json(text: str) -> Any | None:
    """Run the strategies in order and return the first parsed value, or None."""
    for strategy in STRATEGIES:
        parsed = strategy(text)
        if parsed is not None:
            return parsed
    return None


def parse_verdict(text: object) -> Verdict | ParseFailure:
    """Turn a reasoning service answer into a Verdict.

    Missing `reasoning` / `failures` default to "" / []. A missing or
    non-boolean `pass` is a failure.

    Args:
        text: Raw answer; anything other than a non-empty string is a failure

    Returns:
        Verdict on success, ParseFailure otherwise
    """
    if not isinstance(text, str) or not text.strip():
        return ParseFailure(message="empty or non-text response")

    parsed = extract_json(text)
    if parsed is None:
        return ParseFailure(message="no JSON object found in response")
    if not isinstance(parsed, dict):
        return ParseFailure(message=f"expected a JSON object, got {type(parsed).__name__}")

    verdict = parsed.get("pass")
    if not isinstance(verdict, bool):
        return ParseFailure(message="'pass' must be a boolean")

    reasoning = parsed.get("reasoning")
    failures = parsed.get("failures")

    return Verdict(
        passed=verdict,
        reasoning=reasoning if isinstance(reasoning, str) else "",
        failures=[str(f) for f in failures] if isinstance(failures, list) else [],
    )


def _loads(candidate: str) -> Any | None:
    if not candidate:
        return None
    try:
        return json.loads(candidate)
    except ValueError:
        return None


def _matching_brace(text: str, start: int) -> int | None:
    depth = 0
    in_string = False
    escaped = False

    for index in range(start, len(text)):
        char = text[index]
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue

        if char == '"':
            in_string = True
        elif char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return index

    return None
