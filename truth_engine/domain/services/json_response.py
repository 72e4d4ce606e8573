"""Permissive JSON recovery from model output."""

import json
import re
from typing import Any, Dict, Iterator

from ..errors import ParseError

_FENCED_BLOCK = re.compile(r"```(?:json)?\s*([\s\S]*?)\s*```", re.IGNORECASE)


def _balanced_regions(text: str) -> Iterator[str]:
    """Yield each balanced ``{...}`` region, scanning left to right."""
    start = text.find("{")
    while start != -1:
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
            elif char == '"':
                in_string = True
            elif char == "{":
                depth += 1
            elif char == "}":
                depth -= 1
                if depth == 0:
                    yield text[start:index + 1]
                    break
        start = text.find("{", start + 1)


def _candidates(text: str) -> Iterator[str]:
    yield text.strip()
    match = _FENCED_BLOCK.search(text)
    if match:
        yield match.group(1).strip()
    yield from _balanced_regions(text)


def parse_json_object(text: str) -> Dict[str, Any]:
    """Recover a JSON object from free-form model output.

    Tries a direct parse, then a fenced code block, then balanced brace
    regions in order of appearance.

    Raises:
        ParseError: If no JSON object can be recovered
    """
    if not text or not text.strip():
        raise ParseError("Empty model response")
    for candidate in _candidates(text):
        try:
            value = json.loads(candidate)
        except json.JSONDecodeError:
            continue
        if isinstance(value, dict):
            return value
    raise ParseError("No valid JSON object found in response")
