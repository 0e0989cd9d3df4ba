"""
Unwrap the JSON payload from a model response.

Structured output normally arrives as bare JSON, but some model versions wrap
it in a markdown fence or a sentence of prose. Only the payload is recovered
here; checking its fields is left to the caller.
"""

import json
import re

FENCE_RE = re.compile(r"```[\w-]*[ \t]*\n?([\s\S]*?)```")

_decoder = json.JSONDecoder()


def extract_json(text: str | None, expect_array: bool = False) -> dict | list | None:
    """
    Find the first JSON object (or array) in ``text``.

    Candidates are tried in order: the whole text, each fenced block, then the
    first decodable value starting at an opening brace or bracket.

    Returns:
        The decoded value, or None when nothing of the expected type is found
    """
    if not text or not text.strip():
        return None

    wanted = list if expect_array else dict
    for candidate in _candidates(text):
        value = _decode(candidate, wanted)
        if value is not None:
            return value
    return _scan(text, wanted)


def _candidates(text: str):
    yield text.strip()
    for match in FENCE_RE.finditer(text):
        yield match.group(1).strip()


def _decode(candidate: str, wanted: type) -> dict | list | None:
    try:
        value = json.loads(candidate)
    except json.JSONDecodeError:
        return None
    return value if isinstance(value, wanted) else None


def _scan(text: str, wanted: type) -> dict | list | None:
    """Decode from each opening delimiter of the wanted type until one parses."""
    opener = "[" if wanted is list else "{"
    start = text.find(opener)
    while start != -1:
        try:
            value, _ = _decoder.raw_decode(text, start)
        except json.JSONDecodeError:
            value = None
        if isinstance(value, wanted):
            return value
        start = text.find(opener, start + 1)
    return None
