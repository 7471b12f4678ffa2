"""
Tolerant JSON extraction for text-generation output.

Language models asked for "ONLY valid JSON" still wrap it in prose or code
fences, so the object is cut out between the first "{" and the last "}"
before parsing.
"""

import json
from typing import Any


def extract_json_object(text: str) -> dict[str, Any]:
    """Return the JSON object embedded in *text*.

    Raises:
        ValueError: if no brace-delimited object is present, it does not parse,
                    or it parses to something other than an object.
    """
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end < start:
        raise ValueError(f"No JSON object found in response: {text!r}")
    parsed = json.loads(text[start : end + 1])
    if not isinstance(parsed, dict):
        raise ValueError(f"Expected a JSON object, got {type(parsed).__name__}")
    return parsed
