"""Query string helpers.

Route matching works on plain ``dict[str, str]`` queries: the first value
wins for repeated keys, matching how path params are merged on top.
"""

from collections.abc import Mapping
from typing import Any
from urllib.parse import parse_qs, urlencode


def parse_query(query_string: str) -> dict[str, str]:
    """Parse a query string into a flat dict, keeping the first value per key.

    Blank values are kept (``?draft=`` → ``{"draft": ""}``).
    """
    if not query_string:
        return {}
    parsed = parse_qs(query_string, keep_blank_values=True)
    return {key: values[0] for key, values in parsed.items()}


def build_query(params: Mapping[str, Any]) -> str:
    """Serialize params into a query string, skipping ``None`` values.

    Lists and tuples are emitted as repeated keys.
    """
    pairs: list[tuple[str, str]] = []
    for key, value in params.items():
        if value is None:
            continue
        if isinstance(value, (list, tuple)):
            pairs.extend((key, str(item)) for item in value)
        else:
            pairs.append((key, str(value)))
    return urlencode(pairs)
