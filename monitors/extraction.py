"""Selection helpers for HTML pages and JSON payloads."""

import json
from typing import Any

from bs4 import BeautifulSoup
from jsonpath_ng import parse as parse_jsonpath
from jsonpath_ng.exceptions import JSONPathError
from soupsieve import SelectorSyntaxError

from monitors.exceptions import ExtractionError

# Selectors that mean "use the whole page"
WHOLE_PAGE_SELECTORS = frozenset({"", "*", "body"})


def select_fragment(html: str, selector: str) -> str:
    """Return the part of a page a CSS selector points at.

    The inner HTML of every match is joined with newlines. An empty
    selector, ``*`` or ``body`` returns the page unchanged.

    Raises:
        ExtractionError: If the selector is invalid or matched nothing
    """
    selector = selector.strip()
    if selector in WHOLE_PAGE_SELECTORS:
        return html

    soup = BeautifulSoup(html, "html.parser")
    try:
        elements = soup.select(selector)
    except SelectorSyntaxError as e:
        raise ExtractionError(f"Failed to parse selector: {e}") from e

    content = "\n".join(element.decode_contents() for element in elements)
    if not content:
        raise ExtractionError(f"No matching elements found for {selector!r}")
    return content


def page_title(html: str) -> str | None:
    """Text of the page's <title> tag, if any."""
    soup = BeautifulSoup(html, "html.parser")
    if soup.title is None:
        return None
    return soup.title.get_text().strip()


def format_json_value(value: Any) -> str:
    """Render a JSON value for comparison and display.

    Strings are used as-is, everything else becomes compact JSON.
    """
    if isinstance(value, str):
        return value
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def _follow_dot_path(payload: Any, path: str) -> list[Any]:
    current = payload
    for part in path.strip(".").split("."):
        if isinstance(current, dict):
            if part not in current:
                return []
            current = current[part]
        elif isinstance(current, list):
            try:
                current = current[int(part)]
            except (ValueError, IndexError):
                return []
        else:
            return []
    return [current]


def find_json_matches(payload: Any, path: str) -> list[Any]:
    """Evaluate a path against a decoded JSON payload.

    Paths starting with ``$`` are JSONPath expressions; anything else is a
    dot path such as ``data.items.0.price``. An empty path matches the
    whole payload.

    Raises:
        ExtractionError: If a JSONPath expression cannot be parsed
    """
    path = path.strip()
    if not path:
        return [payload]

    if path.startswith("$"):
        try:
            expression = parse_jsonpath(path)
        except JSONPathError as e:
            raise ExtractionError(f"JSONPath selector error: {e}") from e
        return [match.value for match in expression.find(payload)]

    return _follow_dot_path(payload, path)


def extract_json_value(payload: Any, path: str) -> str | None:
    """Extract a comparable string from a payload.

    Returns:
        The single match, ``[a, b, ...]`` for several matches, or None
        when nothing matched
    """
    matches = find_json_matches(payload, path)
    if not matches:
        return None
    if len(matches) == 1:
        return format_json_value(matches[0])
    return "[" + ", ".join(format_json_value(match) for match in matches) + "]"
