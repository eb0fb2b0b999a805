"""Guarded field accessors for loosely-typed API payloads.

Each accessor checks presence and type explicitly and falls back to the
field's zero value, so a record can be built field by field from partial data.
"""

import json
import re
from datetime import datetime, timezone

_FRACTION = re.compile(r'\.(\d+)')
_INTEGER = re.compile(r'-?[0-9]+')


def lookup(data, *path):
    """Walk nested dictionaries.

    Args:
        data: Source object
        *path (str): Keys to follow

    Returns:
        The value found, or None if any step is missing or not a dict
    """
    node = data
    for key in path:
        if not isinstance(node, dict) or key not in node:
            return None
        node = node[key]
    return node


def as_str(value, default=''):
    """Scalars become strings; anything else yields the default."""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, (int, float)):
        return str(value)
    return default


def as_int(value, default=None):
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str) and _INTEGER.fullmatch(value.strip()):
        return int(value.strip())
    return default


def as_bool(value, default=False):
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.lower() in ('true', 'false'):
        return value.lower() == 'true'
    return default


def as_datetime(value):
    """Parse an ISO-8601 timestamp into an aware datetime.

    CxOne returns up to nine fractional digits and a ``Z`` suffix; both are
    normalised before parsing. Naive timestamps are taken as UTC.

    Returns:
        datetime or None
    """
    if not isinstance(value, str) or not value.strip():
        return None

    text = value.strip()
    if text.endswith(('Z', 'z')):
        text = text[:-1] + '+00:00'
    text = _FRACTION.sub(lambda m: '.' + m.group(1)[:6].ljust(6, '0'), text, count=1)

    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def as_str_list(value):
    """Lists of scalars become lists of strings; items named by a ``name`` key are unwrapped."""
    if not isinstance(value, list):
        return []
    items = []
    for item in value:
        if isinstance(item, dict):
            item = item.get('name')
        text = as_str(item, default=None)
        if text is not None:
            items.append(text)
    return items


def as_tags(value):
    """Tag mappings keep their order; missing values become empty strings."""
    if not isinstance(value, dict):
        return {}
    return {str(key): as_str(tag_value) for key, tag_value in value.items()}


def as_text(value):
    """Render any JSON value as display text; empty containers become ''."""
    if value is None:
        return ''
    if isinstance(value, (dict, list)):
        return json.dumps(value, separators=(',', ':')) if value else ''
    return as_str(value)


def flatten_tags(tags):
    """Render tags as ``key`` or ``key:value`` entries joined by ``;``.

    >>> flatten_tags({'a': '', 'b': 'v'})
    'a;b:v'
    """
    return ';'.join(key if not value else f"{key}:{value}" for key, value in tags.items())


def join_values(values):
    return ';'.join(values)


def format_datetime(value):
    return value.isoformat() if value else ''
