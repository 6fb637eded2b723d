"""
Front matter parsing.

A content document looks like::

    ---
    title: Hello
    date: 2024-01-02
    ---
    # Body in Markdown

The raw bytes are split on the ``---`` delimiter into exactly three
segments: an empty leading segment, the YAML metadata and the body.
"""

from dataclasses import dataclass
from datetime import datetime, date, timezone

import yaml

from .errors import InvalidFrontMatterError, UnmarshalFrontMatterError

DELIMITER = '---'


@dataclass(frozen=True)
class FrontMatter:
    """Typed metadata block of a content document."""

    title: str
    date: datetime
    description: str = ''
    draft: bool = False
    layout: str = ''


def split_document(raw, path=None):
    """
    Split a raw document into its metadata and body segments.

    Args:
        raw: Document contents as bytes (or an already decoded string)
        path: Source path, used for error reporting

    Returns:
        Tuple of (metadata_text, body_text)
    """
    if isinstance(raw, bytes):
        try:
            text = raw.decode('utf-8-sig')
        except UnicodeDecodeError as e:
            raise InvalidFrontMatterError(f"document is not valid UTF-8: {e}", path) from e
    else:
        text = raw.lstrip('\ufeff')

    parts = text.split(DELIMITER, 2)
    if len(parts) < 3:
        raise InvalidFrontMatterError(
            f"expected front matter enclosed by two '{DELIMITER}' lines", path)
    if parts[0].strip():
        raise InvalidFrontMatterError(
            f"document must start with a '{DELIMITER}' line", path)

    return parts[1], parts[2]


def _coerce_date(value, path):
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        text = value.strip()
        # fromisoformat only accepts a trailing 'Z' from Python 3.11 on
        if text[-1:] in ('Z', 'z'):
            text = text[:-1] + '+00:00'
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            raise UnmarshalFrontMatterError(f"'date' is not a valid date: {value!r}", path)
    else:
        raise UnmarshalFrontMatterError(f"'date' must be a date, got {type(value).__name__}", path)

    # Naive values are read as UTC so that every page sorts on the same axis
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _string_field(metadata, key, path):
    value = metadata.get(key)
    if value is None:
        return ''
    if not isinstance(value, str):
        raise UnmarshalFrontMatterError(
            f"'{key}' must be a string, got {type(value).__name__}", path)
    return value


def parse_front_matter(metadata_text, path=None):
    """Deserialize the YAML metadata segment into a FrontMatter record."""
    try:
        metadata = yaml.safe_load(metadata_text)
    except (yaml.YAMLError, ValueError, TypeError) as e:
        # The timestamp constructor raises ValueError for dates such as 2024-02-30
        raise UnmarshalFrontMatterError(f"invalid YAML front matter: {e}", path) from e

    if not isinstance(metadata, dict):
        raise UnmarshalFrontMatterError("front matter must be a mapping", path)

    if metadata.get('date') is None:
        raise UnmarshalFrontMatterError("'date' is required", path)

    draft = metadata.get('draft', False)
    if draft is None:
        draft = False
    if not isinstance(draft, bool):
        raise UnmarshalFrontMatterError(
            f"'draft' must be a boolean, got {type(draft).__name__}", path)

    return FrontMatter(
        title=_string_field(metadata, 'title', path),
        date=_coerce_date(metadata['date'], path),
        description=_string_field(metadata, 'description', path),
        draft=draft,
        layout=_string_field(metadata, 'layout', path),
    )


def parse_document(raw, path=None):
    """Parse a raw document into (FrontMatter, body_text)."""
    metadata_text, body = split_document(raw, path)
    return parse_front_matter(metadata_text, path), body
