"""
Cursor codec.

A cursor is the primary key of the row that opens a page. Clients treat
it as an opaque string; the server only checks that it is a well-formed
id before using it as the boundary of a range query.
"""

import uuid

from socialnet.constants import MAX_CURSOR_LENGTH
from socialnet.exceptions import ValidationError


def encode_cursor(entity_id: str) -> str:
    """
    Encode an entity id as a cursor.

    Args:
        entity_id: Primary key of the row that opens the next page.

    Returns:
        The cursor string handed to clients.
    """
    return str(entity_id)


def decode_cursor(cursor: str | None) -> str | None:
    """
    Validate a cursor received from a client.

    Args:
        cursor: Cursor from the query string. None or an empty string means
            "start from the beginning of the order".

    Returns:
        The entity id the cursor names, or None for the first page.

    Raises:
        ValidationError: If the cursor is not a well-formed id.

    Example:
        >>> decode_cursor(None) is None
        True
        >>> decode_cursor("not-an-id")
        Traceback (most recent call last):
        ...
        socialnet.exceptions.ValidationError: Invalid cursor
    """
    if cursor is None or cursor == "":
        return None

    if len(cursor) > MAX_CURSOR_LENGTH:
        raise ValidationError("Invalid cursor")

    try:
        return str(uuid.UUID(cursor))
    except ValueError:
        raise ValidationError("Invalid cursor")
