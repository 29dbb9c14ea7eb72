"""Identifier parsing for path parameters."""

from uuid import UUID

from core.exceptions import InvalidIdError


def parse_id(raw_id: str, resource: str) -> UUID:
    """Parse a path identifier, raising a 404-mapped error when malformed.

    Malformed ids are reported as "not found" rather than as request
    validation failures so clients see the same status for unknown and
    unparseable ids.
    """
    try:
        return UUID(raw_id)
    except (ValueError, AttributeError, TypeError):
        raise InvalidIdError(resource, str(raw_id)) from None
