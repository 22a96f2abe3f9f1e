import uuid

from ..exceptions import NotFoundOrForbidden


def parse_entity_id(raw_id: str, not_found_message: str) -> uuid.UUID:
    """A malformed id cannot belong to the caller, so it is reported like any other miss."""
    try:
        return uuid.UUID(raw_id)
    except (TypeError, ValueError):
        raise NotFoundOrForbidden(not_found_message) from None
