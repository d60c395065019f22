"""Validation of station search parameters."""

from collections.abc import Mapping
from typing import Any

from radiobrowser.errors import ValidationError
from radiobrowser.models.search import DEFAULT_LIMIT

MIN_LIMIT = 1
MAX_LIMIT = 100_000

VALID_ORDER_FIELDS = frozenset(
    {
        "name",
        "url",
        "homepage",
        "favicon",
        "tags",
        "country",
        "state",
        "language",
        "votes",
        "codec",
        "bitrate",
        "lastcheckok",
        "lastchecktime",
        "clicktimestamp",
        "clickcount",
        "clicktrend",
        "random",
    }
)


def validate_search_params(params: Mapping[str, Any]) -> None:
    """Check search parameters before they are sent.

    Checks run in order and the first failure is raised. ``params`` is
    never modified.

    Raises:
        ValidationError: If limit is not an int in [1, 100000] or order is unknown.
    """
    limit = params.get("limit", DEFAULT_LIMIT)
    # bool is an int subclass but never a meaningful limit
    if isinstance(limit, bool) or not isinstance(limit, int) or not MIN_LIMIT <= limit <= MAX_LIMIT:
        raise ValidationError(f"limit must be between {MIN_LIMIT} and {MAX_LIMIT}, got {limit!r}")

    order = params.get("order")
    if order is not None and order not in VALID_ORDER_FIELDS:
        raise ValidationError(f"invalid order field: {order!r}")
