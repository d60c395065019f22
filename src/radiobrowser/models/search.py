"""Station search parameters."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import asdict, dataclass, fields, replace
from typing import Any

from radiobrowser.errors import ValidationError

DEFAULT_LIMIT = 100


@dataclass(frozen=True)
class SearchParams:
    """Filters for the ``stations/search`` endpoint.

    Fields left as None are not sent. ``limit``, ``offset`` and
    ``hidebroken`` always carry a value.

    Attributes:
        name: Station name to search for.
        name_exact: Whether to match the name exactly.
        country: Country name to filter by.
        country_exact: Whether to match the country exactly.
        countrycode: ISO 3166-1 alpha-2 country code.
        state: State or region to filter by.
        state_exact: Whether to match the state exactly.
        language: Language to filter by.
        language_exact: Whether to match the language exactly.
        tag: Tag to filter by.
        tag_exact: Whether to match the tag exactly.
        tag_list: Comma-separated list of tags, all of which must match.
        bitrate_min: Minimum bitrate in kbps.
        bitrate_max: Maximum bitrate in kbps.
        order: Field to order by.
        reverse: Whether to reverse the order.
        offset: Number of results to skip.
        limit: Maximum number of results (1-100000).
        hidebroken: Whether to hide stations failing the last check.
    """

    name: str | None = None
    name_exact: bool | None = None
    country: str | None = None
    country_exact: bool | None = None
    countrycode: str | None = None
    state: str | None = None
    state_exact: bool | None = None
    language: str | None = None
    language_exact: bool | None = None
    tag: str | None = None
    tag_exact: bool | None = None
    tag_list: str | None = None
    bitrate_min: int | None = None
    bitrate_max: int | None = None
    order: str | None = None
    reverse: bool | None = None
    offset: int = 0
    limit: int = DEFAULT_LIMIT
    hidebroken: bool = True

    @classmethod
    def field_names(cls) -> frozenset[str]:
        """Return the accepted parameter names."""
        return frozenset(f.name for f in fields(cls))

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> SearchParams:
        """Merge a mapping of filters over the defaults.

        Raises:
            ValidationError: If the mapping has keys that are not search parameters.
        """
        unknown = set(data) - cls.field_names()
        if unknown:
            raise ValidationError(f"unknown search parameter(s): {', '.join(sorted(unknown))}")
        return cls(**data)

    def merged(self, **overrides: Any) -> SearchParams:
        """Return a copy with ``overrides`` applied.

        Raises:
            ValidationError: If an override is not a search parameter.
        """
        unknown = set(overrides) - self.field_names()
        if unknown:
            raise ValidationError(f"unknown search parameter(s): {', '.join(sorted(unknown))}")
        return replace(self, **overrides)

    def to_dict(self) -> dict[str, Any]:
        """Convert to the JSON request body, dropping unset fields."""
        return {key: value for key, value in asdict(self).items() if value is not None}
