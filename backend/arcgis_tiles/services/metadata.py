"""Typed access to a tileset's loosely-typed metadata map.

Tile servers store metadata as whatever the tileset author wrote, so any
key may be absent or hold an unexpected type. The accessor encodes the read
policy for each kind of value in one place:

- Optional strings fall back to a default (empty string) on absence or
  type mismatch.
- Required integers (the zoom range) raise MissingZoomRangeError.
- Required numeric arrays (the bounds) raise MissingBoundsError when absent
  and MalformedBoundsError when present but unusable.

Example:
    Read metadata for a service document:
        >>> accessor = MetadataAccessor({"name": "Roads", "minzoom": "0"})
        >>> accessor.get_string("name")
        'Roads'
        >>> accessor.get_string("attribution")
        ''
        >>> accessor.get_int("minzoom")
        0
"""

from __future__ import annotations

import math
import numbers
from collections.abc import Mapping, Sequence
from typing import Any

from arcgis_tiles.core import errors


class MetadataAccessor:
    """Read values out of a metadata mapping with an explicit policy.

    Args:
        metadata: The tileset's metadata map.
        service_id: Identifier reported in error details.
    """

    def __init__(
        self,
        metadata: Mapping[str, Any],
        service_id: str | None = None,
    ) -> None:
        self._metadata = metadata
        self._service_id = service_id

    def _details(self, key: str, value: Any = None) -> dict[str, Any]:
        details: dict[str, Any] = {"key": key}
        if self._service_id is not None:
            details["service_id"] = self._service_id
        if value is not None:
            details["value"] = repr(value)
        return details

    def get_string(self, key: str, default: str = "") -> str:
        """Return a string value, or ``default`` if absent or not a string."""
        value = self._metadata.get(key)
        if isinstance(value, str):
            return value
        return default

    def get_int(self, key: str) -> int:
        """Return a required integer value.

        Integers, floats with no fractional part and strings holding an
        integer are accepted. Booleans are rejected.

        Args:
            key: Metadata key to read.

        Returns:
            The value as an int.

        Raises:
            MissingZoomRangeError: If the key is absent or not coercible
                to an integer.
        """
        value = self._metadata.get(key)
        if value is None:
            raise errors.MissingZoomRangeError(
                "Tileset metadata is missing a required integer",
                self._details(key),
            )

        if isinstance(value, bool):
            pass
        elif isinstance(value, numbers.Integral):
            return int(value)
        elif isinstance(value, float) and value.is_integer():
            return int(value)
        elif isinstance(value, str):
            try:
                return int(value.strip())
            except ValueError:
                pass

        raise errors.MissingZoomRangeError(
            "Tileset metadata value is not an integer",
            self._details(key, value),
        )

    def get_float_array(self, key: str, length: int) -> list[float]:
        """Return a required fixed-length array of floats.

        Sequences of numbers and comma-separated strings are accepted.

        Args:
            key: Metadata key to read.
            length: Exact number of elements required.

        Returns:
            The values as a list of floats.

        Raises:
            MissingBoundsError: If the key is absent.
            MalformedBoundsError: If the value is not a sequence of
                ``length`` numbers.
        """
        value = self._metadata.get(key)
        if value is None:
            raise errors.MissingBoundsError(
                "Tileset metadata is missing required bounds",
                self._details(key),
            )

        return to_float_array(value, length, self._details(key, value))


def to_float_array(
    value: Any,
    length: int,
    details: dict[str, Any] | None = None,
) -> list[float]:
    """Coerce a sequence of numbers to a list of ``length`` floats.

    Raises:
        MissingBoundsError: If ``value`` is None.
        MalformedBoundsError: If ``value`` is not a sequence of ``length``
            numbers.
    """
    if value is None:
        raise errors.MissingBoundsError("Bounds are required", details)

    items: Sequence[Any]
    if isinstance(value, str):
        items = value.split(",")
    elif isinstance(value, Sequence) and not isinstance(
        value, (bytes, bytearray)
    ):
        items = value
    else:
        raise errors.MalformedBoundsError(
            "Bounds must be a sequence of numbers", details
        )

    if len(items) != length:
        raise errors.MalformedBoundsError(
            f"Bounds must have exactly {length} values, got {len(items)}",
            details,
        )

    result: list[float] = []
    for item in items:
        if isinstance(item, bool):
            raise errors.MalformedBoundsError(
                "Bounds must contain only numbers", details
            )
        try:
            number = float(item if isinstance(item, numbers.Real) else str(item))
        except (ValueError, OverflowError):
            raise errors.MalformedBoundsError(
                "Bounds must contain only numbers", details
            ) from None
        if not math.isfinite(number):
            raise errors.MalformedBoundsError(
                "Bounds must be finite numbers", details
            )
        result.append(number)
    return result
