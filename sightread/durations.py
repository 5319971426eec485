"""Duration catalog: note lengths in eighth-note units and their ABC suffixes."""

from dataclasses import dataclass
from fractions import Fraction
from typing import Final

from sightread.errors import ConfigurationError


@dataclass(frozen=True)
class DurationSpec:
    """
    One selectable note duration.

    Attributes:
        symbol: Duration as written in a configuration (``"1/4"``, ``"1"``...).
        units:  Length in eighth-note units (``L:1/8`` in the ABC header).
        suffix: ABC length suffix appended to the pitch. Empty for an eighth.
    """

    symbol: str
    units: Fraction
    suffix: str


#: The eighth note is the header's unit length and is written without a suffix.
BASELINE_SYMBOL: Final[str] = "1/8"

DURATION_CATALOG: Final[dict[str, DurationSpec]] = {
    "1/16": DurationSpec("1/16", Fraction(1, 2), "/2"),
    "1/8": DurationSpec("1/8", Fraction(1), ""),
    "1/4": DurationSpec("1/4", Fraction(2), "2"),
    "1/2": DurationSpec("1/2", Fraction(4), "4"),
    "1": DurationSpec("1", Fraction(8), "8"),
}

BASELINE: Final[DurationSpec] = DURATION_CATALOG[BASELINE_SYMBOL]


def lookup(symbol: str) -> DurationSpec:
    """
    Return the catalog entry for *symbol*.

    Raises:
        ConfigurationError: If *symbol* is not one of the supported durations.
    """
    try:
        return DURATION_CATALOG[symbol]
    except (KeyError, TypeError):
        supported = ", ".join(DURATION_CATALOG)
        raise ConfigurationError(
            f"Unknown note duration {symbol!r}. Use one of: {supported}."
        ) from None


def length_in_units(symbol: str) -> Fraction:
    """Length of *symbol* in eighth-note units."""
    return lookup(symbol).units


def serialization_suffix(symbol: str) -> str:
    """ABC length suffix for *symbol* relative to ``L:1/8``."""
    return lookup(symbol).suffix
