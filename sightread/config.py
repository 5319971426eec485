"""Exercise configuration, catalogs of selectable values, and validation."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from fractions import Fraction
from typing import Any, Final

from sightread.durations import DURATION_CATALOG, DurationSpec, lookup
from sightread.errors import ConfigurationError

logger = logging.getLogger(__name__)

MIN_INTERVAL = 1  # unison
MAX_INTERVAL = 8  # octave

AVAILABLE_KEYS: Final[tuple[str, ...]] = (
    # Major keys
    "C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B",
    "Db", "Eb", "Gb", "Ab", "Bb",
    # Minor keys
    "Am", "A#m", "Bm", "Cm", "C#m", "Dm", "D#m", "Em", "Fm", "F#m", "Gm", "G#m",
    "Bbm", "Ebm",
)

AVAILABLE_TIME_SIGNATURES: Final[tuple[str, ...]] = ("4/4", "3/4", "2/4", "6/8", "12/8", "2/2")

AVAILABLE_NOTE_DURATIONS: Final[dict[str, str]] = {
    "1/16": "16th notes",
    "1/8": "8th notes",
    "1/4": "Quarter notes",
    "1/2": "Half notes",
    "1": "Whole notes",
}

AVAILABLE_INTERVALS: Final[dict[int, str]] = {
    1: "Unison",
    2: "2nd",
    3: "3rd",
    4: "4th",
    5: "5th",
    6: "6th",
    7: "7th",
    8: "8th",
}

_TIME_SIGNATURE_RE = re.compile(r"([0-9]+)/([0-9]+)")


def parse_time_signature(time_signature: str) -> tuple[int, int]:
    """
    Split ``"N/D"`` into ``(beats_per_measure, beat_unit)``.

    Raises:
        ConfigurationError: If either part is missing, non-numeric or zero.
    """
    match = _TIME_SIGNATURE_RE.fullmatch(str(time_signature).strip())
    if not match:
        raise ConfigurationError(
            f"Time signature {time_signature!r} must look like 'N/D' with positive integers."
        )
    beats, beat_unit = int(match.group(1)), int(match.group(2))
    if beats < 1 or beat_unit < 1:
        raise ConfigurationError(
            f"Time signature {time_signature!r} must use positive integers."
        )
    return beats, beat_unit


def measure_length_in_units(time_signature: str) -> Fraction:
    """Length of one measure of *time_signature* in eighth-note units."""
    beats, beat_unit = parse_time_signature(time_signature)
    return beats * Fraction(8, beat_unit)


def _as_tuple(values: Any) -> tuple[Any, ...]:
    # Sets have no stable order across interpreter runs; seeded output must.
    if isinstance(values, (set, frozenset)):
        return tuple(sorted(values, key=repr))
    if isinstance(values, (str, bytes)) or not isinstance(values, Iterable):
        return (values,)
    return tuple(values)


@dataclass(frozen=True)
class ExerciseConfig:
    """
    Settings for one generated exercise.

    Attributes:
        measure_count:  Number of measures per voice.
        key:            Key signature written into the ``K:`` field.
        time_signature: Meter as ``"N/D"``.
        intervals:      Allowed melodic intervals, 1 (unison) through 8 (octave).
        note_durations: Allowed duration symbols from the duration catalog.
    """

    measure_count: int = 8
    key: str = "C"
    time_signature: str = "4/4"
    intervals: tuple[int, ...] = field(default=(1, 2, 3, 4, 5))
    note_durations: tuple[str, ...] = field(default=("1/8", "1/4"))

    def __post_init__(self) -> None:
        object.__setattr__(self, "intervals", _as_tuple(self.intervals))
        object.__setattr__(self, "note_durations", _as_tuple(self.note_durations))

    @classmethod
    def from_settings(cls, settings: Mapping[str, Any]) -> ExerciseConfig:
        """
        Build a config from a front-end settings mapping.

        Accepts the keys used by the web client (``measures``, ``key``,
        ``timeSignature``, ``intervals``, ``noteDurations``). Missing keys fall
        back to the dataclass defaults; unrelated keys are ignored.
        """
        defaults = cls()
        return cls(
            measure_count=settings.get("measures", defaults.measure_count),
            key=settings.get("key", defaults.key),
            time_signature=settings.get("timeSignature", defaults.time_signature),
            intervals=settings.get("intervals", defaults.intervals),
            note_durations=settings.get("noteDurations", defaults.note_durations),
        )

    def with_overrides(self, **changes: Any) -> ExerciseConfig:
        """
        Return a copy with the non-``None`` *changes* applied.

        ``None`` always means "keep the current value", so this can never
        clear a field; build a new ExerciseConfig for that.
        """
        return replace(self, **{name: value for name, value in changes.items() if value is not None})

    # ------------------------------------------------------------------
    # Derived values
    # ------------------------------------------------------------------

    @property
    def beats_per_measure(self) -> int:
        return parse_time_signature(self.time_signature)[0]

    @property
    def beat_unit(self) -> int:
        return parse_time_signature(self.time_signature)[1]

    @property
    def meter(self) -> str:
        """Normalised ``N/D`` text for the ``M:`` field (``" 04/4"`` becomes ``"4/4"``)."""
        beats, beat_unit = parse_time_signature(self.time_signature)
        return f"{beats}/{beat_unit}"

    @property
    def measure_units(self) -> Fraction:
        """Required length of every measure in eighth-note units."""
        return measure_length_in_units(self.time_signature)

    @property
    def duration_specs(self) -> tuple[DurationSpec, ...]:
        return tuple(lookup(symbol) for symbol in self.note_durations)

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def validate(self) -> None:
        """
        Check every field, raising on the first problem found.

        Raises:
            ConfigurationError: If the config cannot produce a valid exercise.
        """
        try:
            self._validate()
        except ConfigurationError as exc:
            logger.debug("Rejected exercise config %r: %s", self, exc)
            raise

    def _validate(self) -> None:
        if isinstance(self.measure_count, bool) or not isinstance(self.measure_count, int):
            raise ConfigurationError(
                f"measure_count must be an integer, got {self.measure_count!r}."
            )
        if self.measure_count < 1:
            raise ConfigurationError(f"measure_count must be at least 1, got {self.measure_count}.")

        if self.key not in AVAILABLE_KEYS:
            raise ConfigurationError(
                f"Unknown key {self.key!r}. Use one of: {', '.join(AVAILABLE_KEYS)}."
            )

        units = self.measure_units
        if units.denominator != 1:
            raise ConfigurationError(
                f"Time signature {self.time_signature!r} does not fill a whole number of eighth notes."
            )

        if not self.intervals:
            raise ConfigurationError("At least one interval must be allowed.")
        for interval in self.intervals:
            if (
                isinstance(interval, bool)
                or not isinstance(interval, int)
                or not MIN_INTERVAL <= interval <= MAX_INTERVAL
            ):
                raise ConfigurationError(
                    f"Interval {interval!r} is outside {MIN_INTERVAL}-{MAX_INTERVAL}."
                )

        if not self.note_durations:
            raise ConfigurationError(
                f"At least one note duration must be allowed ({', '.join(DURATION_CATALOG)})."
            )
        for symbol in self.note_durations:
            lookup(symbol)
