"""Level presets: progressively harder default settings for guided practice.

Difficulty progression:

- Levels 1-2: C major, quarter and half notes, steps and thirds
- Levels 3-5: longer exercises, eighth notes and fourths
- Levels 6-7: F major in 3/4, then D major with sixteenth notes
- Levels 8-10: minor and flat keys, compound meters, every duration and interval
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Final

from sightread.config import ExerciseConfig

logger = logging.getLogger(__name__)

MIN_LEVEL = 1
MAX_LEVEL = 10

ALL_DURATIONS = ("1/16", "1/8", "1/4", "1/2", "1")


@dataclass(frozen=True)
class LevelPreset:
    """
    Default settings for one practice level.

    Attributes:
        number:         Level number, 1-10.
        name:           Short display name.
        description:    One-line summary of what the level practises.
        key:            Key signature.
        time_signature: Meter as ``"N/D"``.
        measures:       Measures per exercise.
        tempo:          Suggested practice tempo in BPM.
        note_durations: Allowed duration symbols.
        intervals:      Allowed interval values.
    """

    number: int
    name: str
    description: str
    key: str
    time_signature: str
    measures: int
    tempo: int
    note_durations: tuple[str, ...]
    intervals: tuple[int, ...]

    def to_config(self, **overrides: Any) -> ExerciseConfig:
        """
        Build an ExerciseConfig from this preset.

        Keyword arguments named like ExerciseConfig fields replace the preset
        value; ``None`` values are ignored so unset CLI options pass through.
        """
        base = ExerciseConfig(
            measure_count=self.measures,
            key=self.key,
            time_signature=self.time_signature,
            intervals=self.intervals,
            note_durations=self.note_durations,
        )
        return base.with_overrides(**overrides)


LEVEL_CONFIGURATIONS: Final[dict[int, LevelPreset]] = {
    preset.number: preset
    for preset in (
        LevelPreset(1, "Beginner - Single Notes", "One hand at a time with simple rhythms in C Major",
                    "C", "4/4", 4, 80, ("1/4",), (1, 2, 3)),
        LevelPreset(2, "Basic - Half Notes", "Introduce longer note values, still alternating hands",
                    "C", "4/4", 4, 80, ("1/4", "1/2"), (1, 2, 3)),
        LevelPreset(3, "Basic - Eighth Notes", "Begin coordinating both hands with simple bass and melody",
                    "C", "4/4", 4, 80, ("1/4", "1/2"), (1, 2, 3)),
        LevelPreset(4, "Elementary - Two Hands", "Begin coordinating both hands with simple bass and melody",
                    "C", "4/4", 4, 90, ("1/4", "1/2"), (1, 2, 3)),
        LevelPreset(5, "Elementary - Eighth Notes", "Add sharps and flats, practice more complex intervals",
                    "C", "4/4", 6, 80, ("1/4", "1/8"), (1, 2, 3, 4)),
        LevelPreset(6, "Developing - Flat Keys & 3/4", "Explore flat keys and waltz time signature",
                    "F", "3/4", 6, 110, ("1/4", "1/8", "1/2"), (1, 2, 3, 4, 5)),
        LevelPreset(7, "Progressing - Sixteenth Notes", "Master faster rhythms and multiple time signatures",
                    "D", "4/4", 8, 120, ("1/16", "1/8", "1/4", "1/2"), (1, 2, 3, 4, 5, 6)),
        LevelPreset(8, "Advanced - Minor Keys", "Practice advanced chord progressions and minor keys",
                    "Am", "4/4", 8, 120, ALL_DURATIONS, (1, 2, 3, 4, 5, 6, 7)),
        LevelPreset(9, "Proficient - Complex Time", "Handle compound meters and walking bass patterns",
                    "Bb", "6/8", 8, 130, ALL_DURATIONS, (1, 2, 3, 4, 5, 6, 7, 8)),
        LevelPreset(10, "Expert - Advanced Keys", "Navigate chromatic passages and all key signatures",
                    "E", "12/8", 12, 140, ALL_DURATIONS, (1, 2, 3, 4, 5, 6, 7, 8)),
    )
}


def is_valid_level(level_number: Any) -> bool:
    """True if *level_number* is an integer between 1 and 10."""
    return (
        isinstance(level_number, int)
        and not isinstance(level_number, bool)
        and MIN_LEVEL <= level_number <= MAX_LEVEL
    )


def get_level_configuration(level_number: Any) -> LevelPreset | None:
    """Return the preset for *level_number*, or ``None`` if it is not a valid level."""
    if not is_valid_level(level_number):
        logger.warning("Invalid level number: %r. Must be between %d and %d.", level_number, MIN_LEVEL, MAX_LEVEL)
        return None
    return LEVEL_CONFIGURATIONS[level_number]


def get_all_level_numbers() -> list[int]:
    return sorted(LEVEL_CONFIGURATIONS)


def get_level_metadata(level_number: Any) -> dict[str, str] | None:
    """Name and description of a level, or ``None`` if it is not a valid level."""
    preset = get_level_configuration(level_number)
    if preset is None:
        return None
    return {"name": preset.name, "description": preset.description}
