"""Data models for generated exercises."""

from __future__ import annotations

from dataclasses import dataclass
from fractions import Fraction

from sightread.config import ExerciseConfig
from sightread.voices import sounding_name


@dataclass(frozen=True)
class NoteEvent:
    """
    A single ABC note token inside one measure.

    Attributes:
        index:    Scale index the note was drawn at.
        pitch:    ABC pitch (letter plus octave marks), e.g. ``"B,"`` or ``"c"``.
        duration: Duration symbol from the catalog (``"1/8"``, ``"1/4"``...).
        suffix:   ABC length suffix for the duration.
        units:    Length in eighth-note units.
        start:    Offset from the start of the measure in eighth-note units.
        source:   How the walk produced the note: ``"start"``, ``"step"``,
                  ``"reflected"``, ``"clamped"`` or ``"fill"``.
    """

    index: int
    pitch: str
    duration: str
    suffix: str
    units: Fraction
    start: Fraction
    source: str

    @property
    def token(self) -> str:
        return f"{self.pitch}{self.suffix}"


@dataclass(frozen=True)
class Measure:
    """One bar of one voice."""

    voice: str
    notes: tuple[NoteEvent, ...]

    @property
    def units(self) -> Fraction:
        return sum((note.units for note in self.notes), Fraction(0))

    @property
    def abc(self) -> str:
        """
        ABC text of the measure, ending with ``|``.

        Tokens carrying a length suffix are followed by a space unless they
        close the bar; unsuffixed eighths run together so they beam.
        """
        parts: list[str] = []
        last = len(self.notes) - 1
        for position, note in enumerate(self.notes):
            parts.append(note.token)
            if note.suffix and position < last:
                parts.append(" ")
        parts.append("|")
        return "".join(parts)


@dataclass(frozen=True)
class NoteMetadata:
    """Flattened note record for playback and performance scoring."""

    id: str
    voice: str
    measure_index: int
    start_time: Fraction
    units: Fraction
    expected_note: str
    abc_notation: str


@dataclass(frozen=True)
class Exercise:
    """A generated two-voice exercise and its ABC document."""

    config: ExerciseConfig
    treble: tuple[Measure, ...]
    bass: tuple[Measure, ...]
    abc: str

    def note_metadata(self) -> list[NoteMetadata]:
        """
        List every note of both voices, treble first, in time order per voice.

        ``start_time`` is relative to the measure; ``expected_note`` applies
        the key signature (``F#4`` in G major).
        """
        records: list[NoteMetadata] = []
        for measures in (self.treble, self.bass):
            for measure_index, measure in enumerate(measures):
                for note_index, note in enumerate(measure.notes):
                    records.append(
                        NoteMetadata(
                            id=f"{measure.voice}-{measure_index}-{note_index}",
                            voice=measure.voice,
                            measure_index=measure_index,
                            start_time=note.start,
                            units=note.units,
                            expected_note=sounding_name(note.pitch, self.config.key),
                            abc_notation=note.token,
                        )
                    )
        return records
