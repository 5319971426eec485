"""Measure walk: one bar of one voice as a bounded random walk over scale indices.

Each measure starts with an eighth note on the voice's start index. The walk
then repeatedly draws an allowed interval, picks a direction, bounces off the
voice's range limits and spends an allowed duration that still fits in the
bar. When nothing fits, the rest of the bar is filled with eighths on the
current pitch.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from fractions import Fraction

import numpy as np

from sightread.durations import BASELINE, DurationSpec
from sightread.sheet_models import Measure, NoteEvent
from sightread.voices import VoiceDescriptor, spell_pitch

logger = logging.getLogger(__name__)

SOURCE_START = "start"
SOURCE_STEP = "step"
SOURCE_REFLECTED = "reflected"
SOURCE_CLAMPED = "clamped"
SOURCE_FILL = "fill"


@dataclass(frozen=True)
class WalkStep:
    """
    One decided move of the walk.

    Attributes:
        interval: Interval value drawn (1 = unison ... 8 = octave).
        offset:   Signed index offset before range handling.
        index:    Index after reflection/clamping.
        source:   ``"step"``, ``"reflected"`` or ``"clamped"``.
    """

    interval: int
    offset: int
    index: int
    source: str


def reflect_index(current: int, offset: int, voice: VoiceDescriptor) -> tuple[int, str]:
    """
    Apply *offset* to *current*, bouncing off the voice's range limits.

    A move past the top is replayed downward from *current* and a move past
    the bottom is replayed upward, with the same magnitude. If the replayed
    move still leaves the range, the index is clamped to the bound it crossed.

    Returns:
        ``(index, source)`` where source is ``"step"``, ``"reflected"`` or
        ``"clamped"``.
    """
    candidate = current + offset
    source = SOURCE_STEP

    if voice.highest_index is not None and candidate > voice.highest_index:
        candidate = current - abs(offset)
        source = SOURCE_REFLECTED
    if candidate < voice.lowest_index:
        candidate = current + abs(offset)
        source = SOURCE_REFLECTED

    if candidate < voice.lowest_index:
        return voice.lowest_index, SOURCE_CLAMPED
    if voice.highest_index is not None and candidate > voice.highest_index:
        return voice.highest_index, SOURCE_CLAMPED
    return candidate, source


def next_step(
    current: int,
    voice: VoiceDescriptor,
    intervals: Sequence[int],
    rng: np.random.Generator,
) -> WalkStep:
    """Draw an interval and a direction, and resolve the resulting index."""
    interval = int(intervals[int(rng.integers(len(intervals)))])
    offset = interval - 1
    if rng.random() < 0.5:
        offset = -offset
    index, source = reflect_index(current, offset, voice)
    return WalkStep(interval=interval, offset=offset, index=index, source=source)


def _note(index: int, voice: VoiceDescriptor, spec: DurationSpec, start: Fraction, source: str) -> NoteEvent:
    return NoteEvent(
        index=index,
        pitch=spell_pitch(index, voice),
        duration=spec.symbol,
        suffix=spec.suffix,
        units=spec.units,
        start=start,
        source=source,
    )


def generate_measure(
    voice: VoiceDescriptor,
    required_units: Fraction | int,
    intervals: Sequence[int],
    durations: Sequence[DurationSpec],
    rng: np.random.Generator,
) -> Measure:
    """
    Generate one measure for *voice* lasting exactly *required_units* eighths.

    Args:
        voice:          Range and notation parameters of the voice.
        required_units: Measure length in eighth-note units (a whole number).
        intervals:      Allowed interval values, 1-8. Must not be empty.
        durations:      Allowed durations. Must not be empty.
        rng:            Random source; all draws come from it.

    Raises:
        ValueError: If *required_units* is not a positive whole number or
            either choice list is empty.
    """
    required = Fraction(required_units)
    if required < BASELINE.units or required.denominator != 1:
        raise ValueError(f"Measure length must be a positive whole number of eighths, got {required}.")
    if not intervals or not durations:
        raise ValueError("intervals and durations must both be non-empty.")

    current = voice.start_index
    notes: list[NoteEvent] = [_note(current, voice, BASELINE, Fraction(0), SOURCE_START)]
    used = BASELINE.units

    while used < required:
        step = next_step(current, voice, intervals, rng)
        current = step.index

        remaining = required - used
        fitting = [spec for spec in durations if spec.units <= remaining]
        if not fitting:
            logger.debug(
                "%s: no allowed duration fits %s eighth(s); filling with eighths", voice.name, remaining
            )
            while used < required:
                notes.append(_note(current, voice, BASELINE, used, SOURCE_FILL))
                used += BASELINE.units
            break

        chosen = fitting[int(rng.integers(len(fitting)))]
        notes.append(_note(current, voice, chosen, used, step.source))
        used += chosen.units

    return Measure(voice=voice.name, notes=tuple(notes))
