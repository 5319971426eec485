"""Voice assembler: the full run of measures for one voice."""

from __future__ import annotations

from collections.abc import Sequence
from fractions import Fraction

import numpy as np

from sightread.durations import DurationSpec
from sightread.measure_walk import generate_measure
from sightread.sheet_models import Measure
from sightread.voices import VoiceDescriptor


def assemble_voice(
    voice: VoiceDescriptor,
    measure_count: int,
    required_units: Fraction | int,
    intervals: Sequence[int],
    durations: Sequence[DurationSpec],
    rng: np.random.Generator,
) -> tuple[Measure, ...]:
    """
    Generate *measure_count* measures for *voice*.

    Every measure restarts the walk at ``voice.start_index``. Voices are
    assembled independently of each other; the bass does not follow the
    treble's harmony.
    """
    return tuple(
        generate_measure(voice, required_units, intervals, durations, rng)
        for _ in range(measure_count)
    )
