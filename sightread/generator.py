"""Exercise generator entry points."""

from __future__ import annotations

import logging

import numpy as np

from sightread.abc_serializer import serialize
from sightread.config import ExerciseConfig
from sightread.sheet_models import Exercise
from sightread.voice_assembler import assemble_voice
from sightread.voices import BASS, TREBLE

logger = logging.getLogger(__name__)


def _resolve_rng(rng: np.random.Generator | None, seed: int | None) -> np.random.Generator:
    if rng is not None:
        if seed is not None:
            raise ValueError("Pass either rng or seed, not both.")
        return rng
    return np.random.default_rng(seed)


def generate_exercise(
    config: ExerciseConfig,
    rng: np.random.Generator | None = None,
    *,
    seed: int | None = None,
) -> Exercise:
    """
    Generate a two-voice exercise for *config*.

    Args:
        config: Exercise settings. Validated before any random draw.
        rng:    Random source to draw from. Mutually exclusive with *seed*.
        seed:   Seed for a fresh ``numpy.random.default_rng``. With neither
                *rng* nor *seed*, output is non-deterministic.

    Returns:
        Exercise holding both voices' measures and the ABC document.

    Raises:
        ConfigurationError: If *config* is invalid.
    """
    config.validate()
    source = _resolve_rng(rng, seed)

    required = config.measure_units
    durations = config.duration_specs
    treble = assemble_voice(TREBLE, config.measure_count, required, config.intervals, durations, source)
    bass = assemble_voice(BASS, config.measure_count, required, config.intervals, durations, source)

    abc = serialize(config.meter, config.key, treble, bass)
    logger.debug("Generated exercise:\n%s", abc)
    return Exercise(config=config, treble=treble, bass=bass, abc=abc)


def generate(
    config: ExerciseConfig,
    rng: np.random.Generator | None = None,
    *,
    seed: int | None = None,
) -> str:
    """Generate an exercise and return only its ABC notation."""
    return generate_exercise(config, rng, seed=seed).abc
