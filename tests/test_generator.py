"""Tests for the generate/generate_exercise entry points."""

import numpy as np
import pytest

from sightread import ConfigurationError, ExerciseConfig, generate, generate_exercise
from sightread.measure_walk import SOURCE_FILL, SOURCE_START, SOURCE_STEP
from sightread.voice_assembler import assemble_voice
from sightread.voices import BASS, TREBLE

HEADER_LINES = 7


def _body_lines(document: str) -> list[str]:
    return document.splitlines()[HEADER_LINES:]


def test_unison_eighths_scenario_is_exact() -> None:
    config = ExerciseConfig(
        measure_count=1, key="C", time_signature="4/4", intervals=[1], note_durations=["1/8"]
    )
    assert generate(config, seed=99) == (
        "X:1\nT:\nM:4/4\nL:1/8\nK:C\nV:1 clef=treble\nV:2 clef=bass\n"
        "V:1\nCCCCCCCC|\nV:2\nCCCCCCCC|\n"
    )


def test_whole_notes_only_does_not_raise() -> None:
    config = ExerciseConfig(measure_count=4, intervals=[2, 3], note_durations=["1"])
    exercise = generate_exercise(config, seed=1)
    for measure in exercise.treble + exercise.bass:
        assert measure.units == 8
        assert [note.source for note in measure.notes[1:]] == [SOURCE_FILL] * 7


def test_empty_intervals_raise_before_any_draw(untouchable_rng: object) -> None:
    config = ExerciseConfig(intervals=[])
    with pytest.raises(ConfigurationError):
        generate(config, untouchable_rng)  # type: ignore[arg-type]


def test_unknown_duration_raises_before_any_draw(untouchable_rng: object) -> None:
    config = ExerciseConfig(note_durations=["1/8", "3/8"])
    with pytest.raises(ConfigurationError):
        generate_exercise(config, untouchable_rng)  # type: ignore[arg-type]


def test_seed_makes_output_repeatable() -> None:
    config = ExerciseConfig(measure_count=6, intervals=[1, 2, 3, 4, 5, 6, 7, 8],
                            note_durations=["1/16", "1/8", "1/4", "1/2", "1"])
    assert generate(config, seed=1234) == generate(config, seed=1234)
    assert generate(config, np.random.default_rng(7)) == generate(config, np.random.default_rng(7))


def test_rng_and_seed_are_exclusive() -> None:
    with pytest.raises(ValueError, match="either"):
        generate(ExerciseConfig(), np.random.default_rng(0), seed=1)


@pytest.mark.parametrize("time_signature", ["4/4", "3/4", "2/4", "6/8", "12/8", "2/2"])
def test_generated_documents_hold_structural_constraints(time_signature: str) -> None:
    intervals = (1, 3, 4, 6)
    durations = ("1/16", "1/4", "1/2")
    config = ExerciseConfig(
        measure_count=5, key="D", time_signature=time_signature,
        intervals=intervals, note_durations=durations,
    )
    for seed in range(15):
        exercise = generate_exercise(config, seed=seed)
        assert len(exercise.treble) == len(exercise.bass) == 5

        for measures, voice in ((exercise.treble, TREBLE), (exercise.bass, BASS)):
            for measure in measures:
                assert measure.units == config.measure_units
                previous = None
                for note in measure.notes:
                    assert voice.contains(note.index)
                    if note.source == SOURCE_START:
                        assert note.duration == "1/8"
                    elif note.source != SOURCE_FILL:
                        assert note.duration in durations
                    if note.source == SOURCE_STEP:
                        assert abs(note.index - previous) + 1 in intervals
                    previous = note.index


def test_voice_markers_alternate() -> None:
    config = ExerciseConfig(measure_count=7)
    body = _body_lines(generate(config, seed=5))

    markers = body[0::2]
    assert markers == ["V:1", "V:2"] * 7
    assert all(line.endswith("|") for line in body[1::2])


def test_header_reflects_config() -> None:
    document = generate(ExerciseConfig(measure_count=1, key="Em", time_signature="6/8"), seed=0)
    assert document.splitlines()[:HEADER_LINES] == [
        "X:1", "T:", "M:6/8", "L:1/8", "K:Em", "V:1 clef=treble", "V:2 clef=bass",
    ]


def test_treble_is_drawn_without_regard_to_bass() -> None:
    # Voices are independent: the treble comes out the same whether or not
    # a bass line is generated after it from the same stream.
    config = ExerciseConfig(measure_count=3)
    exercise = generate_exercise(config, seed=42)
    treble_alone = assemble_voice(
        TREBLE, 3, config.measure_units, config.intervals, config.duration_specs,
        np.random.default_rng(42),
    )
    assert exercise.treble == treble_alone


def test_note_metadata_covers_every_note() -> None:
    config = ExerciseConfig(measure_count=2, key="G", intervals=[1], note_durations=["1/4"])
    exercise = generate_exercise(config, seed=3)
    records = exercise.note_metadata()

    total = sum(len(m.notes) for m in exercise.treble + exercise.bass)
    assert len(records) == total
    assert records[0].id == "treble-0-0"
    assert records[0].expected_note == "C4"
    assert records[-1].voice == "bass"
    assert records[-1].measure_index == 1
    assert len({record.id for record in records}) == total


@pytest.mark.parametrize("time_signature", ["4/4\n", "\t4/4", "04/4"])
def test_header_writes_normalised_meter(time_signature: str) -> None:
    document = generate(ExerciseConfig(measure_count=1, time_signature=time_signature), seed=0)
    assert "\n\n" not in document
    assert document.splitlines()[2] == "M:4/4"
    assert document.splitlines()[3] == "L:1/8"


def test_full_width_meter_rejected_before_any_draw(untouchable_rng: object) -> None:
    with pytest.raises(ConfigurationError):
        generate(ExerciseConfig(time_signature="４/４"), untouchable_rng)  # type: ignore[arg-type]
