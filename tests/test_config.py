"""Unit tests for ExerciseConfig validation and derived values."""

from fractions import Fraction

import pytest

from sightread.config import (
    AVAILABLE_TIME_SIGNATURES,
    ExerciseConfig,
    measure_length_in_units,
    parse_time_signature,
)
from sightread.errors import ConfigurationError


def test_defaults_are_valid() -> None:
    config = ExerciseConfig()
    config.validate()
    assert config.measure_count == 8
    assert config.intervals == (1, 2, 3, 4, 5)
    assert config.note_durations == ("1/8", "1/4")


@pytest.mark.parametrize(
    ("time_signature", "units"),
    [("4/4", 8), ("3/4", 6), ("2/4", 4), ("6/8", 6), ("12/8", 12), ("2/2", 8), ("6/16", 3)],
)
def test_measure_length_in_units(time_signature: str, units: int) -> None:
    assert measure_length_in_units(time_signature) == units


def test_every_listed_time_signature_validates() -> None:
    for time_signature in AVAILABLE_TIME_SIGNATURES:
        ExerciseConfig(time_signature=time_signature).validate()


def test_parse_time_signature() -> None:
    assert parse_time_signature(" 3/4 ") == (3, 4)
    config = ExerciseConfig(time_signature="12/8")
    assert config.beats_per_measure == 12
    assert config.beat_unit == 8
    assert config.measure_units == Fraction(12)


@pytest.mark.parametrize("time_signature", ["4-4", "4/", "/4", "0/4", "4/0", "a/b", ""])
def test_bad_time_signature_rejected(time_signature: str) -> None:
    with pytest.raises(ConfigurationError):
        ExerciseConfig(time_signature=time_signature).validate()


def test_time_signature_must_fill_whole_eighths() -> None:
    with pytest.raises(ConfigurationError, match="whole number"):
        ExerciseConfig(time_signature="3/16").validate()


@pytest.mark.parametrize("measure_count", [0, -1, "4", 2.0, True])
def test_bad_measure_count_rejected(measure_count: object) -> None:
    with pytest.raises(ConfigurationError):
        ExerciseConfig(measure_count=measure_count).validate()  # type: ignore[arg-type]


def test_empty_intervals_rejected() -> None:
    with pytest.raises(ConfigurationError, match="interval"):
        ExerciseConfig(intervals=()).validate()


@pytest.mark.parametrize("interval", [0, 9, -2])
def test_out_of_range_interval_rejected(interval: int) -> None:
    with pytest.raises(ConfigurationError):
        ExerciseConfig(intervals=(1, interval)).validate()


def test_empty_durations_rejected() -> None:
    with pytest.raises(ConfigurationError, match="duration"):
        ExerciseConfig(note_durations=[]).validate()


def test_unknown_duration_rejected() -> None:
    with pytest.raises(ConfigurationError, match="1/32"):
        ExerciseConfig(note_durations=["1/4", "1/32"]).validate()


def test_unknown_key_rejected() -> None:
    with pytest.raises(ConfigurationError, match="key"):
        ExerciseConfig(key="H").validate()


def test_flat_and_minor_keys_accepted() -> None:
    for key in ("Bb", "Eb", "Am", "F#m", "Bbm"):
        ExerciseConfig(key=key).validate()


def test_lists_and_sets_are_normalised_to_tuples() -> None:
    config = ExerciseConfig(intervals={3, 1, 2}, note_durations=["1/4"])
    assert config.intervals == (1, 2, 3)
    assert config.note_durations == ("1/4",)


def test_from_settings_reads_client_keys() -> None:
    config = ExerciseConfig.from_settings(
        {
            "measures": 4,
            "key": "G",
            "timeSignature": "3/4",
            "intervals": [1, 2],
            "noteDurations": ["1/4", "1/2"],
            "musicScale": 1.0,
        }
    )
    assert config == ExerciseConfig(4, "G", "3/4", (1, 2), ("1/4", "1/2"))


def test_from_settings_falls_back_to_defaults() -> None:
    assert ExerciseConfig.from_settings({}) == ExerciseConfig()


def test_with_overrides_ignores_none() -> None:
    config = ExerciseConfig().with_overrides(key="D", measure_count=None)
    assert config.key == "D"
    assert config.measure_count == 8


@pytest.mark.parametrize("time_signature", ["４/４", "4/４", "٤/٤"])
def test_non_ascii_digits_rejected(time_signature: str) -> None:
    with pytest.raises(ConfigurationError):
        ExerciseConfig(time_signature=time_signature).validate()


@pytest.mark.parametrize(("time_signature", "meter"), [("4/4\n", "4/4"), (" 3/4 ", "3/4"), ("06/08", "6/8")])
def test_meter_is_normalised(time_signature: str, meter: str) -> None:
    assert ExerciseConfig(time_signature=time_signature).meter == meter


def test_with_overrides_cannot_clear_a_field() -> None:
    config = ExerciseConfig(key="G").with_overrides(key=None, intervals=None)
    assert config.key == "G"
    assert config.intervals == ExerciseConfig().intervals
