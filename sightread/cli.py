"""sightread CLI entry point."""

from __future__ import annotations

import logging
import sys
from collections.abc import Callable
from typing import Any

import click

from sightread import __version__
from sightread.config import (
    AVAILABLE_INTERVALS,
    AVAILABLE_KEYS,
    AVAILABLE_NOTE_DURATIONS,
    ExerciseConfig,
)
from sightread.errors import ConfigurationError
from sightread.generator import generate_exercise
from sightread.levels import LEVEL_CONFIGURATIONS, MAX_LEVEL, MIN_LEVEL, get_level_configuration
from sightread.midi_exporter import ExerciseMidiExporter
from sightread.sheet_models import Exercise


def _build_config(
    level: int | None,
    measures: int | None,
    key: str | None,
    time_signature: str | None,
    intervals: tuple[int, ...],
    durations: tuple[str, ...],
) -> ExerciseConfig:
    """Start from the level preset (or the defaults) and apply explicit options."""
    overrides: dict[str, Any] = {
        "measure_count": measures,
        "key": key,
        "time_signature": time_signature,
        "intervals": intervals or None,
        "note_durations": durations or None,
    }
    preset = get_level_configuration(level) if level is not None else None
    if preset is not None:
        return preset.to_config(**overrides)
    return ExerciseConfig().with_overrides(**overrides)


def _generate_or_exit(config: ExerciseConfig, seed: int | None) -> Exercise:
    try:
        return generate_exercise(config, seed=seed)
    except ConfigurationError as exc:
        click.echo(f"  ERROR: Invalid exercise settings — {exc}", err=True)
        sys.exit(1)


def exercise_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Attach the options shared by every generating subcommand."""
    options = [
        click.option(
            "--level",
            type=click.IntRange(MIN_LEVEL, MAX_LEVEL),
            default=None,
            help=f"Start from a level preset ({MIN_LEVEL}–{MAX_LEVEL}). Other options override it.",
        ),
        click.option("--measures", "-m", type=int, default=None, help="Number of measures per hand."),
        click.option("--key", "-k", type=click.Choice(AVAILABLE_KEYS), default=None, help="Key signature."),
        click.option(
            "--time-signature",
            "-t",
            default=None,
            metavar="N/D",
            help="Time signature, e.g. 4/4, 3/4, 6/8.",
        ),
        click.option(
            "--interval",
            "-i",
            "intervals",
            type=click.IntRange(min(AVAILABLE_INTERVALS), max(AVAILABLE_INTERVALS)),
            multiple=True,
            help="Allowed interval, repeat for several: "
            + ", ".join(f"{value} = {label}" for value, label in AVAILABLE_INTERVALS.items())
            + ".",
        ),
        click.option(
            "--duration",
            "-d",
            "durations",
            type=click.Choice(list(AVAILABLE_NOTE_DURATIONS)),
            multiple=True,
            help="Allowed note duration. Repeat for several.",
        ),
        click.option("--seed", type=int, default=None, help="Random seed for a repeatable exercise."),
    ]
    for option in reversed(options):
        func = option(func)
    return func


# ── CLI group ──────────────────────────────────────────────────────────────────

@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__, prog_name="sightread")
@click.option("--verbose", "-v", is_flag=True, help="Log generator details to stderr.")
def main(verbose: bool) -> None:
    """sightread — random two-hand piano sight-reading exercises in ABC notation."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")


# ── generate subcommand ────────────────────────────────────────────────────────

@main.command()
@exercise_options
@click.option(
    "--output",
    "-o",
    default=None,
    metavar="PATH",
    help="Write the ABC document here instead of standard output.",
)
def generate(
    level: int | None,
    measures: int | None,
    key: str | None,
    time_signature: str | None,
    intervals: tuple[int, ...],
    durations: tuple[str, ...],
    seed: int | None,
    output: str | None,
) -> None:
    """
    Generate an exercise and print it as ABC notation.

    \b
    Examples:
      sightread generate
      sightread generate --level 6 --seed 42
      sightread generate -k G -t 3/4 -i 2 -i 3 -d 1/4 -d 1/2 -o waltz.abc
    """
    config = _build_config(level, measures, key, time_signature, intervals, durations)
    exercise = _generate_or_exit(config, seed)

    if output is None:
        click.echo(exercise.abc, nl=False)
        return

    try:
        with open(output, "w", encoding="utf-8") as fh:
            fh.write(exercise.abc)
    except OSError as exc:
        click.echo(f"  ERROR: Could not write ABC file — {exc}", err=True)
        sys.exit(1)
    click.echo(f"Wrote {config.measure_count} measure(s) in {config.key}, {config.meter} → '{output}'")


# ── midi subcommand ────────────────────────────────────────────────────────────

@main.command()
@exercise_options
@click.option(
    "--output",
    "-o",
    default="exercise.mid",
    show_default=True,
    metavar="PATH",
    help="Destination MIDI file path.",
)
@click.option(
    "--tempo",
    type=click.IntRange(20, 300),
    default=None,
    help="Playback tempo in BPM. Defaults to the level's tempo, or 80.",
)
@click.option(
    "--abc-output",
    default=None,
    metavar="PATH",
    help="Also write the matching ABC document here.",
)
def midi(
    level: int | None,
    measures: int | None,
    key: str | None,
    time_signature: str | None,
    intervals: tuple[int, ...],
    durations: tuple[str, ...],
    seed: int | None,
    output: str,
    tempo: int | None,
    abc_output: str | None,
) -> None:
    """
    Generate an exercise and save it as a two-track MIDI file.

    \b
    Examples:
      sightread midi --level 3 -o level3.mid
      sightread midi -k D -d 1/8 -d 1/4 --tempo 100 --abc-output drill.abc
    """
    config = _build_config(level, measures, key, time_signature, intervals, durations)
    if tempo is None:
        preset = get_level_configuration(level) if level is not None else None
        tempo = preset.tempo if preset is not None else ExerciseMidiExporter.DEFAULT_TEMPO

    click.echo(f"sightread v{__version__}")
    click.echo(f"  Key    : {config.key}  |  Time: {config.time_signature}  |  Tempo: {tempo} BPM")
    click.echo(f"  Output : {output}")
    click.echo()

    click.echo("[1/2] Generating exercise...")
    exercise = _generate_or_exit(config, seed)

    click.echo(f"[2/2] Writing MIDI file → '{output}'...")
    try:
        ExerciseMidiExporter(tempo=tempo).export(exercise, output)
        if abc_output is not None:
            with open(abc_output, "w", encoding="utf-8") as fh:
                fh.write(exercise.abc)
    except OSError as exc:
        click.echo(f"  ERROR: Could not write output file — {exc}", err=True)
        sys.exit(1)

    click.echo()
    click.echo(f"Done!  Open '{output}' in any MIDI player to hear the exercise.")


# ── levels subcommand ──────────────────────────────────────────────────────────

@main.command()
def levels() -> None:
    """List the level presets."""
    for number, preset in sorted(LEVEL_CONFIGURATIONS.items()):
        click.echo(f"{number:>2}. {preset.name}")
        click.echo(f"    {preset.description}")
        click.echo(
            f"    key {preset.key}, {preset.time_signature}, {preset.measures} measures, "
            f"{preset.tempo} BPM, durations {' '.join(preset.note_durations)}, "
            f"intervals {' '.join(str(i) for i in preset.intervals)}"
        )
