"""Document serializer: header plus interleaved treble/bass measures in ABC."""

from __future__ import annotations

from collections.abc import Sequence

from sightread.sheet_models import Measure
from sightread.voices import BASS, TREBLE, VOICES, VoiceDescriptor

UNIT_LENGTH = "1/8"


def _voice_declaration(voice: VoiceDescriptor) -> str:
    return f"V:{voice.voice_number} clef={voice.clef}"


def build_header(time_signature: str, key: str) -> str:
    """
    Return the ABC header block, newline-terminated.

    Field order is fixed: index, empty title, meter, unit length, key, then
    one declaration per voice.
    """
    lines = [
        "X:1",
        "T:",
        f"M:{time_signature}",
        f"L:{UNIT_LENGTH}",
        f"K:{key}",
    ]
    lines.extend(_voice_declaration(voice) for voice in VOICES)
    return "".join(f"{line}\n" for line in lines)


def serialize(
    time_signature: str,
    key: str,
    treble: Sequence[Measure],
    bass: Sequence[Measure],
) -> str:
    """
    Build the full ABC document.

    For each measure position the treble measure is written under ``V:1``
    followed by the bass measure under ``V:2``.

    Raises:
        ValueError: If the two voices have different measure counts.
    """
    if len(treble) != len(bass):
        raise ValueError(
            f"Voices must have the same number of measures (treble={len(treble)}, bass={len(bass)})."
        )

    body: list[str] = []
    for treble_measure, bass_measure in zip(treble, bass):
        body.append(f"V:{TREBLE.voice_number}\n{treble_measure.abc}\n")
        body.append(f"V:{BASS.voice_number}\n{bass_measure.abc}\n")

    return build_header(time_signature, key) + "".join(body)
