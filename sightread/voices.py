"""Voice descriptors and pitch spelling for the two grand-staff voices."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

# ── Pitch constants ─────────────────────────────────────────────────────────
NOTE_LETTERS: Final[tuple[str, ...]] = ("C", "D", "E", "F", "G", "A", "B")
DEGREES_PER_OCTAVE = 7
SEMITONES_PER_OCTAVE = 12

#: Semitones above C for each natural letter.
NATURAL_PITCH_CLASSES: Final[dict[str, int]] = {
    "C": 0, "D": 2, "E": 4, "F": 5, "G": 7, "A": 9, "B": 11,
}

#: ABC ``C`` (no marks) is middle C.
REFERENCE_OCTAVE = 4

MAJOR_STEPS: Final[tuple[int, ...]] = (2, 2, 1, 2, 2, 2, 1)
NATURAL_MINOR_STEPS: Final[tuple[int, ...]] = (2, 1, 2, 2, 1, 2, 2)

_ACCIDENTALS: Final[dict[str, int]] = {"#": 1, "b": -1}


@dataclass(frozen=True)
class VoiceDescriptor:
    """
    Constant range and notation parameters for one voice.

    Attributes:
        name:              ``"treble"`` or ``"bass"``.
        clef:              Clef written into the ``V:`` declaration.
        voice_number:      ABC voice id (1 = top staff).
        start_index:       Scale index every measure starts on.
        lowest_index:      Lowest index the walk may reach.
        highest_index:     Highest index the walk may reach, ``None`` if unbounded.
        octave_offset:     Shift applied to the index when choosing octave marks.
        max_octaves_lower: Cap on the number of ``,`` marks, ``None`` if uncapped.
    """

    name: str
    clef: str
    voice_number: int
    start_index: int
    lowest_index: int
    highest_index: int | None = None
    octave_offset: int = 0
    max_octaves_lower: int | None = None

    def contains(self, index: int) -> bool:
        """True if *index* lies inside this voice's range."""
        if index < self.lowest_index:
            return False
        return self.highest_index is None or index <= self.highest_index


#: Right hand: starts on middle C, may dip to G below it, unbounded above.
TREBLE: Final[VoiceDescriptor] = VoiceDescriptor(
    name="treble",
    clef="treble",
    voice_number=1,
    start_index=0,
    lowest_index=-3,
)

#: Left hand: C an octave below middle C up to the F above it.
BASS: Final[VoiceDescriptor] = VoiceDescriptor(
    name="bass",
    clef="bass",
    voice_number=2,
    start_index=0,
    lowest_index=-7,
    highest_index=3,
    octave_offset=-7,
    max_octaves_lower=1,
)

VOICES: Final[tuple[VoiceDescriptor, ...]] = (TREBLE, BASS)


def letter_for_index(index: int) -> str:
    """Natural letter name of a scale index (0 = C)."""
    return NOTE_LETTERS[((index % DEGREES_PER_OCTAVE) + DEGREES_PER_OCTAVE) % DEGREES_PER_OCTAVE]


def spell_pitch(index: int, voice: VoiceDescriptor) -> str:
    """
    Spell *index* as an ABC pitch (letter plus octave marks) for *voice*.

    Negative indices get one ``,`` per octave below the reference, counted
    from the offset index and capped by ``voice.max_octaves_lower``. Indices
    whose offset position reaches the next octave are written in lower case.
    """
    letter = letter_for_index(index)
    shifted = index + voice.octave_offset

    if index < 0:
        octaves_lower = abs(shifted // DEGREES_PER_OCTAVE)
        if voice.max_octaves_lower is not None:
            octaves_lower = min(octaves_lower, voice.max_octaves_lower)
        return letter + "," * octaves_lower
    if shifted >= DEGREES_PER_OCTAVE:
        return letter.lower()
    return letter


# ── Key signatures ───────────────────────────────────────────────────────────

def key_alterations(key: str) -> dict[str, int]:
    """
    Semitone alteration the key signature applies to each natural letter.

    ``key_alterations("G")["F"] == 1``; minor keys (``"Am"``) use the natural
    minor scale. Double sharps come out as ``2`` for theoretical keys such
    as ``D#``.

    Raises:
        ValueError: If *key* does not start with a letter A-G.
    """
    is_minor = key.endswith("m")
    tonic = key[:-1] if is_minor else key
    if not tonic or tonic[0] not in NATURAL_PITCH_CLASSES:
        raise ValueError(f"Cannot read a tonic from key {key!r}.")

    tonic_letter = tonic[0]
    tonic_pc = NATURAL_PITCH_CLASSES[tonic_letter] + sum(_ACCIDENTALS.get(ch, 0) for ch in tonic[1:])
    steps = NATURAL_MINOR_STEPS if is_minor else MAJOR_STEPS

    alterations: dict[str, int] = {}
    letter_pos = NOTE_LETTERS.index(tonic_letter)
    pc = tonic_pc
    for degree in range(DEGREES_PER_OCTAVE):
        letter = NOTE_LETTERS[(letter_pos + degree) % DEGREES_PER_OCTAVE]
        diff = (pc - NATURAL_PITCH_CLASSES[letter]) % SEMITONES_PER_OCTAVE
        alterations[letter] = diff - SEMITONES_PER_OCTAVE if diff > 6 else diff
        pc += steps[degree]
    return alterations


def abc_pitch_octave(abc_pitch: str) -> int:
    """Scientific octave number of an ABC pitch such as ``c``, ``C`` or ``B,``."""
    letter = abc_pitch[0]
    octave = REFERENCE_OCTAVE + (1 if letter.islower() else 0)
    return octave - abc_pitch.count(",")


def sounding_name(abc_pitch: str, key: str) -> str:
    """
    Scientific pitch name (``F#4``) of an ABC pitch under *key*'s signature.

    Octave numbers follow the written letter, so ``B#3`` in ``C#`` stays in
    octave 3 even though it sounds as middle C.
    """
    letter = abc_pitch[0].upper()
    alteration = key_alterations(key).get(letter, 0)
    accidental = "#" * alteration if alteration > 0 else "b" * -alteration
    return f"{letter}{accidental}{abc_pitch_octave(abc_pitch)}"


def midi_number(abc_pitch: str, key: str) -> int:
    """
    MIDI note number of an ABC pitch under *key*'s signature.

    MIDI octave numbering: C-1 = 0, C4 (Middle C) = 60.
    """
    letter = abc_pitch[0].upper()
    pitch_class = NATURAL_PITCH_CLASSES[letter] + key_alterations(key).get(letter, 0)
    return (abc_pitch_octave(abc_pitch) + 1) * SEMITONES_PER_OCTAVE + pitch_class
