"""ExerciseMidiExporter: writes a generated exercise as a two-track MIDI file."""

from __future__ import annotations

from midiutil import MIDIFile

from sightread.sheet_models import Exercise, Measure
from sightread.voices import midi_number

# In midiutil Format 1 MIDI, track 0 is the conductor/tempo track.
TRACK_CONDUCTOR = 0  # Tempo only, never receives notes
TRACK_RH = 1         # Right Hand (treble clef)
TRACK_LH = 2         # Left Hand  (bass clef)

CHANNEL_RH = 0
CHANNEL_LH = 1

#: An eighth-note unit lasts half a quarter-note beat.
BEATS_PER_UNIT = 0.5


class ExerciseMidiExporter:
    """
    Writes an Exercise to a Standard MIDI File for listening along.

    Track layout (Format 1, 3 internal tracks)
    ------------------------------------------
    Track 0 - conductor track (tempo only)
    Track 1 - "Right Hand" - the treble voice
    Track 2 - "Left Hand"  - the bass voice

    Pitches follow the exercise's key signature, so an ``F`` written in G
    major sounds as F#.
    """

    DEFAULT_TEMPO = 80     # BPM, level 1 practice tempo
    DEFAULT_VELOCITY = 80
    BASS_VELOCITY = 68     # Slightly softer left hand

    def __init__(self, tempo: int = DEFAULT_TEMPO, velocity: int = DEFAULT_VELOCITY) -> None:
        """
        Args:
            tempo:    Playback tempo in quarter-note beats per minute.
            velocity: MIDI note-on velocity for right-hand notes.
        """
        self.tempo = tempo
        self.velocity = velocity

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _add_voice(
        self,
        midi: MIDIFile,
        measures: tuple[Measure, ...],
        key: str,
        track: int,
        channel: int,
        velocity: int,
    ) -> None:
        measure_start = 0.0
        for measure in measures:
            for note in measure.notes:
                midi.addNote(
                    track=track,
                    channel=channel,
                    pitch=midi_number(note.pitch, key),
                    time=measure_start + float(note.start) * BEATS_PER_UNIT,
                    duration=float(note.units) * BEATS_PER_UNIT,
                    volume=velocity,
                )
            measure_start += float(measure.units) * BEATS_PER_UNIT

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def build(self, exercise: Exercise) -> MIDIFile:
        """Return an in-memory MIDIFile for *exercise*."""
        midi = MIDIFile(numTracks=3, removeDuplicates=False, deinterleave=False)
        midi.addTempo(TRACK_CONDUCTOR, 0, self.tempo)
        midi.addTrackName(TRACK_RH, 0, "Right Hand")
        midi.addTrackName(TRACK_LH, 0, "Left Hand")

        key = exercise.config.key
        self._add_voice(midi, exercise.treble, key, TRACK_RH, CHANNEL_RH, self.velocity)
        self._add_voice(midi, exercise.bass, key, TRACK_LH, CHANNEL_LH, self.BASS_VELOCITY)
        return midi

    def export(self, exercise: Exercise, output_path: str) -> None:
        """
        Write *exercise* to *output_path*.

        Raises:
            OSError: If the output file cannot be opened for writing.
        """
        midi = self.build(exercise)
        with open(output_path, "wb") as f:
            midi.writeFile(f)
