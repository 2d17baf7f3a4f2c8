"""Beat and note records.

Beat layout (after the flag byte, see ``flags.BeatFlags``)::

  [status u8]        flag 0x40; bit 0x02 set = voice has content
  duration i8        [tuplet code i32] when flag 0x20
  [chord]            flag 0x02
  [text]             flag 0x04
  [beat effects]     flag 0x08
  [mix table change] flag 0x10
  string mask u8     bit 6 = first string ... bit 0 = seventh
  notes              one per present string
  u8 reserved, u8 display flags, [u8] when display flags & 0x02
"""

from __future__ import annotations

import copy
from typing import TYPE_CHECKING

from .cursor import Cursor
from .duration import read_duration, time_for
from .effects import read_beat_effects, read_mix_change, read_note_effects, velocity_for
from .flags import BeatFlags, NoteFlags, string_indices
from .models import Chord, GuitarString, Measure, Note, NoteEffect, Track

if TYPE_CHECKING:
    from .measures import ParseContext

CHORD_STRINGS = 7
MAX_FRET = 100

NOTE_TYPE_TIED = 0x02
NOTE_TYPE_DEAD = 0x03


def resolve_tied_value(string_number: int, track: Track) -> int:
    """Return the fret of the latest note on ``string_number`` in ``track``.

    Walks the measures already attached to the track from last to first,
    each measure's beats from last to first, and every voice of a beat in
    order.  Returns 0 when the string has no earlier note.
    """

    for measure in reversed(track.measures):
        for beat in reversed(measure.beats):
            for voice in beat.voices:
                if voice.empty:
                    continue
                for note in voice.notes:
                    if note.string == string_number:
                        return note.value
    return 0


def read_chord(cursor: Cursor, track: Track) -> Chord | None:
    cursor.skip(17)
    name = cursor.read_string_byte(21)
    cursor.skip(4)
    first_fret = cursor.read_int()
    frets = [-1] * len(track.strings)
    for i in range(CHORD_STRINGS):
        fret = cursor.read_int()
        if i < len(frets):
            frets[i] = fret
    cursor.skip(32)
    chord = Chord(name=name, first_fret=first_fret, frets=frets, track_number=track.number)
    return chord if chord.count_notes() > 0 else None


def read_note(
    cursor: Cursor, guitar_string: GuitarString, track: Track, effect: NoteEffect
) -> Note:
    flags = NoteFlags.from_byte(cursor.read_unsigned_byte())
    note = Note(string=guitar_string.number, effect=effect)
    effect.accentuated_note = flags.accentuated
    effect.heavy_accentuated_note = flags.heavy_accentuated
    effect.ghost_note = flags.ghost

    if flags.note_type:
        note_type = cursor.read_unsigned_byte()
        note.tied = note_type == NOTE_TYPE_TIED
        effect.dead_note = note_type == NOTE_TYPE_DEAD
    if flags.velocity:
        note.velocity = velocity_for(cursor.read_byte())
    if flags.note_type:
        fret = cursor.read_byte()
        value = resolve_tied_value(note.string, track) if note.tied else fret
        note.value = value if 0 <= value < MAX_FRET else 0
    if flags.fingering:
        cursor.skip(2)
    if flags.duration_percent:
        cursor.skip(8)
    cursor.skip(1)
    if flags.effects:
        read_note_effects(cursor, effect)
    return note


def read_beat(
    cursor: Cursor,
    measure: Measure,
    track: Track,
    start: int,
    voice_index: int,
    context: "ParseContext",
) -> int:
    """Read one beat into ``measure`` and return the ticks it advances the voice by."""

    flags = BeatFlags.from_byte(cursor.read_unsigned_byte())
    beat = measure.beat_at(start)
    voice = beat.voices[voice_index]
    if flags.status:
        voice.empty = not (cursor.read_unsigned_byte() & 0x02)

    duration = read_duration(cursor, flags.dotted, flags.tuplet)
    effect = NoteEffect()
    if flags.chord:
        chord = read_chord(cursor, track)
        if chord is not None:
            beat.chord = chord
    if flags.text:
        beat.text = cursor.read_string_byte_size_of_int()
    if flags.effects:
        read_beat_effects(cursor, beat, effect)
    if flags.mix_change:
        tempo = read_mix_change(cursor, context.extended)
        if tempo is not None:
            context.tempo = tempo

    mask = cursor.read_unsigned_byte()
    for index in string_indices(mask):
        if index < len(track.strings):
            note = read_note(cursor, track.strings[index], track, copy.deepcopy(effect))
            voice.add_note(note)
    voice.duration = duration

    cursor.skip(1)
    if cursor.read_byte() & 0x02:
        cursor.skip(1)
    return 0 if voice.empty else time_for(duration)


