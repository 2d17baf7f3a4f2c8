"""Beat and note effect records.

Bend and tremolo bar points are stored as (position, value, vibrato)
triples with positions on a 0-60 scale.  Positions are rescaled to
0-12; raw values are divided by 25 for bends and by 50 for the tremolo
bar.  An effect that decodes to nothing is left unset on the
``NoteEffect`` rather than attached empty.
"""

from __future__ import annotations

import math
from typing import Dict, List, Optional

from .cursor import Cursor
from .flags import BeatEffectFlags, NoteEffectFlags
from .models import (
    MIN_VELOCITY,
    VELOCITY_INCREMENT,
    Beat,
    Bend,
    Duration,
    EffectPoint,
    Grace,
    GraceTransition,
    Harmonic,
    HarmonicType,
    NoteEffect,
    Stroke,
    StrokeDirection,
    TremoloBar,
    TremoloPicking,
    Trill,
)

BEND_POSITION = 60
BEND_SEMITONE = 25
MAX_POSITION_LENGTH = 12

TREMOLO_PICKING_VALUES = {1: 8, 2: 16, 3: 32}
TRILL_VALUES = {1: 16, 2: 32, 3: 64}
STROKE_VALUES = {1: 64, 2: 64, 3: 32, 4: 16, 5: 8, 6: 4}
GRACE_TRANSITIONS = {
    0: GraceTransition.NONE,
    1: GraceTransition.SLIDE,
    2: GraceTransition.BEND,
    3: GraceTransition.HAMMER,
}
# harmonic type code -> (type, bytes to skip after the code)
HARMONICS: Dict[int, tuple] = {
    1: (HarmonicType.NATURAL, 0),
    2: (HarmonicType.ARTIFICIAL, 3),
    3: (HarmonicType.TAPPED, 1),
    4: (HarmonicType.PINCH, 0),
    5: (HarmonicType.SEMI, 0),
}


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def velocity_for(dynamic: int) -> int:
    return MIN_VELOCITY + VELOCITY_INCREMENT * dynamic - VELOCITY_INCREMENT


def _read_points(cursor: Cursor, value_unit: float) -> List[EffectPoint]:
    cursor.skip(5)
    points: List[EffectPoint] = []
    for _ in range(cursor.read_int()):
        position = cursor.read_int()
        value = cursor.read_int()
        cursor.read_byte()  # vibrato
        points.append(
            EffectPoint(
                position=round_half_up(position * MAX_POSITION_LENGTH / BEND_POSITION),
                value=round_half_up(value / value_unit),
            )
        )
    return points


def read_bend(cursor: Cursor) -> Optional[Bend]:
    points = _read_points(cursor, BEND_SEMITONE)
    return Bend(points) if points else None


def read_tremolo_bar(cursor: Cursor) -> Optional[TremoloBar]:
    points = _read_points(cursor, BEND_SEMITONE * 2)
    return TremoloBar(points) if points else None


def read_grace(cursor: Cursor) -> Grace:
    fret = cursor.read_unsigned_byte()
    dynamic = cursor.read_unsigned_byte()
    transition = cursor.read_byte()
    duration = cursor.read_unsigned_byte()
    flags = cursor.read_unsigned_byte()
    return Grace(
        fret=fret,
        dynamic=velocity_for(dynamic),
        duration=duration,
        dead=bool(flags & 0x01),
        on_beat=bool(flags & 0x02),
        transition=GRACE_TRANSITIONS.get(transition, GraceTransition.NONE),
    )


def read_tremolo_picking(cursor: Cursor) -> Optional[TremoloPicking]:
    value = TREMOLO_PICKING_VALUES.get(cursor.read_unsigned_byte())
    if value is None:
        return None
    return TremoloPicking(duration=Duration(value=value))


def read_harmonic(cursor: Cursor) -> Optional[Harmonic]:
    entry = HARMONICS.get(cursor.read_byte())
    if entry is None:
        return None
    harmonic_type, reserved = entry
    cursor.skip(reserved)
    return Harmonic(type=harmonic_type)


def read_trill(cursor: Cursor) -> Optional[Trill]:
    fret = cursor.read_byte()
    value = TRILL_VALUES.get(cursor.read_byte())
    if value is None:
        return None
    return Trill(fret=fret, duration=Duration(value=value))


def read_note_effects(cursor: Cursor, effect: NoteEffect) -> None:
    first = cursor.read_unsigned_byte()
    second = cursor.read_unsigned_byte()
    flags = NoteEffectFlags.from_bytes(first, second)

    if flags.bend:
        effect.bend = read_bend(cursor)
    if flags.grace:
        effect.grace = read_grace(cursor)
    if flags.tremolo_picking:
        effect.tremolo_picking = read_tremolo_picking(cursor)
    if flags.slide:
        effect.slide = True
        cursor.read_byte()  # slide type
    if flags.harmonic:
        effect.harmonic = read_harmonic(cursor)
    if flags.trill:
        effect.trill = read_trill(cursor)

    effect.hammer = flags.hammer
    effect.let_ring = flags.let_ring
    effect.vibrato = flags.vibrato or effect.vibrato
    effect.palm_mute = flags.palm_mute
    effect.staccato = flags.staccato


def read_beat_effects(cursor: Cursor, beat: Beat, effect: NoteEffect) -> None:
    """Read beat-wide effects into ``effect`` and the stroke into ``beat``."""

    first = cursor.read_unsigned_byte()
    second = cursor.read_unsigned_byte()
    flags = BeatEffectFlags.from_bytes(first, second)

    effect.fade_in = flags.fade_in
    effect.vibrato = flags.vibrato
    if flags.slap_effect:
        kind = cursor.read_unsigned_byte()
        effect.tapping = kind == 1
        effect.slapping = kind == 2
        effect.popping = kind == 3
    if flags.tremolo_bar:
        effect.tremolo_bar = read_tremolo_bar(cursor)
    if flags.stroke:
        up = cursor.read_byte()
        down = cursor.read_byte()
        if up > 0:
            beat.stroke = Stroke(StrokeDirection.UP, STROKE_VALUES.get(up, 64))
        elif down > 0:
            beat.stroke = Stroke(StrokeDirection.DOWN, STROKE_VALUES.get(down, 64))
    if flags.pick_stroke:
        cursor.read_byte()


def read_mix_change(cursor: Cursor, extended: bool) -> Optional[int]:
    """Read a mix table change and return its tempo, or None when unchanged."""

    cursor.read_byte()  # instrument
    cursor.skip(16)  # RSE instrument
    values = [cursor.read_byte() for _ in range(6)]  # volume, pan, chorus, reverb, phaser, tremolo
    cursor.read_string_byte_size_of_int()  # tempo name
    tempo = cursor.read_int()
    for value in values:
        if value >= 0:
            cursor.read_byte()  # transition duration
    changed: Optional[int] = None
    if tempo >= 0:
        changed = tempo
        cursor.skip(1)  # tempo transition duration
        if extended:
            cursor.skip(1)  # hide tempo
    cursor.read_byte()  # apply-to-all flags
    cursor.skip(1)  # wah
    if extended:
        cursor.read_string_byte_size_of_int()  # RSE effect
        cursor.read_string_byte_size_of_int()  # RSE effect category
    return changed
