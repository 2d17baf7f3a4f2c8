"""Flag bytes decoded into named fields.

Each record in a GP5 file starts with one or two flag bytes whose bits
decide which optional fields follow.  The readers decode those bytes
into the frozen sets below first and branch on the named fields, so the
bit layout lives in one place:

  measure header : 0x01 numerator, 0x02 denominator, 0x04 repeat open,
                   0x08 repeat close, 0x10 alternate ending, 0x20 marker,
                   0x40 key signature
  beat           : 0x01 dotted, 0x02 chord, 0x04 text, 0x08 effects,
                   0x10 mix change, 0x20 tuplet, 0x40 status byte
  note           : 0x01 duration-percent, 0x02 heavy accent, 0x04 ghost,
                   0x08 effects, 0x10 velocity, 0x20 type + fret,
                   0x40 accent, 0x80 fingering
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator


@dataclass(frozen=True)
class MeasureHeaderFlags:
    numerator: bool
    denominator: bool
    repeat_open: bool
    repeat_close: bool
    alternative: bool
    marker: bool
    key_signature: bool

    @classmethod
    def from_byte(cls, value: int) -> "MeasureHeaderFlags":
        return cls(
            numerator=bool(value & 0x01),
            denominator=bool(value & 0x02),
            repeat_open=bool(value & 0x04),
            repeat_close=bool(value & 0x08),
            alternative=bool(value & 0x10),
            marker=bool(value & 0x20),
            key_signature=bool(value & 0x40),
        )

    @property
    def time_signature(self) -> bool:
        return self.numerator or self.denominator


@dataclass(frozen=True)
class BeatFlags:
    dotted: bool
    chord: bool
    text: bool
    effects: bool
    mix_change: bool
    tuplet: bool
    status: bool

    @classmethod
    def from_byte(cls, value: int) -> "BeatFlags":
        return cls(
            dotted=bool(value & 0x01),
            chord=bool(value & 0x02),
            text=bool(value & 0x04),
            effects=bool(value & 0x08),
            mix_change=bool(value & 0x10),
            tuplet=bool(value & 0x20),
            status=bool(value & 0x40),
        )


@dataclass(frozen=True)
class NoteFlags:
    duration_percent: bool
    heavy_accentuated: bool
    ghost: bool
    effects: bool
    velocity: bool
    note_type: bool
    accentuated: bool
    fingering: bool

    @classmethod
    def from_byte(cls, value: int) -> "NoteFlags":
        return cls(
            duration_percent=bool(value & 0x01),
            heavy_accentuated=bool(value & 0x02),
            ghost=bool(value & 0x04),
            effects=bool(value & 0x08),
            velocity=bool(value & 0x10),
            note_type=bool(value & 0x20),
            accentuated=bool(value & 0x40),
            fingering=bool(value & 0x80),
        )


@dataclass(frozen=True)
class BeatEffectFlags:
    vibrato: bool
    fade_in: bool
    slap_effect: bool
    stroke: bool
    pick_stroke: bool
    tremolo_bar: bool

    @classmethod
    def from_bytes(cls, first: int, second: int) -> "BeatEffectFlags":
        return cls(
            vibrato=bool(first & 0x02),
            fade_in=bool(first & 0x10),
            slap_effect=bool(first & 0x20),
            stroke=bool(first & 0x40),
            pick_stroke=bool(second & 0x02),
            tremolo_bar=bool(second & 0x04),
        )


@dataclass(frozen=True)
class NoteEffectFlags:
    bend: bool
    hammer: bool
    let_ring: bool
    grace: bool
    staccato: bool
    palm_mute: bool
    tremolo_picking: bool
    slide: bool
    harmonic: bool
    trill: bool
    vibrato: bool

    @classmethod
    def from_bytes(cls, first: int, second: int) -> "NoteEffectFlags":
        return cls(
            bend=bool(first & 0x01),
            hammer=bool(first & 0x02),
            let_ring=bool(first & 0x08),
            grace=bool(first & 0x10),
            staccato=bool(second & 0x01),
            palm_mute=bool(second & 0x02),
            tremolo_picking=bool(second & 0x04),
            slide=bool(second & 0x08),
            harmonic=bool(second & 0x10),
            trill=bool(second & 0x20),
            vibrato=bool(second & 0x40),
        )


def string_indices(mask: int) -> Iterator[int]:
    """Yield 0-based string indices present in a beat's string mask.

    Bit 6 is the first (highest) string and bit 0 the seventh.
    """

    for bit in range(6, -1, -1):
        if mask & (1 << bit):
            yield 6 - bit
