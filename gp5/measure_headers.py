"""Measure headers: time signature, repeats, alternate endings, markers.

Headers omit the numerator and denominator when they are unchanged, so
the reader threads one running ``TimeSignature`` through the whole pass
and snapshots it into each header.
"""

from __future__ import annotations

import copy
from typing import List

from .cursor import Cursor
from .flags import MeasureHeaderFlags
from .metadata import read_key_signature
from .models import Color, Marker, MeasureHeader, TimeSignature, TripletFeel

TRIPLET_FEELS = {1: TripletFeel.EIGHTH, 2: TripletFeel.SIXTEENTH}


def read_color(cursor: Cursor) -> Color:
    color = Color(
        r=cursor.read_unsigned_byte(),
        g=cursor.read_unsigned_byte(),
        b=cursor.read_unsigned_byte(),
    )
    cursor.skip(1)
    return color


def read_marker(cursor: Cursor, measure: int) -> Marker:
    title = cursor.read_string_byte_size_of_int()
    return Marker(measure=measure, title=title, color=read_color(cursor))


def read_measure_header(
    cursor: Cursor, number: int, time_signature: TimeSignature
) -> MeasureHeader:
    """Read one header, updating ``time_signature`` in place."""

    flags = MeasureHeaderFlags.from_byte(cursor.read_unsigned_byte())
    header = MeasureHeader(number=number, repeat_open=flags.repeat_open)

    if flags.numerator:
        time_signature.numerator = cursor.read_byte()
    if flags.denominator:
        time_signature.denominator.value = cursor.read_byte()
    header.time_signature = copy.deepcopy(time_signature)

    if flags.repeat_close:
        header.repeat_close = (cursor.read_byte() & 0xFF) - 1
    if flags.marker:
        header.marker = read_marker(cursor, number)
    if flags.alternative:
        header.repeat_alternative = cursor.read_unsigned_byte()
    if flags.key_signature:
        header.key_signature = read_key_signature(cursor)
        cursor.skip(1)  # key type
    if flags.time_signature:
        cursor.skip(4)  # beam groups
    if not flags.alternative:
        cursor.skip(1)

    header.triplet_feel = TRIPLET_FEELS.get(cursor.read_byte(), TripletFeel.NONE)
    return header


def read_measure_headers(cursor: Cursor, count: int) -> List[MeasureHeader]:
    time_signature = TimeSignature()
    headers: List[MeasureHeader] = []
    for index in range(count):
        if index > 0:
            cursor.skip(1)
        headers.append(read_measure_header(cursor, index + 1, time_signature))
    return headers
