"""Duration bytes and tuplet codes to ticks.

A beat stores its duration as a signed byte ``b`` giving the note value
``2 ** (b + 4) / 4`` (-2 = whole, 0 = quarter, 4 = sixty-fourth) and,
when beat flag 0x20 is set, an i32 tuplet code looked up in
``TUPLET_DIVISIONS``.
"""

from __future__ import annotations

from typing import Dict

from .cursor import Cursor
from .errors import GP5Error
from .models import QUARTER_TIME, Division, Duration, MeasureHeader

TUPLET_DIVISIONS: Dict[int, Division] = {
    3: Division(3, 2),
    5: Division(5, 5),
    6: Division(6, 4),
    7: Division(7, 4),
    9: Division(9, 8),
    10: Division(10, 8),
    11: Division(11, 8),
    12: Division(12, 8),
    13: Division(13, 8),
}

NORMAL = Division()


def division_for(code: int) -> Division:
    return TUPLET_DIVISIONS.get(code, NORMAL)


def duration_value(raw: int) -> int:
    value = int(2 ** (raw + 4) / 4)
    if value <= 0:
        raise GP5Error(f"duration byte {raw} does not encode a note value")
    return value


def read_duration(cursor: Cursor, dotted: bool, tuplet: bool) -> Duration:
    duration = Duration(value=duration_value(cursor.read_byte()), dotted=dotted)
    if tuplet:
        duration.division = division_for(cursor.read_int())
    return duration


def time_for(duration: Duration) -> int:
    if duration.value <= 0:
        raise GP5Error(f"note value {duration.value} has no length")
    time = int(QUARTER_TIME * (4.0 / duration.value))
    if duration.dotted:
        time += time // 2
    elif duration.double_dotted:
        time += (time // 4) * 3
    return time * duration.division.times // duration.division.enters


def measure_length(header: MeasureHeader) -> int:
    signature = header.time_signature
    return round(signature.numerator * time_for(signature.denominator))
