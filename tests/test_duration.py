"""Tests for duration and measure length arithmetic."""

from pathlib import Path
import sys

import pytest

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from gp5.cursor import Cursor  # noqa: E402
from gp5.duration import (  # noqa: E402
    division_for,
    duration_value,
    measure_length,
    read_duration,
    time_for,
)
from gp5.errors import GP5Error  # noqa: E402
from gp5.models import Division, Duration, MeasureHeader, TimeSignature  # noqa: E402

from gp5_bytes import i8, i32  # noqa: E402


@pytest.mark.parametrize(
    "raw, value, ticks",
    [(-2, 1, 3840), (-1, 2, 1920), (0, 4, 960), (1, 8, 480), (2, 16, 240), (3, 32, 120), (4, 64, 60)],
)
def test_duration_byte_scale(raw: int, value: int, ticks: int) -> None:
    assert duration_value(raw) == value
    assert time_for(Duration(value=value)) == ticks


def test_quarter_note_without_flags() -> None:
    duration = read_duration(Cursor(i8(0)), dotted=False, tuplet=False)
    assert duration.value == 4
    assert duration.division == Division(1, 1)
    assert time_for(duration) == 960


def test_dotted_multiplies_by_one_and_a_half() -> None:
    for value in (1, 2, 4, 8, 16):
        plain = time_for(Duration(value=value))
        assert time_for(Duration(value=value, dotted=True)) == plain * 3 // 2


def test_double_dotted_multiplies_by_one_and_three_quarters() -> None:
    assert time_for(Duration(value=4, double_dotted=True)) == 1680


def test_tuplet_code_is_read_after_duration_byte() -> None:
    cursor = Cursor(i8(1) + i32(3))
    duration = read_duration(cursor, dotted=False, tuplet=True)
    assert cursor.position == 5
    assert duration.division == Division(enters=3, times=2)
    assert time_for(duration) == 320


@pytest.mark.parametrize(
    "code, enters, times",
    [(3, 3, 2), (5, 5, 5), (6, 6, 4), (7, 7, 4), (9, 9, 8), (10, 10, 8), (11, 11, 8), (12, 12, 8), (13, 13, 8)],
)
def test_tuplet_table(code: int, enters: int, times: int) -> None:
    assert division_for(code) == Division(enters, times)


@pytest.mark.parametrize("code", [0, 1, 2, 4, 8, 14, 99, -3])
def test_unknown_tuplet_code_is_normal(code: int) -> None:
    assert division_for(code) == Division(1, 1)


def test_duration_byte_below_whole_note_is_rejected() -> None:
    with pytest.raises(GP5Error):
        duration_value(-3)


@pytest.mark.parametrize(
    "numerator, denominator, length",
    [(4, 4, 3840), (3, 4, 2880), (6, 8, 2880), (7, 8, 3360), (2, 2, 3840), (5, 16, 1200)],
)
def test_measure_length(numerator: int, denominator: int, length: int) -> None:
    signature = TimeSignature(numerator=numerator, denominator=Duration(value=denominator))
    header = MeasureHeader(number=1, time_signature=signature)
    assert measure_length(header) == length


@pytest.mark.parametrize("value", [0, -4])
def test_note_value_without_length_is_rejected(value: int) -> None:
    with pytest.raises(GP5Error):
        time_for(Duration(value=value))


def test_measure_length_rejects_zero_denominator() -> None:
    signature = TimeSignature(numerator=4, denominator=Duration(value=0))
    with pytest.raises(GP5Error):
        measure_length(MeasureHeader(number=1, time_signature=signature))
