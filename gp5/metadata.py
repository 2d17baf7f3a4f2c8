"""Score information, lyrics, page setup, tempo and key signature.

These records sit between the version string and the channel table and
are read straight through; only the page setup width depends on the
version.
"""

from __future__ import annotations

from typing import Tuple

from .cursor import Cursor
from .models import Document, Lyric

INFO_FIELDS = (
    "title",
    "subtitle",
    "artist",
    "album",
    "lyrics_author",
    "music_author",
    "copyright",
    "tab",
    "instructions",
)
EXTRA_LYRIC_LINES = 4
PAGE_SETUP_SIZE = 30
PAGE_SETUP_SIZE_EXTENDED = 49  # page setup + RSE master effect
PAGE_SETUP_STRINGS = 11


def read_info(cursor: Cursor, document: Document) -> None:
    for name in INFO_FIELDS:
        setattr(document, name, cursor.read_string_byte_size_of_int())
    count = cursor.read_int()
    document.comments = [cursor.read_string_byte_size_of_int() for _ in range(count)]


def read_lyric(cursor: Cursor) -> Tuple[int, Lyric]:
    """Return the lyric track number and the first lyric line."""

    track = cursor.read_int()
    lyric = Lyric(from_measure=cursor.read_int(), text=cursor.read_string_int())
    for _ in range(EXTRA_LYRIC_LINES):
        cursor.read_int()
        cursor.read_string_int()
    return track, lyric


def read_page_setup(cursor: Cursor, extended: bool) -> None:
    cursor.skip(PAGE_SETUP_SIZE_EXTENDED if extended else PAGE_SETUP_SIZE)
    for _ in range(PAGE_SETUP_STRINGS):
        cursor.skip(4)
        cursor.read_string_byte(0)


def read_key_signature(cursor: Cursor) -> int:
    # Flats are stored negative; -1 (one flat) maps to 8, -7 to 14.
    value = cursor.read_byte()
    if value < 0:
        value = 7 - value
    return value


def read_tempo_and_key(cursor: Cursor, document: Document, extended: bool) -> None:
    document.tempo_value = cursor.read_int()
    if extended:
        cursor.skip(1)  # hide tempo
    document.key_signature = read_key_signature(cursor)
    cursor.skip(3)
    cursor.read_byte()  # octave
