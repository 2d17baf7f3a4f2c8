from __future__ import annotations

from typing import List

from .channels import ChannelTable
from .cursor import Cursor
from .measure_headers import read_color
from .models import GuitarString, Lyric, Track

TUNING_SLOTS = 7
TRACK_NAME_SIZE = 40
TRACK_RESERVED = 44
TRACK_RESERVED_EXTENDED = 49


def read_track(
    cursor: Cursor,
    number: int,
    channels: ChannelTable,
    lyric: Lyric,
    extended: bool,
) -> Track:
    cursor.read_unsigned_byte()  # track flags
    if number == 1 or not extended:
        cursor.skip(1)

    track = Track(number=number, lyric=lyric)
    track.name = cursor.read_string_byte(TRACK_NAME_SIZE)

    string_count = cursor.read_int()
    for i in range(TUNING_SLOTS):
        tuning = cursor.read_int()
        if i < string_count:
            track.strings.append(GuitarString(number=i + 1, value=tuning))

    track.port = cursor.read_int()
    gm_channel_1 = cursor.read_int() - 1
    gm_channel_2 = cursor.read_int() - 1
    track.channel_id = channels.resolve_track_channel(gm_channel_1, gm_channel_2)
    track.fret_count = cursor.read_int()
    track.offset = cursor.read_int()
    track.color = read_color(cursor)

    cursor.skip(TRACK_RESERVED_EXTENDED if extended else TRACK_RESERVED)
    if extended:
        cursor.read_string_byte_size_of_int()  # RSE instrument
        cursor.read_string_byte_size_of_int()  # RSE effect
    return track


def read_tracks(
    cursor: Cursor,
    count: int,
    channels: ChannelTable,
    lyric: Lyric,
    lyric_track: int,
    extended: bool,
) -> List[Track]:
    """Read ``count`` tracks; only track ``lyric_track`` receives ``lyric``.

    The tracks are followed by a reserved trailer (2 bytes for 5.00, 1 for
    5.10).  A file with no tracks has no trailer, so nothing is skipped.
    """

    tracks = [
        read_track(
            cursor,
            number,
            channels,
            lyric if number == lyric_track else Lyric(),
            extended,
        )
        for number in range(1, count + 1)
    ]
    if tracks:
        cursor.skip(1 if extended else 2)
    return tracks
