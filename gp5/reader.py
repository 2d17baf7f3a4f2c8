"""Decode a whole Guitar Pro 5 file into a ``Document``.

File layout::

  version        byte string of size 30
  score info     9 strings, comment count + comments
  lyrics         lyric track, 5 x (from measure, int string)
  page setup     30 bytes (49 for 5.10) + 11 header/footer strings
  tempo, key     i32 tempo, [hide tempo], i8 key, 3 reserved, i8 octave
  channels       64 x 12 bytes
  reserved       42 bytes (directions + master reverb)
  counts         i32 measures, i32 tracks
  measure headers, tracks, measure bodies
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Union

from .channels import ChannelTable
from .cursor import DEFAULT_ENCODING, Cursor
from .measure_headers import read_measure_headers
from .measures import ParseContext, read_measures
from .metadata import read_info, read_lyric, read_page_setup, read_tempo_and_key
from .models import Document
from .tracks import read_tracks
from .version import read_version

logger = logging.getLogger(__name__)

DIRECTIONS_SIZE = 42


def read_document(data: bytes, *, encoding: str = DEFAULT_ENCODING) -> Document:
    cursor = Cursor(data, encoding=encoding)
    info = read_version(cursor)
    document = Document(version=info.version, major=info.major, minor=info.minor)

    read_info(cursor, document)
    document.lyric_track, document.lyric = read_lyric(cursor)
    read_page_setup(cursor, info.extended)
    read_tempo_and_key(cursor, document, info.extended)

    channels = ChannelTable.read(cursor)
    cursor.skip(DIRECTIONS_SIZE)
    document.measure_count = cursor.read_int()
    document.track_count = cursor.read_int()
    logger.debug(
        "%d measures, %d tracks", document.measure_count, document.track_count
    )

    document.measure_headers = read_measure_headers(cursor, document.measure_count)
    document.tracks = read_tracks(
        cursor,
        document.track_count,
        channels,
        document.lyric,
        document.lyric_track,
        info.extended,
    )
    context = ParseContext(
        channels=channels,
        extended=info.extended,
        tempo=document.tempo_value,
        key_signature=document.key_signature,
    )
    read_measures(cursor, document.measure_headers, document.tracks, context)

    document.channels = channels.channels
    if cursor.remaining:
        logger.debug("%d trailing bytes left unread", cursor.remaining)
    return document


def read_file(path: Union[str, Path], *, encoding: str = DEFAULT_ENCODING) -> Document:
    data = Path(path).read_bytes()
    return read_document(data, encoding=encoding)
