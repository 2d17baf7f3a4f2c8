"""Measure bodies: the measure x track loop.

For every measure header, one measure per track follows, each holding
two voices of beats and one trailing reserved byte.  Running tempo and
key signature are carried across the loop in a ``ParseContext``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List

from .beats import read_beat
from .channels import ChannelTable
from .cursor import Cursor
from .duration import measure_length
from .models import DEFAULT_TEMPO, Clef, Measure, MeasureHeader, Track

logger = logging.getLogger(__name__)

VOICE_COUNT = 2
BASS_CLEF_MAX_TUNING = 34


@dataclass
class ParseContext:
    channels: ChannelTable
    extended: bool
    tempo: int = DEFAULT_TEMPO
    key_signature: int = 0


def clef_for(track: Track, channels: ChannelTable) -> Clef:
    if not channels.is_percussion(track.channel_id):
        for guitar_string in track.strings:
            if guitar_string.value <= BASS_CLEF_MAX_TUNING:
                return Clef.BASS
    return Clef.TREBLE


def prune_empty_beats(measure: Measure) -> int:
    """Drop beats with no content in any voice and order the rest by start."""

    kept = [beat for beat in measure.beats if not beat.is_empty()]
    removed = len(measure.beats) - len(kept)
    kept.sort(key=lambda beat: beat.start)
    measure.beats = kept
    return removed


def read_measure(
    cursor: Cursor,
    measure: Measure,
    track: Track,
    context: ParseContext,
) -> None:
    for voice_index in range(VOICE_COUNT):
        start = measure.start
        for _ in range(cursor.read_int()):
            start += read_beat(cursor, measure, track, start, voice_index, context)

    removed = prune_empty_beats(measure)
    if removed:
        logger.debug(
            "track %d measure %d: pruned %d empty beats",
            track.number,
            measure.header_index + 1,
            removed,
        )
    measure.clef = clef_for(track, context.channels)
    measure.key_signature = context.key_signature


def read_measures(
    cursor: Cursor,
    headers: List[MeasureHeader],
    tracks: List[Track],
    context: ParseContext,
) -> None:
    start = 0
    for index, header in enumerate(headers):
        header.start = start
        if header.key_signature is not None:
            context.key_signature = header.key_signature
        for track in tracks:
            measure = Measure(header_index=index, start=start)
            track.measures.append(measure)
            read_measure(cursor, measure, track, context)
            cursor.skip(1)
        header.tempo = context.tempo
        start += measure_length(header)
