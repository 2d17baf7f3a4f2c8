"""MIDI channel table.

A GP5 file stores 64 channel slots (4 ports x 16 channels).  Tracks name
a slot by index; the first track to use a slot exposes a copy of it with
a fresh 1-based id, appended after the fixed slots.  Later tracks on the
same slot share that id.
"""

from __future__ import annotations

import copy
import logging
from typing import List, Optional

from .cursor import Cursor
from .models import DEFAULT_BANK, PERCUSSION_BANK, Channel, ChannelParameter

logger = logging.getLogger(__name__)

CHANNEL_SLOTS = 64
PERCUSSION_SLOT = 9
GM_CHANNEL_1 = "gm channel 1"
GM_CHANNEL_2 = "gm channel 2"


def read_channel_slot(cursor: Cursor, index: int) -> Channel:
    channel = Channel(
        program=max(cursor.read_int(), 0),
        volume=cursor.read_byte(),
        balance=cursor.read_byte(),
        chorus=cursor.read_byte(),
        reverb=cursor.read_byte(),
        phaser=cursor.read_byte(),
        tremolo=cursor.read_byte(),
    )
    if index == PERCUSSION_SLOT:
        channel.bank = PERCUSSION_BANK
        channel.is_percussion = True
    else:
        channel.bank = DEFAULT_BANK
    cursor.skip(2)
    return channel


class ChannelTable:
    def __init__(self, channels: Optional[List[Channel]] = None) -> None:
        self.channels: List[Channel] = list(channels or [])

    @classmethod
    def read(cls, cursor: Cursor) -> "ChannelTable":
        return cls([read_channel_slot(cursor, i) for i in range(CHANNEL_SLOTS)])

    def __len__(self) -> int:
        return len(self.channels)

    def _allocated(self, gm_channel_1: int) -> Optional[Channel]:
        wanted = str(gm_channel_1)
        for channel in self.channels[CHANNEL_SLOTS:]:
            if channel.parameter(GM_CHANNEL_1) == wanted:
                return channel
        return None

    def resolve_track_channel(self, gm_channel_1: int, gm_channel_2: int) -> int:
        """Return the channel id for a track routed to the given 0-based slots.

        Returns 0 when ``gm_channel_1`` is not a valid slot.
        """

        if gm_channel_1 < 0 or gm_channel_1 >= len(self.channels):
            return 0
        existing = self._allocated(gm_channel_1)
        if existing is not None:
            return existing.id

        channel = copy.deepcopy(self.channels[gm_channel_1])
        if channel.id <= 0:
            channel.id = len(self.channels) + 1
            if gm_channel_1 == PERCUSSION_SLOT:
                gm_channel_2 = gm_channel_1
            channel.parameters.append(ChannelParameter(GM_CHANNEL_1, str(gm_channel_1)))
            channel.parameters.append(ChannelParameter(GM_CHANNEL_2, str(gm_channel_2)))
            self.channels.append(channel)
            logger.debug(
                "allocated channel %d for slots %d/%d", channel.id, gm_channel_1, gm_channel_2
            )
        return channel.id

    def get(self, channel_id: int) -> Optional[Channel]:
        if channel_id <= 0:
            return None
        for channel in self.channels:
            if channel.id == channel_id:
                return channel
        return None

    def is_percussion(self, channel_id: int) -> bool:
        channel = self.get(channel_id)
        return channel is not None and channel.is_percussion
