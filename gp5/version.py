from __future__ import annotations

import logging
from dataclasses import dataclass

from .cursor import Cursor
from .errors import UnsupportedVersion

logger = logging.getLogger(__name__)

VERSION_FIELD_SIZE = 30
VERSIONS = (
    "FICHIER GUITAR PRO v5.00",
    "FICHIER GUITAR PRO v5.10",
)
_MINORS = (0, 10)


@dataclass(frozen=True)
class VersionInfo:
    version: str
    index: int

    @property
    def major(self) -> int:
        return 5

    @property
    def minor(self) -> int:
        return _MINORS[self.index]

    @property
    def extended(self) -> bool:
        """True for 5.10 files, which carry wider page setup, track and mix records."""
        return self.index > 0


def read_version(cursor: Cursor) -> VersionInfo:
    version = cursor.read_string_byte(VERSION_FIELD_SIZE)
    for index, known in enumerate(VERSIONS):
        if version == known:
            logger.debug("version %r (index %d)", version, index)
            return VersionInfo(version=version, index=index)
    raise UnsupportedVersion(version)
