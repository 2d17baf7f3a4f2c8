from __future__ import annotations


class GP5Error(ValueError):
    """Base class for every failure raised while decoding a GP5 file."""


class UnsupportedVersion(GP5Error):
    def __init__(self, version: str) -> None:
        super().__init__(f"unsupported version string {version!r}")
        self.version = version


class TruncatedInput(GP5Error):
    def __init__(self, position: int, requested: int, size: int) -> None:
        super().__init__(
            f"read of {requested} bytes at offset 0x{position:X} runs past "
            f"end of buffer ({size} bytes)"
        )
        self.position = position
        self.requested = requested
        self.size = size
