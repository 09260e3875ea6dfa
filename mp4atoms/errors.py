"""Exceptions raised while decoding or encoding atoms."""

from __future__ import annotations

from typing import Any


class Mp4Error(Exception):
    """Base class for every error raised by this package."""


class OutOfBounds(Mp4Error):
    """More data was needed than the buffer holds."""

    def __init__(self) -> None:
        super().__init__("out of bounds")


class ShortRead(Mp4Error):
    """A decoder left bytes unread in a region it was meant to consume."""

    def __init__(self) -> None:
        super().__init__("short read")


class _KindError(Mp4Error):
    """An error about a particular atom kind."""

    _label = ""

    def __init__(self, kind: Any) -> None:
        self.kind = kind
        super().__init__(f"{self._label}: {kind}")


class OverDecode(_KindError):
    """An atom body claimed more bytes than its header allowed."""

    _label = "over decode"


class UnderDecode(_KindError):
    """An atom body did not consume every byte its header declared."""

    _label = "under decode"


class TooLarge(Mp4Error):
    """An encoded atom does not fit in a 32-bit size field."""

    def __init__(self, kind: Any) -> None:
        self.kind = kind
        super().__init__("atom too large")


class InvalidSize(Mp4Error):
    """A header carried a size smaller than the header itself."""

    def __init__(self) -> None:
        super().__init__("invalid size")


class InvalidFourCC(Mp4Error):
    """A four-character code was not exactly four bytes."""

    def __init__(self) -> None:
        super().__init__("invalid fourcc")


class UnknownVersion(Mp4Error):
    """A full atom carried a version this package does not handle."""

    def __init__(self, version: int) -> None:
        self.version = version
        super().__init__(f"unknown version: {version}")


class InvalidString(Mp4Error):
    """A string field was not valid UTF-8."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"invalid string: {reason}")


class MissingBox(_KindError):
    """A required child atom was absent."""

    _label = "missing box"


class UnexpectedBox(_KindError):
    """An atom appeared where it is not allowed."""

    _label = "unexpected box"


class DuplicateBox(_KindError):
    """An atom that may appear once appeared more than once."""

    _label = "duplicate box"


class MissingDescriptor(Mp4Error):
    """A required descriptor was absent."""

    def __init__(self, tag: int) -> None:
        self.tag = tag
        super().__init__(f"missing descriptor: {tag}")


class UnexpectedDescriptor(Mp4Error):
    """A descriptor appeared where it is not allowed."""

    def __init__(self, tag: int) -> None:
        self.tag = tag
        super().__init__(f"unexpected descriptor: {tag}")


class UnexpectedEof(Mp4Error):
    """The stream ended in the middle of an atom."""

    def __init__(self) -> None:
        super().__init__("unexpected eof")


class UnknownQuicktimeVersion(Mp4Error):
    """A QuickTime sample entry carried an unknown version."""

    def __init__(self, version: int) -> None:
        self.version = version
        super().__init__(f"unknown quicktime version: {version}")


class Unsupported(Mp4Error):
    """A feature of the format is not supported."""

    def __init__(self, feature: str) -> None:
        self.feature = feature
        super().__init__(f"unsupported: {feature}")


class OutOfMemory(Mp4Error):
    """A value would need an unreasonable amount of memory to represent."""

    def __init__(self) -> None:
        super().__init__("out of memory")


class Reserved(Mp4Error):
    """A reserved value was used."""

    def __init__(self) -> None:
        super().__init__("reserved")