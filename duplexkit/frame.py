"""Captured frames and capture configuration."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class Frame:
    """A captured BGRA frame; rows may be padded beyond width * 4 bytes."""

    data: bytes
    width: int
    height: int
    stride: int
    timestamp_us: int


class PixelFormat(Enum):
    BGRA = "BGRA"

    def to_cv_pixel_format(self) -> int:
        """The four-character pixel format code ('BGRA')."""
        return int.from_bytes(self.value.encode("ascii"), "big")


@dataclass(frozen=True)
class ScapConfig:
    display_id: int = 0
    fps: int = 30
    pixel_format: PixelFormat = PixelFormat.BGRA


@dataclass(frozen=True)
class DisplayInfo:
    display_id: int
    width: int
    height: int