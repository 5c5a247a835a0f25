"""Timestamp and frame-duration arithmetic for media samples."""

from __future__ import annotations

from typing import Optional

from duplexkit.wire import U32_MAX, U64_MAX

I64_MIN = -(2**63)
I64_MAX = 2**63 - 1

_HUNDRED_NS_PER_SECOND = 10_000_000
_US_PER_SECOND = 1_000_000
_HUNDRED_NS_PER_US = 10


def frame_duration_100ns(fps: int) -> int:
    """Duration of one frame in 100 ns units, never less than 1."""
    if fps <= 0:
        raise ValueError(f"fps must be positive, got {fps}")
    return max(1, _HUNDRED_NS_PER_SECOND // fps)


def cm_time_to_micros(value: int, timescale: int, valid: bool) -> int:
    """Convert a rational media time (value / timescale seconds) to microseconds.

    Invalid, non-positive or ill-scaled times give 0; the result saturates at
    the largest unsigned 64-bit value.
    """
    if not valid or timescale <= 0 or value <= 0:
        return 0
    micros = value * _US_PER_SECOND // timescale
    if micros <= 0:
        return 0
    return min(micros, U64_MAX)


def sample_time_to_us(ts_100ns: int) -> int:
    """Convert a sample time in 100 ns units to microseconds; negatives give 0."""
    if ts_100ns <= 0:
        return 0
    return ts_100ns // _HUNDRED_NS_PER_US


def us_to_sample_time(ts_us: int) -> int:
    """Convert microseconds to a signed 100 ns sample time, saturating."""
    if not 0 <= ts_us <= U64_MAX:
        raise ValueError(f"timestamp out of range: {ts_us}")
    signed = ts_us - (1 << 64) if ts_us > I64_MAX else ts_us
    return max(I64_MIN, min(I64_MAX, signed * _HUNDRED_NS_PER_US))


def pack_u32(hi: int, lo: int) -> int:
    """Pack two unsigned 32-bit values into one 64-bit value, hi first."""
    for name, part in (("hi", hi), ("lo", lo)):
        if not 0 <= part <= U32_MAX:
            raise ValueError(f"{name} out of u32 range: {part}")
    return (hi << 32) | lo


class TimestampNormalizer:
    """Rebases timestamps so that the first one seen becomes zero."""

    def __init__(self) -> None:
        self.base_us: Optional[int] = None

    def normalize(self, ts_us: int) -> int:
        if self.base_us is None:
            self.base_us = ts_us
        return max(0, ts_us - self.base_us)