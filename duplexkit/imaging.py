"""Pixel conversions and brightness measurement for BGRA frames."""

from __future__ import annotations

import struct

from duplexkit.frame import Frame

_LUMA_SAMPLES_X = 320
_LUMA_SAMPLES_Y = 180


def _is_valid(frame: Frame) -> bool:
    row = frame.width * 4
    return (
        frame.width > 0
        and frame.height > 0
        and frame.stride >= row
        and len(frame.data) >= frame.stride * frame.height
    )


def _rows(frame: Frame):
    row = frame.width * 4
    data = bytes(frame.data)
    for y in range(frame.height):
        start = y * frame.stride
        yield data[start:start + row]


def bgra_to_rgba(frame: Frame) -> bytes:
    """Tightly packed RGBA pixels of a BGRA frame, dropping row padding."""
    if not _is_valid(frame):
        raise ValueError("invalid BGRA frame")
    row = frame.width * 4
    out = bytearray(row * frame.height)
    for y, src in enumerate(_rows(frame)):
        dst = slice(y * row, (y + 1) * row)
        line = bytearray(row)
        line[0::4] = src[2::4]
        line[1::4] = src[1::4]
        line[2::4] = src[0::4]
        line[3::4] = src[3::4]
        out[dst] = line
    return bytes(out)


def bgra_to_rgb(frame: Frame) -> bytes:
    """Tightly packed RGB pixels of a BGRA frame, dropping alpha and padding."""
    if frame.stride < frame.width * 4:
        raise ValueError(
            f"frame is not BGRA-like (stride={frame.stride} width={frame.width})"
        )
    if len(frame.data) < frame.stride * frame.height:
        raise ValueError("BGRA frame data too small")
    row = frame.width * 3
    out = bytearray(row * frame.height)
    for y, src in enumerate(_rows(frame)):
        line = bytearray(row)
        line[0::3] = src[2::4]
        line[1::3] = src[1::4]
        line[2::3] = src[0::4]
        out[y * row:(y + 1) * row] = line
    return bytes(out)


def avg_luma_bgra(frame: Frame) -> float:
    """Mean BT.601 luma over a sparse grid of pixels; 0.0 for an invalid frame."""
    if not _is_valid(frame):
        return 0.0
    step_y = max(frame.height // _LUMA_SAMPLES_Y, 1)
    step_x = max(frame.width // _LUMA_SAMPLES_X, 1)
    pixel_step = 4 * step_x
    total = 0.0
    count = 0
    for y, src in enumerate(_rows(frame)):
        if y % step_y:
            continue
        for b, g, r in zip(src[0::pixel_step], src[1::pixel_step], src[2::pixel_step]):
            total += 0.114 * b + 0.587 * g + 0.299 * r
            count += 1
    if count == 0:
        return 0.0
    return struct.unpack("<f", struct.pack("<f", total / count))[0]