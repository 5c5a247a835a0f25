"""Colour conversion between BGRA and NV12 (BT.601, video range)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

_Y_BLACK = 16
_CHROMA_NEUTRAL = 128
_ROW_ALIGNMENT = 64


@dataclass(frozen=True)
class NV12Frame:
    """NV12 image held as separate planes whose rows may be padded."""

    y_plane: bytes
    uv_plane: bytes
    width: int
    height: int
    y_stride: int
    uv_stride: int


def _clamp(value: int) -> int:
    return 0 if value < 0 else 255 if value > 255 else value


def aligned_stride(width: int) -> int:
    """Row length in bytes of a luma plane, rounded up to 64."""
    if width < 0:
        raise ValueError(f"width must not be negative, got {width}")
    return (width + _ROW_ALIGNMENT - 1) & ~(_ROW_ALIGNMENT - 1)


def _rows(data: bytes, width: int, height: int, stride: int) -> Iterator[bytes]:
    row = width * 4
    for y in range(height):
        start = y * stride
        yield data[start:start + row]


def _luma_row(src: bytes) -> bytes:
    return bytes(
        _clamp(((66 * r + 129 * g + 25 * b + 128) >> 8) + 16)
        for b, g, r in zip(src[0::4], src[1::4], src[2::4])
    )


def _chroma_row(top: bytes, bottom: bytes) -> bytes:
    out = bytearray()
    for x in range(0, len(top), 8):
        quad = (top[x:x + 4], top[x + 4:x + 8], bottom[x:x + 4], bottom[x + 4:x + 8])
        sum_u = 0
        sum_v = 0
        for b, g, r, _ in quad:
            sum_u += ((-38 * r - 74 * g + 112 * b + 128) >> 8) + 128
            sum_v += ((112 * r - 94 * g - 18 * b + 128) >> 8) + 128
        out.append(_clamp(sum_u // 4))
        out.append(_clamp(sum_v // 4))
    return bytes(out)


def _convert(data: bytes, width: int, height: int, stride: int) -> tuple[list[bytes], list[bytes]]:
    rows = list(_rows(bytes(data), width, height, stride))
    luma = [_luma_row(src) for src in rows]
    chroma = [_chroma_row(top, bottom) for top, bottom in zip(rows[0::2], rows[1::2])]
    return luma, chroma


def bgra_to_nv12(data: bytes, width: int, height: int, stride: int) -> bytes:
    """Convert BGRA pixels to tightly packed NV12: the Y plane, then interleaved UV."""
    row = width * 4
    if width <= 0 or height <= 0 or stride < row or len(data) < stride * height:
        raise ValueError("invalid BGRA frame")
    if width % 2 or height % 2:
        raise ValueError(f"NV12 requires even width/height, got {width}x{height}")
    luma, chroma = _convert(data, width, height, stride)
    return b"".join(luma) + b"".join(chroma)


def bgra_to_nv12_planes(data: bytes, width: int, height: int, stride: int) -> NV12Frame:
    """Convert BGRA pixels to NV12 planes whose rows are aligned to 64 bytes."""
    if width <= 0 or height <= 0:
        raise ValueError("invalid frame size: width/height must be non-zero")
    if width % 2 or height % 2:
        raise ValueError("NV12 requires even width and height")
    required = stride * height
    if len(data) < required:
        raise ValueError(f"invalid BGRA buffer: len={len(data)} < required={required}")
    if stride < width * 4:
        raise ValueError(f"invalid BGRA stride: {stride} < {width * 4}")

    y_stride = aligned_stride(width)
    uv_stride = y_stride
    luma, chroma = _convert(data, width, height, stride)
    y_plane = b"".join(line.ljust(y_stride, b"\x00") for line in luma)
    uv_plane = b"".join(line.ljust(uv_stride, b"\x00") for line in chroma)
    return NV12Frame(
        y_plane=y_plane,
        uv_plane=uv_plane,
        width=width,
        height=height,
        y_stride=y_stride,
        uv_stride=uv_stride,
    )


def nv12_to_bgra(data: bytes, width: int, height: int) -> bytes:
    """Convert tightly packed NV12 to BGRA with opaque alpha and no row padding."""
    if width <= 0 or height <= 0 or width % 2 or height % 2:
        raise ValueError("invalid NV12 size")
    y_size = width * height
    uv_size = width * (height // 2)
    if len(data) < y_size + uv_size:
        raise ValueError("NV12 data too small")
    data = bytes(data)
    y_plane = data[:y_size]
    uv_plane = data[y_size:y_size + uv_size]

    out = bytearray()
    for y in range(height):
        luma_row = y_plane[y * width:(y + 1) * width]
        uv_row = uv_plane[(y // 2) * width:(y // 2 + 1) * width]
        for x, yv in enumerate(luma_row):
            uv = (x // 2) * 2
            c = max(0, yv - 16)
            d = uv_row[uv] - 128
            e = uv_row[uv + 1] - 128
            r = _clamp((298 * c + 409 * e + 128) >> 8)
            g = _clamp((298 * c - 100 * d - 208 * e + 128) >> 8)
            b = _clamp((298 * c + 516 * d + 128) >> 8)
            out += bytes((b, g, r, 255))
    return bytes(out)


def probe_nv12(width: int, height: int) -> bytes:
    """A black NV12 frame of the given size, used to prime an encoder."""
    if width <= 0 or height <= 0 or width % 2 or height % 2:
        raise ValueError(f"unsupported probe frame size {width}x{height}")
    y_size = width * height
    uv_size = width * (height // 2)
    return bytes([_Y_BLACK]) * y_size + bytes([_CHROMA_NEUTRAL]) * uv_size