"""H.264 bitstream helpers: Annex-B and AVCC framing, NAL unit inspection."""

from __future__ import annotations

from typing import Optional

from duplexkit.codec import EncodedPacket

START_CODE = b"\x00\x00\x00\x01"

NAL_IDR = 5
NAL_SPS = 7
NAL_PPS = 8

_DEFAULT_NAL_LEN_SIZE = 4


def split_annexb(data: bytes) -> list[bytes]:
    """Split an Annex-B stream at its start codes, dropping the start codes."""
    data = bytes(data)
    size = len(data)
    units: list[bytes] = []
    start = 0
    i = 0
    while i + 3 <= size:
        three = data[i] == 0 and data[i + 1] == 0 and data[i + 2] == 1
        four = (
            i + 4 <= size
            and data[i] == 0
            and data[i + 1] == 0
            and data[i + 2] == 0
            and data[i + 3] == 1
        )
        if three or four:
            if start < i:
                units.append(data[start:i])
            start = i + 3 if data[i + 2] == 1 else i + 4
            i = start
        else:
            i += 1
    if start < size:
        units.append(data[start:])
    return units


def is_annexb(data: bytes) -> bool:
    """True when the data begins with a 3- or 4-byte start code."""
    return data.startswith(b"\x00\x00\x01") or data.startswith(START_CODE)


def nal_type(nalu: bytes) -> Optional[int]:
    """The NAL unit type from the header byte, or None for an empty unit."""
    if not nalu:
        return None
    return nalu[0] & 0x1F


def _types(annexb: bytes) -> set[int]:
    return {t for t in map(nal_type, split_annexb(annexb)) if t is not None}


def has_idr(annexb: bytes) -> bool:
    """True when the stream holds an IDR slice."""
    return NAL_IDR in _types(annexb)


def has_sps_pps(annexb: bytes) -> bool:
    """True when the stream holds both a sequence and a picture parameter set."""
    types = _types(annexb)
    return NAL_SPS in types and NAL_PPS in types


def avcc_to_annexb(data: bytes, len_size: int) -> bytes:
    """Convert length-prefixed NAL units into an Annex-B stream.

    The length prefix size is clamped into 1..4. Conversion stops at a zero
    length or a unit that runs past the end; ValueError is raised when no unit
    could be read at all.
    """
    len_size = min(max(len_size, 1), 4)
    data = bytes(data)
    out = bytearray()
    i = 0
    while i + len_size <= len(data):
        n = int.from_bytes(data[i:i + len_size], "big")
        i += len_size
        if n == 0 or i + n > len(data):
            break
        out += START_CODE
        out += data[i:i + n]
        i += n
    if not out:
        raise ValueError("invalid AVCC payload")
    return bytes(out)


def _read_param_sets(avcc: bytes, pos: int, count: int) -> Optional[tuple[bytes, int]]:
    out = bytearray()
    for _ in range(count):
        if pos + 2 > len(avcc):
            return None
        n = int.from_bytes(avcc[pos:pos + 2], "big")
        pos += 2
        if pos + n > len(avcc):
            return None
        out += START_CODE
        out += avcc[pos:pos + n]
        pos += n
    return bytes(out), pos


def avcc_seq_to_annexb(avcc: bytes) -> Optional[tuple[bytes, int]]:
    """Turn an AVC decoder configuration record into Annex-B SPS/PPS units.

    Returns the Annex-B bytes and the NAL length prefix size the record
    declares, or None when the record is malformed.
    """
    avcc = bytes(avcc)
    if len(avcc) < 7 or avcc[0] != 1:
        return None
    nal_len = (avcc[4] & 0x03) + 1
    sps = _read_param_sets(avcc, 6, avcc[5] & 0x1F)
    if sps is None:
        return None
    sps_bytes, pos = sps
    if pos >= len(avcc):
        return None
    pps = _read_param_sets(avcc, pos + 1, avcc[pos])
    if pps is None:
        return None
    return sps_bytes + pps[0], nal_len


def package_sample(
    data: bytes,
    seq_header: Optional[bytes],
    nal_len_size: int,
    clean_point: bool,
    timestamp_us: int,
) -> Optional[EncodedPacket]:
    """Build an Annex-B packet from encoder output.

    AVCC output is converted to Annex-B. A keyframe (clean point or IDR slice)
    that lacks SPS/PPS gets the sequence header prepended when one is known.
    Empty output gives None.
    """
    if not data:
        return None
    annexb = bytes(data) if is_annexb(data) else avcc_to_annexb(data, nal_len_size)
    is_key = clean_point or has_idr(annexb)
    if is_key and not has_sps_pps(annexb) and seq_header is not None:
        annexb = bytes(seq_header) + annexb
    return EncodedPacket(data=annexb, is_keyframe=is_key, timestamp_us=timestamp_us)