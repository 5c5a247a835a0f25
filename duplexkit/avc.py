"""Annex-B to AVCC conversion and parameter-set extraction for decoding."""

from __future__ import annotations

from typing import Optional

from duplexkit.h264 import NAL_PPS, NAL_SPS, nal_type, split_annexb

_PARAMETER_SETS = (NAL_SPS, NAL_PPS)


def extract_sps_pps(annexb: bytes) -> Optional[tuple[bytes, bytes]]:
    """Find the SPS and PPS units of an Annex-B keyframe.

    When a stream holds several of either kind, the last one wins. Returns
    None unless both are present.
    """
    sps: Optional[bytes] = None
    pps: Optional[bytes] = None
    for unit in split_annexb(annexb):
        kind = nal_type(unit)
        if kind == NAL_SPS:
            sps = unit
        elif kind == NAL_PPS:
            pps = unit
    if sps is None or pps is None:
        return None
    return sps, pps


def annexb_to_avcc(annexb: bytes) -> bytes:
    """Re-frame Annex-B units with 4-byte big-endian length prefixes.

    SPS and PPS units are dropped, since a decoder takes them from its format
    description. The result is empty when no other unit is present.
    """
    out = bytearray()
    for unit in split_annexb(annexb):
        kind = nal_type(unit)
        if kind is None or kind in _PARAMETER_SETS:
            continue
        out += len(unit).to_bytes(4, "big")
        out += unit
    return bytes(out)