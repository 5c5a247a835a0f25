import pytest
from hypothesis import given
from hypothesis import strategies as st

from duplexkit.codec import EncodedPacket
from duplexkit.h264 import (
    START_CODE,
    avcc_seq_to_annexb,
    avcc_to_annexb,
    has_idr,
    has_sps_pps,
    is_annexb,
    nal_type,
    package_sample,
    split_annexb,
)

SPS = b"\x67\x42\x00\x1f"
PPS = b"\x68\xce\x3c\x80"
IDR = b"\x65\x88\x84"
SLICE = b"\x41\x9a\x02"


def annexb(*units):
    return b"".join(START_CODE + u for u in units)


nalus = st.lists(
    st.binary(min_size=1, max_size=20).filter(lambda b: 0 not in b),
    min_size=1,
    max_size=6,
)


def test_split_mixed_start_codes():
    data = b"\x00\x00\x00\x01" + SPS + b"\x00\x00\x01" + PPS
    assert split_annexb(data) == [SPS, PPS]


def test_split_without_start_code_returns_whole():
    assert split_annexb(SLICE) == [SLICE]


def test_split_empty():
    assert split_annexb(b"") == []


@given(nalus)
def test_split_round_trip(units):
    assert split_annexb(annexb(*units)) == units


def test_is_annexb():
    assert is_annexb(b"\x00\x00\x01\x65")
    assert is_annexb(b"\x00\x00\x00\x01\x65")
    assert not is_annexb(b"\x00\x00\x00\x03\x65\x88\x84")
    assert not is_annexb(b"")


def test_nal_type():
    assert nal_type(SPS) == 7
    assert nal_type(PPS) == 8
    assert nal_type(IDR) == 5
    assert nal_type(b"") is None


def test_has_idr():
    assert has_idr(annexb(SPS, PPS, IDR))
    assert not has_idr(annexb(SLICE))


def test_has_sps_pps_needs_both():
    assert has_sps_pps(annexb(SPS, PPS, IDR))
    assert not has_sps_pps(annexb(SPS, IDR))
    assert not has_sps_pps(annexb(PPS, IDR))


def test_avcc_to_annexb_four_byte_prefix():
    data = len(IDR).to_bytes(4, "big") + IDR
    assert avcc_to_annexb(data, 4) == START_CODE + IDR


def test_avcc_to_annexb_two_byte_prefix():
    data = len(SPS).to_bytes(2, "big") + SPS + len(PPS).to_bytes(2, "big") + PPS
    assert avcc_to_annexb(data, 2) == annexb(SPS, PPS)


def test_avcc_to_annexb_clamps_prefix_size():
    data = len(IDR).to_bytes(4, "big") + IDR
    assert avcc_to_annexb(data, 9) == avcc_to_annexb(data, 4)


def test_avcc_to_annexb_stops_at_truncated_unit():
    data = len(IDR).to_bytes(4, "big") + IDR + (50).to_bytes(4, "big") + SLICE
    assert avcc_to_annexb(data, 4) == START_CODE + IDR


def test_avcc_to_annexb_invalid():
    with pytest.raises(ValueError, match="invalid AVCC payload"):
        avcc_to_annexb(b"\x00\x00\x00\x00\x65", 4)
    with pytest.raises(ValueError):
        avcc_to_annexb(b"", 4)


@given(nalus)
def test_avcc_round_trip(units):
    data = b"".join(len(u).to_bytes(4, "big") + u for u in units)
    assert split_annexb(avcc_to_annexb(data, 4)) == units


def _record(length_byte=0xFF):
    return (
        bytes([1, 0x42, 0x00, 0x1F, length_byte, 0xE1])
        + len(SPS).to_bytes(2, "big") + SPS
        + b"\x01"
        + len(PPS).to_bytes(2, "big") + PPS
    )


def test_avcc_seq_to_annexb():
    assert avcc_seq_to_annexb(_record()) == (annexb(SPS, PPS), 4)


def test_avcc_seq_to_annexb_length_size():
    result = avcc_seq_to_annexb(_record(0xFD))
    assert result is not None
    assert result[1] == 2


@pytest.mark.parametrize(
    "record",
    [
        b"\x01\x42\x00",
        b"\x02" + _record()[1:],
        _record()[:9],
        _record()[:6 + 2 + len(SPS)],
        _record()[:-1],
    ],
)
def test_avcc_seq_to_annexb_malformed(record):
    assert avcc_seq_to_annexb(record) is None


def test_package_sample_empty():
    assert package_sample(b"", None, 4, True, 0) is None


def test_package_sample_prepends_header_on_idr():
    header = annexb(SPS, PPS)
    packet = package_sample(annexb(IDR), header, 4, False, 1234)
    assert packet == EncodedPacket(data=header + annexb(IDR), is_keyframe=True, timestamp_us=1234)


def test_package_sample_keeps_existing_parameter_sets():
    data = annexb(SPS, PPS, IDR)
    packet = package_sample(data, annexb(SPS, PPS), 4, False, 0)
    assert packet.data == data
    assert packet.is_keyframe


def test_package_sample_non_key_untouched():
    packet = package_sample(annexb(SLICE), annexb(SPS, PPS), 4, False, 7)
    assert packet.data == annexb(SLICE)
    assert not packet.is_keyframe
    assert packet.timestamp_us == 7


def test_package_sample_clean_point_is_key():
    header = annexb(SPS, PPS)
    packet = package_sample(annexb(SLICE), header, 4, True, 0)
    assert packet.is_keyframe
    assert packet.data == header + annexb(SLICE)


def test_package_sample_without_header():
    packet = package_sample(annexb(IDR), None, 4, False, 0)
    assert packet.data == annexb(IDR)
    assert packet.is_keyframe


def test_package_sample_converts_avcc():
    data = len(IDR).to_bytes(4, "big") + IDR
    packet = package_sample(data, None, 4, False, 0)
    assert packet.data == annexb(IDR)
    assert packet.is_keyframe


def test_package_sample_invalid_avcc():
    with pytest.raises(ValueError):
        package_sample(b"\x00\x00\x00\x09\x65", None, 4, False, 0)