import pytest
from hypothesis import given
from hypothesis import strategies as st

from duplexkit.video import VideoPacket, VideoTrace, decode_video_packet
from duplexkit.wire import U64_MAX, DecodeError, Writer


def test_wire_bytes_without_trace():
    assert VideoPacket(timestamp_us=1, data=b"ab").encode() == b"\x01\x00\x00\x02ab"


def test_round_trip_with_trace():
    packet = VideoPacket(
        timestamp_us=123456789,
        data=b"\x00\x00\x00\x01\x65",
        frame_id=42,
        trace=VideoTrace(1, 2, 3, 4),
    )
    assert decode_video_packet(packet.encode()) == packet


def test_defaults():
    packet = decode_video_packet(VideoPacket(timestamp_us=5, data=b"").encode())
    assert packet.frame_id == 0
    assert packet.trace is None
    assert packet.data == b""


u64 = st.integers(min_value=0, max_value=U64_MAX)


@given(u64, u64, st.binary(), st.none() | st.builds(VideoTrace, u64, u64, u64, u64))
def test_round_trip(ts, frame_id, data, trace):
    packet = VideoPacket(timestamp_us=ts, data=data, frame_id=frame_id, trace=trace)
    assert decode_video_packet(packet.encode()) == packet


def test_invalid_option_tag():
    with pytest.raises(DecodeError):
        decode_video_packet(Writer().varint(1).varint(0).varint(2).getvalue())


def test_truncated_payload():
    encoded = VideoPacket(timestamp_us=1, data=b"abcd").encode()
    with pytest.raises(DecodeError):
        decode_video_packet(encoded[:-1])