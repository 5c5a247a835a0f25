"""Encoded video packets and their timing trace."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from duplexkit.wire import Reader, Writer


@dataclass(frozen=True)
class VideoTrace:
    host_capture_us: int = 0
    host_encode_submit_us: int = 0
    host_encode_done_us: int = 0
    host_send_submit_us: int = 0


@dataclass(frozen=True)
class VideoPacket:
    """Encoded video payload (Annex-B H.264 bytes)."""

    timestamp_us: int
    data: bytes
    frame_id: int = 0
    trace: Optional[VideoTrace] = None

    def encode(self) -> bytes:
        writer = Writer().varint(self.timestamp_us).varint(self.frame_id)
        # The option marker is a single 0/1 byte, same as a boolean.
        writer.boolean(self.trace is not None)
        if self.trace is not None:
            writer.varint(self.trace.host_capture_us)
            writer.varint(self.trace.host_encode_submit_us)
            writer.varint(self.trace.host_encode_done_us)
            writer.varint(self.trace.host_send_submit_us)
        writer.blob(self.data)
        return writer.getvalue()


def decode_video_packet(data: bytes) -> VideoPacket:
    """Decode a video packet; trailing bytes are ignored."""
    reader = Reader(data)
    timestamp_us = reader.varint()
    frame_id = reader.varint()
    trace = None
    if reader.option_tag():
        trace = VideoTrace(reader.varint(), reader.varint(), reader.varint(), reader.varint())
    return VideoPacket(
        timestamp_us=timestamp_us,
        data=reader.blob(),
        frame_id=frame_id,
        trace=trace,
    )