"""Encoded video packets as produced by an encoder."""

from __future__ import annotations

from dataclasses import dataclass

from duplexkit.video import VideoPacket


@dataclass(frozen=True)
class EncodedPacket:
    """Annex-B H.264 access unit with its keyframe flag."""

    data: bytes
    is_keyframe: bool
    timestamp_us: int

    def to_video_packet(self) -> VideoPacket:
        return VideoPacket(
            timestamp_us=self.timestamp_us,
            data=self.data,
            frame_id=0,
            trace=None,
        )


def packet_from_video(packet: VideoPacket, is_keyframe: bool) -> EncodedPacket:
    """Build an encoded packet from a received video packet."""
    return EncodedPacket(
        data=packet.data,
        is_keyframe=is_keyframe,
        timestamp_us=packet.timestamp_us,
    )