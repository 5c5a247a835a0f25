"""Wire protocol, H.264 framing, pixel-conversion and timing helpers for remote desktop streaming."""

__version__ = "0.1.0"

__all__ = [
    "avc",
    "codec",
    "color",
    "control",
    "frame",
    "h264",
    "imaging",
    "input",
    "timing",
    "video",
    "wire",
]