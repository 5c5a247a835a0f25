# duplexkit

Building blocks for a remote-desktop session in pure Python. In such a session
the host streams screen frames to a viewer, and the viewer sends mouse and
keyboard input back. duplexkit provides the data formats and the byte-level
processing around those streams. It has no dependencies outside the standard
library.

## What is in it

- **`duplexkit.wire`**: the compact binary encoding that the messages use.
  `Writer` and `Reader` handle varints, booleans, f32 values, length-prefixed
  blobs and strings, and optional-value markers. `Reader` raises
  `DecodeError`, a subclass of `ValueError`, when the data is malformed or
  truncated.
- **`duplexkit.control`**: session control messages. The message classes are
  `AuthRequest`, `AuthDecision`, `SessionStateMessage` (which carries a
  `SessionState`), `Disconnect`, `Ping` and `Pong`. Each has an `encode()`
  method, and `decode_control()` reads a message back.
- **`duplexkit.input`**: input events. The event classes are `MouseMove`,
  `MouseDown`, `MouseUp`, `MouseScroll`, `KeyDown` and `KeyUp`. They use
  `NormalizedPos`, `MouseButton` and `Modifiers`. Use `InputEvent.encode()`
  to write an event and `decode_input()` to read one.
- **`duplexkit.video`**: `VideoPacket`, which can carry a `VideoTrace`.
  `VideoPacket.encode()` and `decode_video_packet()` convert it to and from
  bytes.
- **`duplexkit.frame`**: `Frame` is a BGRA frame whose rows may be padded.
  `ScapConfig` holds capture settings and defaults to display 0 at 30 fps in
  BGRA. `DisplayInfo` describes a display. `PixelFormat.BGRA.to_cv_pixel_format()`
  returns the four-character code `0x42475241`.
- **`duplexkit.codec`**: `EncodedPacket` is an Annex-B access unit with a
  keyframe flag. `EncodedPacket.to_video_packet()` and `packet_from_video()`
  convert it to and from `VideoPacket`.
- **`duplexkit.h264`**: functions for H.264 byte streams.
  - `split_annexb()`, `is_annexb()` and `nal_type()` split and inspect NAL units.
  - `has_idr()` and `has_sps_pps()` report whether a stream holds an IDR slice
    or parameter sets.
  - `avcc_to_annexb()` and `avcc_seq_to_annexb()` convert from AVCC framing.
  - `package_sample()` turns encoder output into an `EncodedPacket`. When a
    keyframe lacks SPS and PPS, it prepends the sequence header.
- **`duplexkit.avc`**: `extract_sps_pps()` finds the parameter sets in an
  Annex-B stream. `annexb_to_avcc()` re-frames a stream with 4-byte length
  prefixes and drops the SPS and PPS units.
- **`duplexkit.color`**: conversion between BGRA and NV12 using BT.601
  video-range integer maths.
  - `bgra_to_nv12()` returns packed NV12 bytes.
  - `bgra_to_nv12_planes()` returns an `NV12Frame` whose rows are aligned to
    64 bytes; `aligned_stride()` gives that row length.
  - `nv12_to_bgra()` converts NV12 back to BGRA.
  - `probe_nv12()` returns a black NV12 frame.
- **`duplexkit.imaging`**: `bgra_to_rgba()` and `bgra_to_rgb()` repack the
  pixels of a `Frame`. `avg_luma_bgra()` computes the average luma over a grid
  of sampled pixels.
- **`duplexkit.timing`**: timestamp arithmetic.
  - `frame_duration_100ns()` returns the length of one frame.
  - `cm_time_to_micros()`, `sample_time_to_us()` and `us_to_sample_time()`
    convert between timestamp units.
  - `pack_u32()` packs two 32-bit values into one.
  - `TimestampNormalizer` shifts timestamps so that the first one becomes zero.

## What it does not do

duplexkit does not capture the screen. It does not run a hardware or software
video encoder or decoder, and it does not inject mouse or keyboard events into
the operating system. It has no network transport and no command-line program.
These steps must be supplied by the application. duplexkit handles the data
that passes between them.

## Install

```
pip install .
```

To install with the test dependencies:

```
pip install .[test]
```

## Example

```python
from duplexkit.input import KeyDown, Modifiers, MouseMove, NormalizedPos, decode_input

event = MouseMove(pos=NormalizedPos(x=0.5, y=0.25))
assert decode_input(event.encode()) == event

press = KeyDown(keycode=30, modifiers=Modifiers(ctrl=True))
assert decode_input(press.encode()) == press
```

```python
from duplexkit.color import bgra_to_nv12, nv12_to_bgra

bgra = bytes([0, 0, 255, 255]) * 4        # 2x2 red frame, stride 8
nv12 = bgra_to_nv12(bgra, 2, 2, 8)
back = nv12_to_bgra(nv12, 2, 2)
```

```python
from duplexkit.h264 import package_sample

packet = package_sample(b"\x00\x00\x00\x01\x65\x88", seq_header=None,
                        nal_len_size=4, clean_point=False, timestamp_us=0)
assert packet.is_keyframe
```

## Errors

Errors are raised as exceptions. Malformed wire data raises
`duplexkit.wire.DecodeError`. Invalid frames, sizes and bitstreams raise
`ValueError`.