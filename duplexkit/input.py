"""Remote input events sent from viewer to host."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar

from duplexkit.wire import U32_MAX, DecodeError, Reader, Writer


@dataclass(frozen=True)
class NormalizedPos:
    """Mouse position with both axes in [0.0, 1.0]."""

    x: float
    y: float


class MouseButton(Enum):
    LEFT = 0
    RIGHT = 1
    MIDDLE = 2


@dataclass(frozen=True)
class Modifiers:
    shift: bool = False
    ctrl: bool = False
    alt: bool = False
    meta: bool = False


class InputEvent:
    """Base class of all input events."""

    _tag: ClassVar[int]

    def encode(self) -> bytes:
        writer = Writer().varint(self._tag)
        self._write_fields(writer)
        return writer.getvalue()

    def _write_fields(self, writer: Writer) -> None:
        raise NotImplementedError


def _write_pos(writer: Writer, pos: NormalizedPos) -> None:
    writer.f32(pos.x).f32(pos.y)


def _write_modifiers(writer: Writer, mods: Modifiers) -> None:
    writer.boolean(mods.shift).boolean(mods.ctrl).boolean(mods.alt).boolean(mods.meta)


def _check_keycode(keycode: int) -> None:
    if not 0 <= keycode <= U32_MAX:
        raise ValueError(f"keycode out of range: {keycode}")


@dataclass(frozen=True)
class MouseMove(InputEvent):
    pos: NormalizedPos
    _tag: ClassVar[int] = 0

    def _write_fields(self, writer: Writer) -> None:
        _write_pos(writer, self.pos)


@dataclass(frozen=True)
class MouseDown(InputEvent):
    pos: NormalizedPos
    button: MouseButton
    _tag: ClassVar[int] = 1

    def _write_fields(self, writer: Writer) -> None:
        _write_pos(writer, self.pos)
        writer.varint(self.button.value)


@dataclass(frozen=True)
class MouseUp(InputEvent):
    pos: NormalizedPos
    button: MouseButton
    _tag: ClassVar[int] = 2

    def _write_fields(self, writer: Writer) -> None:
        _write_pos(writer, self.pos)
        writer.varint(self.button.value)


@dataclass(frozen=True)
class MouseScroll(InputEvent):
    pos: NormalizedPos
    delta_x: float
    delta_y: float
    _tag: ClassVar[int] = 3

    def _write_fields(self, writer: Writer) -> None:
        _write_pos(writer, self.pos)
        writer.f32(self.delta_x).f32(self.delta_y)


@dataclass(frozen=True)
class KeyDown(InputEvent):
    keycode: int
    modifiers: Modifiers = field(default_factory=Modifiers)
    _tag: ClassVar[int] = 4

    def __post_init__(self) -> None:
        _check_keycode(self.keycode)

    def _write_fields(self, writer: Writer) -> None:
        writer.varint(self.keycode)
        _write_modifiers(writer, self.modifiers)


@dataclass(frozen=True)
class KeyUp(InputEvent):
    keycode: int
    modifiers: Modifiers = field(default_factory=Modifiers)
    _tag: ClassVar[int] = 5

    def __post_init__(self) -> None:
        _check_keycode(self.keycode)

    def _write_fields(self, writer: Writer) -> None:
        writer.varint(self.keycode)
        _write_modifiers(writer, self.modifiers)


def _read_pos(reader: Reader) -> NormalizedPos:
    return NormalizedPos(reader.f32(), reader.f32())


def _read_button(reader: Reader) -> MouseButton:
    value = reader.varint()
    try:
        return MouseButton(value)
    except ValueError as exc:
        raise DecodeError(f"unknown mouse button: {value}") from exc


def _read_keycode(reader: Reader) -> int:
    keycode = reader.varint()
    if keycode > U32_MAX:
        raise DecodeError(f"keycode out of range: {keycode}")
    return keycode


def _read_modifiers(reader: Reader) -> Modifiers:
    return Modifiers(reader.boolean(), reader.boolean(), reader.boolean(), reader.boolean())


def decode_input(data: bytes) -> InputEvent:
    """Decode an input event; trailing bytes are ignored."""
    reader = Reader(data)
    tag = reader.varint()
    match tag:
        case 0:
            return MouseMove(_read_pos(reader))
        case 1:
            return MouseDown(_read_pos(reader), _read_button(reader))
        case 2:
            return MouseUp(_read_pos(reader), _read_button(reader))
        case 3:
            return MouseScroll(_read_pos(reader), reader.f32(), reader.f32())
        case 4:
            return KeyDown(_read_keycode(reader), _read_modifiers(reader))
        case 5:
            return KeyUp(_read_keycode(reader), _read_modifiers(reader))
    raise DecodeError(f"unknown input event variant: {tag}")