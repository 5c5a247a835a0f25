"""Session control messages exchanged between host and viewer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar

from duplexkit.wire import DecodeError, Reader, Writer


class SessionState(Enum):
    WAITING_AUTH = 0
    AUTHORIZED = 1
    STREAMING = 2
    REJECTED = 3
    DISCONNECTED = 4


class ControlMessage:
    """Base class of all control messages."""

    _tag: ClassVar[int]

    def encode(self) -> bytes:
        writer = Writer().varint(self._tag)
        self._write_fields(writer)
        return writer.getvalue()

    def _write_fields(self, writer: Writer) -> None:
        """Messages without payload write nothing."""


@dataclass(frozen=True)
class AuthRequest(ControlMessage):
    device_name: str
    device_code: str
    _tag: ClassVar[int] = 0

    def _write_fields(self, writer: Writer) -> None:
        writer.string(self.device_name).string(self.device_code)


@dataclass(frozen=True)
class AuthDecision(ControlMessage):
    accepted: bool
    reason: str
    _tag: ClassVar[int] = 1

    def _write_fields(self, writer: Writer) -> None:
        writer.boolean(self.accepted).string(self.reason)


@dataclass(frozen=True)
class SessionStateMessage(ControlMessage):
    state: SessionState
    _tag: ClassVar[int] = 2

    def _write_fields(self, writer: Writer) -> None:
        writer.varint(self.state.value)


@dataclass(frozen=True)
class Disconnect(ControlMessage):
    reason: str
    _tag: ClassVar[int] = 3

    def _write_fields(self, writer: Writer) -> None:
        writer.string(self.reason)


@dataclass(frozen=True)
class Ping(ControlMessage):
    _tag: ClassVar[int] = 4


@dataclass(frozen=True)
class Pong(ControlMessage):
    _tag: ClassVar[int] = 5


def _read_state(reader: Reader) -> SessionState:
    value = reader.varint()
    try:
        return SessionState(value)
    except ValueError as exc:
        raise DecodeError(f"unknown session state: {value}") from exc


def decode_control(data: bytes) -> ControlMessage:
    """Decode a control message; trailing bytes are ignored."""
    reader = Reader(data)
    tag = reader.varint()
    match tag:
        case 0:
            return AuthRequest(reader.string(), reader.string())
        case 1:
            return AuthDecision(reader.boolean(), reader.string())
        case 2:
            return SessionStateMessage(_read_state(reader))
        case 3:
            return Disconnect(reader.string())
        case 4:
            return Ping()
        case 5:
            return Pong()
    raise DecodeError(f"unknown control message variant: {tag}")