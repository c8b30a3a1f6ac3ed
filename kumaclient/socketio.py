"""A small Socket.IO v5 client over the Engine.IO v4 WebSocket transport."""

from __future__ import annotations

import asyncio
import inspect
import itertools
import json
import logging
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Callable, Optional
from urllib.parse import urlsplit, urlunsplit

import websockets
from websockets.exceptions import ConnectionClosed, WebSocketException

logger = logging.getLogger(__name__)

_DIGITS = "0123456789"


class PacketType(IntEnum):
    """Socket.IO packet types."""

    CONNECT = 0
    DISCONNECT = 1
    EVENT = 2
    ACK = 3
    CONNECT_ERROR = 4
    BINARY_EVENT = 5
    BINARY_ACK = 6


_BINARY = (PacketType.BINARY_EVENT, PacketType.BINARY_ACK)


class SocketIOError(Exception):
    """A protocol or transport failure."""


def _json_default(value: Any) -> Any:
    to_dict = getattr(value, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    raise TypeError(f"object of type {type(value).__name__} is not JSON serializable")


@dataclass
class Packet:
    """One Socket.IO packet."""

    type: PacketType
    data: Any = None
    id: Optional[int] = None
    namespace: str = "/"
    attachments: int = 0

    def encode(self) -> str:
        """Return the packet's text form."""
        parts = [str(int(self.type))]
        if self.type in _BINARY:
            parts.append(f"{self.attachments}-")
        if self.namespace != "/":
            parts.append(f"{self.namespace},")
        if self.id is not None:
            parts.append(str(self.id))
        if self.data is not None:
            try:
                parts.append(
                    json.dumps(
                        self.data,
                        separators=(",", ":"),
                        ensure_ascii=False,
                        default=_json_default,
                    )
                )
            except (TypeError, ValueError) as exc:
                raise SocketIOError(f"encode packet: {exc}") from exc
        return "".join(parts)

    @classmethod
    def decode(cls, data: str) -> Packet:
        """Parse a packet from its text form."""
        if not data or data[0] not in _DIGITS:
            raise SocketIOError(f"invalid packet: {data!r}")
        try:
            packet_type = PacketType(int(data[0]))
        except ValueError as exc:
            raise SocketIOError(f"unknown packet type {data[0]}") from exc
        rest = data[1:]

        attachments = 0
        if packet_type in _BINARY:
            count, separator, rest = rest.partition("-")
            if not separator or not count or any(ch not in _DIGITS for ch in count):
                raise SocketIOError(f"invalid attachment count in {data!r}")
            attachments = int(count)

        namespace = "/"
        if rest.startswith("/"):
            namespace, _, rest = rest.partition(",")

        digits = len(rest) - len(rest.lstrip(_DIGITS))
        packet_id = int(rest[:digits]) if digits else None
        rest = rest[digits:]

        payload = None
        if rest:
            try:
                payload = json.loads(rest)
            except json.JSONDecodeError as exc:
                raise SocketIOError(f"invalid packet payload: {exc}") from exc
        return cls(packet_type, payload, packet_id, namespace, attachments)


def _websocket_url(url: str) -> str:
    parts = urlsplit(url)
    scheme = {"http": "ws", "https": "wss", "ws": "ws", "wss": "wss"}.get(
        parts.scheme.lower()
    )
    if scheme is None:
        raise SocketIOError(f"unsupported url scheme: {parts.scheme!r}")
    path = parts.path.rstrip("/") + "/socket.io/"
    return urlunsplit((scheme, parts.netloc, path, "EIO=4&transport=websocket", ""))


def _parse_open(message: Any) -> dict[str, Any]:
    if not isinstance(message, str) or not message.startswith("0"):
        raise SocketIOError(f"unexpected handshake message: {message!r}")
    try:
        info = json.loads(message[1:])
    except json.JSONDecodeError as exc:
        raise SocketIOError(f"invalid handshake payload: {exc}") from exc
    if not isinstance(info, dict):
        raise SocketIOError("invalid handshake payload: expected an object")
    return info


async def _call(handler: Callable[..., Any], *args: Any) -> None:
    try:
        result = handler(*args)
        if inspect.isawaitable(result):
            await result
    except Exception:
        logger.exception("event handler failed")


class SocketIOClient:
    """Client for the default namespace of a Socket.IO server.

    Handlers registered with :meth:`on` receive the event arguments;
    "connect" and "disconnect" handlers receive none. Handlers may be
    plain functions or coroutine functions.
    """

    def __init__(self, url: str, *, open_timeout: float = 10.0) -> None:
        self.websocket_url = _websocket_url(url)
        self.open_timeout = open_timeout
        self.session: dict[str, Any] = {}
        self._handlers: dict[str, list[Callable[..., Any]]] = {}
        self._any_handlers: list[Callable[[str, list[Any]], Any]] = []
        self._acks: dict[int, Callable[..., Any]] = {}
        self._ack_ids = itertools.count()
        self._ws: Any = None
        self._reader: Optional[asyncio.Task[None]] = None

    @property
    def connected(self) -> bool:
        return self._ws is not None

    def on(self, event: str, handler: Callable[..., Any]) -> None:
        """Register ``handler`` for ``event``."""
        self._handlers.setdefault(event, []).append(handler)

    def on_any(self, handler: Callable[[str, list[Any]], Any]) -> None:
        """Register ``handler`` for every event, called with name and arguments."""
        self._any_handlers.append(handler)

    async def connect(self) -> None:
        """Open the transport and request the default namespace."""
        if self._ws is not None:
            raise SocketIOError("already connected")
        try:
            ws = await websockets.connect(self.websocket_url, open_timeout=self.open_timeout)
        except (OSError, asyncio.TimeoutError, WebSocketException) as exc:
            raise SocketIOError(f"open websocket: {exc}") from exc
        try:
            opening = await asyncio.wait_for(ws.recv(), self.open_timeout)
            self.session = _parse_open(opening)
            await ws.send("4" + Packet(PacketType.CONNECT).encode())
        except SocketIOError:
            await ws.close()
            raise
        except (asyncio.TimeoutError, WebSocketException) as exc:
            await ws.close()
            raise SocketIOError(f"handshake: {exc}") from exc
        self._ws = ws
        self._reader = asyncio.create_task(self._read(ws))

    async def emit(
        self, event: str, *args: Any, ack: Optional[Callable[..., Any]] = None
    ) -> None:
        """Send ``event``; ``ack`` is called with the server's acknowledgement."""
        ws = self._ws
        if ws is None:
            raise SocketIOError("not connected")
        packet_id = next(self._ack_ids) if ack is not None else None
        text = "4" + Packet(PacketType.EVENT, [event, *args], packet_id).encode()
        if packet_id is not None and ack is not None:
            self._acks[packet_id] = ack
        try:
            await ws.send(text)
        except ConnectionClosed as exc:
            if packet_id is not None:
                self._acks.pop(packet_id, None)
            raise SocketIOError(f"send {event}: {exc}") from exc

    async def close(self) -> None:
        """Leave the namespace and close the transport."""
        ws, reader = self._ws, self._reader
        self._ws = None
        self._reader = None
        if ws is None:
            return
        try:
            await ws.send("4" + Packet(PacketType.DISCONNECT).encode())
        except ConnectionClosed:
            pass
        await ws.close()
        if reader is not None and reader is not asyncio.current_task():
            try:
                await asyncio.wait_for(reader, 5.0)
            except asyncio.TimeoutError:
                logger.warning("reader did not stop in time")

    async def _read(self, ws: Any) -> None:
        try:
            async for message in ws:
                if not isinstance(message, str):
                    logger.debug("ignoring binary frame")
                    continue
                await self._handle_message(ws, message)
        except ConnectionClosed:
            pass
        finally:
            if self._ws is ws:
                self._ws = None
                self._reader = None
            self._acks.clear()
            await self._dispatch("disconnect", [])

    async def _handle_message(self, ws: Any, message: str) -> None:
        kind, payload = message[:1], message[1:]
        if kind == "2":
            await ws.send("3")
        elif kind == "4":
            try:
                packet = Packet.decode(payload)
            except SocketIOError as exc:
                logger.warning("dropping packet: %s", exc)
                return
            await self._handle_packet(ws, packet)
        elif kind == "1":
            await ws.close()
        elif kind not in ("3", "6"):
            logger.debug("ignoring message %r", message)

    async def _handle_packet(self, ws: Any, packet: Packet) -> None:
        if packet.namespace != "/":
            return
        if packet.type is PacketType.CONNECT:
            await self._dispatch("connect", [])
        elif packet.type is PacketType.CONNECT_ERROR:
            await self._dispatch("connect_error", [packet.data])
        elif packet.type is PacketType.DISCONNECT:
            await ws.close()
        elif packet.type is PacketType.EVENT:
            data = packet.data
            if not isinstance(data, list) or not data or not isinstance(data[0], str):
                logger.warning("dropping malformed event %r", data)
                return
            event, args = data[0], data[1:]
            await self._dispatch(event, args)
            for handler in list(self._any_handlers):
                await _call(handler, event, args)
        elif packet.type is PacketType.ACK:
            callback = self._acks.pop(packet.id, None) if packet.id is not None else None
            if callback is None:
                return
            args = packet.data if isinstance(packet.data, list) else []
            await _call(callback, *args)
        else:
            logger.debug("binary packets are not supported")

    async def _dispatch(self, event: str, args: list[Any]) -> None:
        for handler in list(self._handlers.get(event, ())):
            await _call(handler, *args)