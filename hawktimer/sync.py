"""Delivery of timer commands from the controller to display surfaces.

A command travels as a ``TIMER_UPDATE`` message through every configured
transport. Delivery is best effort: the direct transport drops messages while
its surface is missing or closed, and the broadcast channel only reaches
listeners subscribed when the message is posted.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Protocol

from .validation import validate_config

log = logging.getLogger(__name__)

TIMER_UPDATE = "TIMER_UPDATE"
COMMANDS = ("start", "pause", "reset")

Listener = Callable[[dict], None]


def build_message(command: str, config: dict) -> dict:
    if command not in COMMANDS:
        raise ValueError(f"unknown timer command: {command!r}")
    return {
        "type": TIMER_UPDATE,
        "payload": {"command": command, "config": copy.deepcopy(config)},
    }


class MessageTarget(Protocol):
    closed: bool

    def post_message(self, message: dict) -> None: ...


class Transport(Protocol):
    def send(self, message: dict) -> None: ...


class DirectTransport:
    """Hands messages to one surface held by reference."""

    def __init__(self, target: Optional[MessageTarget] = None):
        self.target = target

    def attach(self, target: Optional[MessageTarget]) -> None:
        self.target = target

    def send(self, message: dict) -> None:
        target = self.target
        if target is None or getattr(target, "closed", False):
            log.debug("no output surface, dropped %s", message["payload"]["command"])
            return
        target.post_message(copy.deepcopy(message))


class BroadcastChannel:
    """In-process named channel; instances sharing a name see each other.

    A posted message reaches every other open instance with that name, never
    the poster itself.
    """

    _registry: Dict[str, List["BroadcastChannel"]] = {}

    def __init__(self, name: str):
        self.name = name
        self.closed = False
        self._listeners: List[Listener] = []
        self._registry.setdefault(name, []).append(self)

    def add_listener(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def post_message(self, message: dict) -> None:
        if self.closed:
            raise RuntimeError(f"channel {self.name!r} is closed")
        for peer in list(self._registry.get(self.name, ())):
            if peer is self:
                continue
            for listener in list(peer._listeners):
                listener(copy.deepcopy(message))

    def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        peers = self._registry.get(self.name, [])
        if self in peers:
            peers.remove(self)
        if not peers:
            self._registry.pop(self.name, None)


class BroadcastTransport:
    def __init__(self, channel: BroadcastChannel):
        self.channel = channel

    def send(self, message: dict) -> None:
        self.channel.post_message(message)


@dataclass
class TimerReceiver:
    """Timer state held by a display surface.

    ``status`` is ``idle`` after a reset, ``running`` after start and
    ``paused`` after pause. The countdown itself is driven elsewhere.
    """

    status: str = "idle"
    config: Optional[dict] = None
    remaining_sec: float = 0
    closed: bool = False
    applied: int = 0
    _last: Optional[tuple] = field(default=None, repr=False)
    _observers: List[Callable[["TimerReceiver"], None]] = field(default_factory=list, repr=False)

    def subscribe(self, callback: Callable[["TimerReceiver"], None]) -> None:
        self._observers.append(callback)

    def post_message(self, message: dict) -> None:
        self.apply(message)

    def apply(self, message: dict) -> bool:
        """Apply a TIMER_UPDATE; False when ignored or a repeat of the last one."""
        if not isinstance(message, dict) or message.get("type") != TIMER_UPDATE:
            return False
        payload = message.get("payload")
        if not isinstance(payload, dict):
            return False
        command = payload.get("command")
        config = validate_config(payload.get("config"))
        if command not in COMMANDS or config is None:
            log.warning("ignored malformed timer update")
            return False
        key = (command, config)
        if key == self._last:
            return False
        self._last = key

        previous = self.config
        self.config = config
        if command == "reset" or previous is None or previous["durationSec"] != config["durationSec"]:
            self.remaining_sec = config["durationSec"]
        if command == "start":
            self.status = "running"
        elif command == "pause":
            self.status = "paused"
        else:
            self.status = "idle"
        self.applied += 1
        for callback in list(self._observers):
            callback(self)
        return True

    def close(self) -> None:
        self.closed = True


__all__ = [
    "BroadcastChannel",
    "BroadcastTransport",
    "COMMANDS",
    "DirectTransport",
    "TIMER_UPDATE",
    "TimerReceiver",
    "Transport",
    "build_message",
]
