import json

import pytest

from hawktimer.sync import (
    BroadcastChannel,
    BroadcastTransport,
    DirectTransport,
    TimerReceiver,
    build_message,
)
from hawktimer.validation import validate_config

CONFIG = validate_config({"durationSec": 300, "format": "MM:SS"})


@pytest.fixture
def channel_name(request):
    return f"test-channel-{request.node.name}"


def test_build_message_shape_and_copy():
    config = validate_config({})
    message = build_message("start", config)
    assert message["type"] == "TIMER_UPDATE"
    assert message["payload"]["command"] == "start"
    assert message["payload"]["config"] == config
    assert message["payload"]["config"] is not config
    with pytest.raises(ValueError):
        build_message("stop", config)


def test_direct_transport_drops_without_target():
    transport = DirectTransport()
    transport.send(build_message("start", CONFIG))
    receiver = TimerReceiver(closed=True)
    transport.attach(receiver)
    transport.send(build_message("start", CONFIG))
    assert receiver.applied == 0


def test_direct_transport_delivers_copy():
    receiver = TimerReceiver()
    transport = DirectTransport(receiver)
    message = build_message("start", CONFIG)
    transport.send(message)
    assert receiver.status == "running"
    assert receiver.config == CONFIG
    assert receiver.config is not message["payload"]["config"]


def test_broadcast_reaches_current_listeners_only(channel_name):
    sender = BroadcastChannel(channel_name)
    early = BroadcastChannel(channel_name)
    seen_early, seen_self, seen_late = [], [], []
    early.add_listener(seen_early.append)
    sender.add_listener(seen_self.append)

    BroadcastTransport(sender).send(build_message("reset", CONFIG))
    late = BroadcastChannel(channel_name)
    late.add_listener(seen_late.append)

    assert len(seen_early) == 1
    assert seen_self == []
    assert seen_late == []
    for chan in (sender, early, late):
        chan.close()


def test_closed_channel_stops_receiving(channel_name):
    sender = BroadcastChannel(channel_name)
    other = BroadcastChannel(channel_name)
    seen = []
    other.add_listener(seen.append)
    other.close()
    sender.post_message(build_message("pause", CONFIG))
    assert seen == []
    sender.close()
    with pytest.raises(RuntimeError):
        sender.post_message(build_message("pause", CONFIG))


def test_both_channels_carry_identical_payloads(channel_name):
    sender = BroadcastChannel(channel_name)
    listener = BroadcastChannel(channel_name)
    direct_seen, broadcast_seen = [], []
    listener.add_listener(broadcast_seen.append)

    class _Surface:
        closed = False

        def post_message(self, message):
            direct_seen.append(message)

    message = build_message("start", CONFIG)
    for transport in (DirectTransport(_Surface()), BroadcastTransport(sender)):
        transport.send(message)
    assert json.dumps(direct_seen[0], sort_keys=True) == json.dumps(broadcast_seen[0], sort_keys=True)
    sender.close()
    listener.close()


def test_receiver_state_transitions():
    receiver = TimerReceiver()
    receiver.apply(build_message("start", CONFIG))
    assert receiver.status == "running" and receiver.remaining_sec == 300
    receiver.apply(build_message("pause", CONFIG))
    assert receiver.status == "paused"
    receiver.apply(build_message("reset", CONFIG))
    assert receiver.status == "idle" and receiver.remaining_sec == 300


def test_repeated_update_is_a_no_op():
    once, twice = TimerReceiver(), TimerReceiver()
    message = build_message("start", CONFIG)
    once.apply(message)
    assert twice.apply(message) is True
    assert twice.apply(build_message("start", CONFIG)) is False
    assert (once.status, once.config, once.remaining_sec, once.applied) == (
        twice.status,
        twice.config,
        twice.remaining_sec,
        twice.applied,
    )


def test_receiver_ignores_malformed_messages():
    receiver = TimerReceiver()
    assert receiver.apply({"type": "OTHER"}) is False
    assert receiver.apply({"type": "TIMER_UPDATE", "payload": {"command": "start", "config": None}}) is False
    assert receiver.apply({"type": "TIMER_UPDATE", "payload": {"command": "jump", "config": {}}}) is False
    assert receiver.apply("junk") is False
    assert receiver.applied == 0


def test_receiver_validates_incoming_config():
    receiver = TimerReceiver()
    receiver.apply({"type": "TIMER_UPDATE", "payload": {"command": "reset", "config": {"durationSec": -5}}})
    assert receiver.config == validate_config({})
    assert receiver.remaining_sec == 1200


def test_receiver_notifies_observers():
    receiver = TimerReceiver()
    seen = []
    receiver.subscribe(lambda r: seen.append(r.status))
    message = build_message("start", CONFIG)
    receiver.post_message(message)
    receiver.post_message(message)
    assert seen == ["running"]
