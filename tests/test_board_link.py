#!/usr/bin/env python3
"""Tests for BoardLink request matching, error replies and interrupt relay."""

import asyncio

import pytest

from boards import ESP32
from conftest import FakeTransport
from transport import BaseTransport, BoardLink, Message
from transport.protocol import (
    CMD_ANALOG_IN,
    CMD_ATTACH_INT,
    CMD_DIGITAL_IN,
    CMD_DIGITAL_OUT,
    CMD_ERROR,
    CMD_GET_ANGLES,
    CMD_GRIPPER_STATUS,
    CMD_INTERRUPT,
    CMD_PIN_MODE,
    CMD_PWM_OUT,
)
from utilities.errors import TransportError


async def settle():
    """Let the link's receive worker route everything queued so far."""
    for _ in range(5):
        await asyncio.sleep(0)


def test_base_transport_is_abstract():
    transport = BaseTransport()
    with pytest.raises(NotImplementedError):
        transport.send(Message(CMD_PIN_MODE, ("2", "OUTPUT")))
    with pytest.raises(NotImplementedError):
        asyncio.run(transport.receive())
    with pytest.raises(NotImplementedError):
        transport.clear_buffer()


def test_message_payload_normalisation():
    assert Message(CMD_ANALOG_IN, "34").payload == ("34",)
    assert Message(CMD_ANALOG_IN, None).payload == ()
    assert Message(CMD_ANALOG_IN, ["34"]) == Message(CMD_ANALOG_IN, ("34",))
    assert Message(CMD_ANALOG_IN, (1023,)).value == 1023
    assert Message(CMD_ANALOG_IN).value is None


def test_actuators_send_one_message_each(transport):
    async def scenario():
        link = BoardLink(transport, ESP32)
        await link.set_pin_mode("2", "OUTPUT")
        await link.set_digital_output("2", "HIGH")
        await link.set_pwm_output("4", 128, channel="3")
        await link.set_gripper_status("1")

    asyncio.run(scenario())
    assert transport.sent == [
        Message(CMD_PIN_MODE, ("2", "OUTPUT")),
        Message(CMD_DIGITAL_OUT, ("2", "HIGH")),
        Message(CMD_PWM_OUT, ("4", 128, "3")),
        Message(CMD_GRIPPER_STATUS, ("1",)),
    ]


def test_read_waits_for_matching_reply(transport):
    async def scenario():
        link = BoardLink(transport, ESP32)
        link.start()
        read = asyncio.create_task(link.read_analog_pin("34"))
        await settle()
        assert transport.sent == [Message(CMD_ANALOG_IN, ("34",))]
        transport.feed(Message(CMD_ANALOG_IN, (1234,)))
        value = await asyncio.wait_for(read, timeout=1)
        await link.stop()
        return value

    assert asyncio.run(scenario()) == 1234


def test_replies_match_fifo_per_command(transport):
    """Two reads of the same kind resolve in send order; other commands do not interfere."""
    async def scenario():
        link = BoardLink(transport, ESP32)
        link.start()
        first = asyncio.create_task(link.read_analog_pin("32"))
        digital = asyncio.create_task(link.read_digital_pin("4"))
        second = asyncio.create_task(link.read_analog_pin("33"))
        await settle()
        transport.feed(Message(CMD_DIGITAL_IN, ("1",)))
        transport.feed(Message(CMD_ANALOG_IN, (10,)))
        transport.feed(Message(CMD_ANALOG_IN, (20,)))
        results = await asyncio.wait_for(asyncio.gather(first, digital, second), timeout=1)
        await link.stop()
        return results

    assert asyncio.run(scenario()) == [10, True, 20]


def test_error_reply_fails_oldest_pending_request(transport):
    async def scenario():
        link = BoardLink(transport, ESP32)
        link.start()
        first = asyncio.create_task(link.read_analog_pin("32"))
        second = asyncio.create_task(link.read_touch_pin("4"))
        await settle()
        transport.feed(Message(CMD_ERROR))
        with pytest.raises(TransportError):
            await asyncio.wait_for(first, timeout=1)
        assert not second.done()
        await link.stop()
        with pytest.raises(TransportError):
            await second

    asyncio.run(scenario())


def test_error_reply_naming_a_command(transport):
    async def scenario():
        link = BoardLink(transport, ESP32)
        link.start()
        analog = asyncio.create_task(link.read_analog_pin("32"))
        digital = asyncio.create_task(link.read_digital_pin("4"))
        await settle()
        transport.feed(Message(CMD_ERROR, (CMD_DIGITAL_IN, "pin busy")))
        with pytest.raises(TransportError) as excinfo:
            await asyncio.wait_for(digital, timeout=1)
        assert "pin busy" in str(excinfo.value)
        assert excinfo.value.command == CMD_DIGITAL_IN
        transport.feed(Message(CMD_ANALOG_IN, (7,)))
        value = await asyncio.wait_for(analog, timeout=1)
        await link.stop()
        return value

    assert asyncio.run(scenario()) == 7


def test_error_for_an_actuator_leaves_reads_pending(transport):
    """An ERROR naming a fire-and-forget command must not fail an unrelated read."""
    async def scenario():
        link = BoardLink(transport, ESP32)
        link.start()
        await link.set_pin_mode("2", "OUTPUT")
        analog = asyncio.create_task(link.read_analog_pin("32"))
        await settle()
        transport.feed(Message(CMD_ERROR, (CMD_PIN_MODE, "bad mode")))
        await settle()
        still_waiting = not analog.done()
        transport.feed(Message(CMD_ANALOG_IN, (5,)))
        value = await asyncio.wait_for(analog, timeout=1)
        await link.stop()
        return still_waiting, value

    assert asyncio.run(scenario()) == (True, 5)


def test_commands_must_match_their_send_kind(transport):
    async def scenario():
        link = BoardLink(transport, ESP32)
        with pytest.raises(ValueError):
            link._command(CMD_ANALOG_IN, "32")
        with pytest.raises(ValueError):
            await link._request(CMD_PIN_MODE, "2", "OUTPUT")
        return link.pending_count

    assert asyncio.run(scenario()) == 0
    assert transport.sent == []


def test_send_failure_raises_transport_error():
    transport = FakeTransport(fail_send=OSError("port closed"))

    async def scenario():
        link = BoardLink(transport, ESP32)
        with pytest.raises(TransportError):
            await link.set_pin_mode("2", "OUTPUT")
        with pytest.raises(TransportError):
            await link.read_analog_pin("34")
        return link.pending_count

    assert asyncio.run(scenario()) == 0


def test_stop_fails_pending_requests(transport):
    async def scenario():
        link = BoardLink(transport, ESP32)
        link.start()
        read = asyncio.create_task(link.get_all_angles())
        await settle()
        assert transport.sent == [Message(CMD_GET_ANGLES)]
        await link.stop()
        with pytest.raises(TransportError):
            await read
        return link.running

    assert asyncio.run(scenario()) is False


def test_receive_failure_fails_pending(transport):
    async def scenario():
        link = BoardLink(transport, ESP32)
        link.start()
        read = asyncio.create_task(link.read_analog_pin("34"))
        await settle()
        transport.feed(OSError("device unplugged"))
        with pytest.raises(TransportError):
            await asyncio.wait_for(read, timeout=1)
        assert link.running, "A receive error must not kill the worker"
        await link.stop()

    asyncio.run(scenario())


def test_interrupt_messages_reach_registered_callback(transport):
    async def scenario():
        link = BoardLink(transport, ESP32)
        link.start()
        seen = []
        await link.attach_interrupt("4", "RISING", seen.append)
        transport.feed(Message(CMD_INTERRUPT, ("4",)))
        transport.feed(Message(CMD_INTERRUPT, ("5",)))
        await settle()
        await link.detach_interrupt("4")
        transport.feed(Message(CMD_INTERRUPT, ("4",)))
        await settle()
        await link.stop()
        return seen

    assert asyncio.run(scenario()) == ["4"]
    assert transport.sent[0] == Message(CMD_ATTACH_INT, ("4", "RISING"))


def test_unsolicited_reply_is_dropped(transport):
    async def scenario():
        link = BoardLink(transport, ESP32)
        link.start()
        transport.feed(Message(CMD_ANALOG_IN, (5,)))
        await settle()
        running = link.running
        await link.stop()
        return running

    assert asyncio.run(scenario())
