#!/usr/bin/env python3
"""
Tests for ordered, paced delivery of split messages
"""
import asyncio
import logging
import time
from unittest.mock import AsyncMock, call, patch

import pytest

from smartsend import config
from smartsend.message_dispatcher import (
    add_part_indicator,
    format_with_part_indicator,
    send_chunked_messages,
    smart_send,
)
from smartsend.models.delivery import DeliveryPolicy, DeliveryReceipt


class RecordingTransport:
    """Transport double that records every send and can fail on demand."""

    max_length = 3800

    def __init__(self, fail_on=None, error=None, events=None):
        self.calls = []
        self.sent_at = []
        self.fail_on = fail_on
        self.error = error or ConnectionError("socket closed")
        self.events = events if events is not None else []

    async def send(self, recipient, payload, options=None):
        self.calls.append((recipient, payload, options))
        self.sent_at.append(time.monotonic())
        self.events.append(("send", payload["text"]))
        if self.fail_on == len(self.calls):
            raise self.error
        return DeliveryReceipt(id=f"msg-{len(self.calls)}")


def _run(coro):
    return asyncio.run(coro)


class TestPartIndicator:

    def test_single_part_unchanged(self):
        assert add_part_indicator("hola", 1, 1) == "hola"
        assert format_with_part_indicator("hola", 1, 1) == "hola"

    def test_compact_indicator(self):
        assert add_part_indicator("hola", 2, 5) == "hola\n\n_[2/5]_"

    def test_banner_indicator_uses_configured_label(self):
        with patch.object(config, "PART_LABEL", "Bagian"):
            assert format_with_part_indicator("hola", 2, 3) == "hola\n\n_━━━ Bagian 2/3 ━━━_"
        assert format_with_part_indicator("hola", 1, 2, label="Parte") == "hola\n\n_━━━ Parte 1/2 ━━━_"


class TestSendChunkedMessages:

    def test_three_parts_in_order_with_delay(self):
        events = []
        transport = RecordingTransport(events=events)

        async def fake_sleep(ms):
            events.append(("sleep", ms))

        policy = DeliveryPolicy(inter_segment_delay_ms=500)
        with patch("smartsend.message_dispatcher.sleep", new=AsyncMock(side_effect=fake_sleep)) as sleep:
            _run(send_chunked_messages(transport, "628123", ["one", "two", "three"], policy=policy))

        assert sleep.await_args_list == [call(500), call(500)]
        assert [e[0] for e in events] == ["send", "sleep", "send", "sleep", "send"]
        texts = [payload["text"] for _, payload, _ in transport.calls]
        assert texts == ["one\n\n_[1/3]_", "two\n\n_[2/3]_", "three\n\n_[3/3]_"]
        assert all(recipient == "628123" for recipient, _, _ in transport.calls)

    def test_real_delay_between_sends(self):
        transport = RecordingTransport()
        policy = DeliveryPolicy(inter_segment_delay_ms=50)
        _run(send_chunked_messages(transport, "628123", ["a", "b", "c"], policy=policy))

        assert len(transport.calls) == 3
        gaps = [later - earlier for earlier, later in zip(transport.sent_at, transport.sent_at[1:])]
        assert all(gap >= 0.04 for gap in gaps)

    def test_single_part_has_no_indicator_and_no_delay(self):
        transport = RecordingTransport()
        with patch("smartsend.message_dispatcher.sleep", new=AsyncMock()) as sleep:
            _run(send_chunked_messages(transport, "628123", ["only"], policy=DeliveryPolicy()))

        assert transport.calls == [("628123", {"text": "only"}, {})]
        sleep.assert_not_awaited()

    def test_quote_first_only(self):
        transport = RecordingTransport()
        quoted = {"key": {"id": "ABC"}}
        with patch("smartsend.message_dispatcher.sleep", new=AsyncMock()):
            _run(send_chunked_messages(transport, "628123", ["a", "b", "c"], policy=DeliveryPolicy(), quoted=quoted))

        assert [options for _, _, options in transport.calls] == [{"quoted": quoted}, {}, {}]

    def test_quote_every_part(self):
        transport = RecordingTransport()
        policy = DeliveryPolicy(quote_first_only=False)
        with patch("smartsend.message_dispatcher.sleep", new=AsyncMock()):
            _run(send_chunked_messages(transport, "628123", ["a", "b"], policy=policy, quoted="ref"))

        assert [options for _, _, options in transport.calls] == [{"quoted": "ref"}, {"quoted": "ref"}]

    def test_no_quote_without_context(self):
        transport = RecordingTransport()
        policy = DeliveryPolicy(quote_first_only=False)
        with patch("smartsend.message_dispatcher.sleep", new=AsyncMock()):
            _run(send_chunked_messages(transport, "628123", ["a", "b"], policy=policy))

        assert [options for _, _, options in transport.calls] == [{}, {}]

    def test_failure_aborts_remaining_parts(self, caplog):
        error = ConnectionError("rate limited")
        transport = RecordingTransport(fail_on=2, error=error)

        with patch("smartsend.message_dispatcher.sleep", new=AsyncMock()) as sleep, \
             caplog.at_level(logging.INFO, logger="smartsend.message_dispatcher"):
            with pytest.raises(ConnectionError) as exc_info:
                _run(send_chunked_messages(transport, "628123", ["a", "b", "c"], policy=DeliveryPolicy()))

        assert exc_info.value is error
        assert len(transport.calls) == 2
        assert sleep.await_count == 1
        assert "FAILED to send chunk 2/3" in caplog.text

    def test_successful_sends_are_logged(self, caplog):
        transport = RecordingTransport()
        with patch("smartsend.message_dispatcher.sleep", new=AsyncMock()), \
             caplog.at_level(logging.INFO, logger="smartsend.message_dispatcher"):
            _run(send_chunked_messages(transport, "628123", ["a", "b"], policy=DeliveryPolicy()))

        assert "Sending chunk 1/2 (10 chars)" in caplog.text
        assert "Chunk 1/2 sent successfully (10 chars), msgId: msg-1" in caplog.text
        assert "Chunk 2/2 sent successfully (10 chars), msgId: msg-2" in caplog.text

    def test_dict_and_missing_receipts(self, caplog):
        transport = AsyncMock()
        transport.send.side_effect = [{"id": "wamid.9"}, None]
        with patch("smartsend.message_dispatcher.sleep", new=AsyncMock()), \
             caplog.at_level(logging.INFO, logger="smartsend.message_dispatcher"):
            _run(send_chunked_messages(transport, "628123", ["a", "b"], policy=DeliveryPolicy()))

        assert "msgId: wamid.9" in caplog.text
        assert "msgId: unknown" in caplog.text

    def test_default_policy_comes_from_config(self):
        transport = RecordingTransport()
        with patch.object(config, "MESSAGE_DELAY_MS", 123), \
             patch("smartsend.message_dispatcher.sleep", new=AsyncMock()) as sleep:
            _run(send_chunked_messages(transport, "628123", ["a", "b"]))

        assert sleep.await_args_list == [call(123)]


class TestSmartSend:

    def test_splits_then_sends(self):
        transport = RecordingTransport()
        with patch("smartsend.message_dispatcher.sleep", new=AsyncMock()) as sleep:
            _run(smart_send(transport, "628123", "Para one.\n\nPara two.", delay_ms=250, max_length=19))

        texts = [payload["text"] for _, payload, _ in transport.calls]
        assert texts == ["Para one.\n\n_[1/2]_", "Para two.\n\n_[2/2]_"]
        assert sleep.await_args_list == [call(250)]

    def test_uses_transport_limit(self):
        transport = RecordingTransport()
        transport.max_length = 19
        with patch("smartsend.message_dispatcher.sleep", new=AsyncMock()):
            _run(smart_send(transport, "628123", "Para one.\n\nPara two."))

        assert len(transport.calls) == 2
        assert all(len(payload["text"]) <= 19 for _, payload, _ in transport.calls)

    def test_falls_back_to_configured_limit(self):
        class BareTransport:
            def __init__(self):
                self.texts = []

            async def send(self, recipient, payload, options=None):
                self.texts.append(payload["text"])

        transport = BareTransport()
        with patch.object(config, "WA_MESSAGE_LIMIT", 20), \
             patch("smartsend.message_dispatcher.sleep", new=AsyncMock()):
            _run(smart_send(transport, "628123", "A" * 25))

        # Two parts at 20 chars no longer fit once the suffix is counted
        assert transport.texts == [
            "A" * 11 + "\n\n_[1/3]_",
            "A" * 11 + "\n\n_[2/3]_",
            "A" * 3 + "\n\n_[3/3]_",
        ]

    @pytest.mark.parametrize("text,max_length", [
        ("A" * 4500, 2000),
        ("word " * 300, 40),
        ("x, " * 500, 25),
        ("Para one.\n\n" * 40, 30),
    ])
    def test_payloads_stay_within_limit(self, text, max_length):
        transport = RecordingTransport()
        with patch("smartsend.message_dispatcher.sleep", new=AsyncMock()):
            _run(smart_send(transport, "628123", text, max_length=max_length))

        texts = [payload["text"] for _, payload, _ in transport.calls]
        assert len(texts) > 1
        assert all(len(t) <= max_length for t in texts)
        assert texts[-1].endswith(f"_[{len(texts)}/{len(texts)}]_")

    def test_text_at_limit_sent_unchanged(self):
        transport = RecordingTransport()
        with patch("smartsend.message_dispatcher.sleep", new=AsyncMock()):
            _run(smart_send(transport, "628123", "A" * 20, max_length=20))

        assert transport.calls == [("628123", {"text": "A" * 20}, {})]

    def test_short_text_single_send_with_quote(self):
        transport = RecordingTransport()
        with patch("smartsend.message_dispatcher.sleep", new=AsyncMock()) as sleep:
            _run(smart_send(transport, "628123", "Hola 🌴", quoted="ref"))

        assert transport.calls == [("628123", {"text": "Hola 🌴"}, {"quoted": "ref"})]
        sleep.assert_not_awaited()
