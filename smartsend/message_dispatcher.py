"""
Ordered delivery of split messages.

`send_chunked_messages` pushes an already split message through a transport
one part at a time, in order, pausing between parts so the channel does not
rate-limit or reorder them. Multi-part messages get an `_[i/N]_` suffix so the
recipient can follow the sequence even when other messages interleave.

Delivery is fail-fast: the first failed send aborts the remaining parts and
the transport's exception reaches the caller unchanged. Parts already accepted
stay delivered; nothing is retried or resumed.

Two deliveries to the same recipient must not run concurrently; wire order
only follows call order when sends are serialized.
"""
import asyncio
import logging
from typing import Any, Dict, List, Optional

from smartsend import config
from smartsend.models.delivery import DeliveryPolicy, DeliveryReceipt
from smartsend.utils.message_splitter import split_message

logger = logging.getLogger(__name__)


async def sleep(ms: float) -> None:
    """Suspend for `ms` milliseconds."""
    await asyncio.sleep(ms / 1000)


def add_part_indicator(text: str, part: int, total: int) -> str:
    """Append the compact `_[part/total]_` suffix used between sends."""
    if total <= 1:
        return text
    return f"{text}\n\n_[{part}/{total}]_"


def format_with_part_indicator(text: str, part: int, total: int, label: Optional[str] = None) -> str:
    """Append a banner-style continuation line, e.g. `_━━━ Part 2/3 ━━━_`."""
    if total <= 1:
        return text
    label = label or config.PART_LABEL
    return f"{text}\n\n_━━━ {label} {part}/{total} ━━━_"


def _receipt_id(result: Any) -> str:
    if isinstance(result, DeliveryReceipt):
        return result.id
    if isinstance(result, dict):
        return str(result.get("id") or "unknown")
    return str(getattr(result, "id", None) or "unknown")


def _split_with_indicator_room(text: str, max_length: int) -> List[str]:
    """Split so that every part plus its `_[i/N]_` suffix fits `max_length`."""
    chunks = split_message(text, max_length)
    total = len(chunks)
    while total > 1:
        room = len(add_part_indicator("", total, total))
        chunks = split_message(text, max(1, max_length - room))
        # A suffix for fewer parts is never longer, so only growth needs another pass
        if len(chunks) <= total:
            break
        total = len(chunks)
    return chunks


async def send_chunked_messages(
    transport,
    recipient: str,
    messages: List[str],
    policy: Optional[DeliveryPolicy] = None,
    quoted: Any = None,
) -> None:
    """
    Send multiple messages in order with a delay between them.

    Args:
        transport: Object exposing `async send(recipient, payload, options)`
        recipient: Channel-specific recipient id (JID, waId, subscriber id)
        messages: Parts to send, usually the output of `split_message`
        policy: Pacing/quoting policy (default: built from config)
        quoted: Optional message reference to reply to

    Raises:
        Whatever `transport.send` raises, re-raised after the first failure.
    """
    if policy is None:
        policy = DeliveryPolicy.from_config()
    total = len(messages)

    logger.info(f"[SmartSend] Sending {total} chunk(s) to {recipient}")

    for idx, message in enumerate(messages, 1):
        text_to_send = add_part_indicator(message, idx, total)

        options: Dict[str, Any] = {}
        if quoted is not None and (idx == 1 or not policy.quote_first_only):
            options["quoted"] = quoted

        try:
            logger.info(f"[SmartSend] Sending chunk {idx}/{total} ({len(text_to_send)} chars)")
            result = await transport.send(recipient, {"text": text_to_send}, options)
            logger.info(f"[SmartSend] Chunk {idx}/{total} sent successfully ({len(text_to_send)} chars), msgId: {_receipt_id(result)}")
        except Exception as e:
            logger.error(f"[SmartSend] FAILED to send chunk {idx}/{total} to {recipient}: {e}")
            raise

        # No pause after the last part
        if idx < total:
            await sleep(policy.inter_segment_delay_ms)


async def smart_send(
    transport,
    recipient: str,
    text: str,
    quoted: Any = None,
    delay_ms: Optional[int] = None,
    max_length: Optional[int] = None,
) -> None:
    """
    Split `text` and send the parts in order.

    `max_length` falls back to the transport's own `max_length`, then to
    WA_MESSAGE_LIMIT. It bounds the sent payload, part indicator included;
    a message that fits is sent unchanged. `delay_ms` overrides the
    configured pause.
    """
    if max_length is None:
        max_length = getattr(transport, "max_length", None) or config.WA_MESSAGE_LIMIT
    policy = DeliveryPolicy.from_config()
    if delay_ms is not None:
        policy = DeliveryPolicy(
            inter_segment_delay_ms=delay_ms,
            quote_first_only=policy.quote_first_only,
        )

    chunks = _split_with_indicator_room(text, max_length)
    if len(chunks) > 1:
        logger.info(f"[SmartSend] Message of {len(text)} chars split into {len(chunks)} parts (limit {max_length})")
    await send_chunked_messages(transport, recipient, chunks, policy=policy, quoted=quoted)
