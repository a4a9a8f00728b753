"""Delivery models shared by the dispatcher and the channel adapters.

`DeliveryPolicy` carries the pacing/quoting knobs used while a segment
sequence is being sent. `DeliveryReceipt` is what an adapter hands back for
every accepted segment.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class DeliveryPolicy:
    """Pacing and quoting configuration applied at dispatch time.

    Attributes:
        inter_segment_delay_ms: Pause between two consecutive sends.
        quote_first_only: When a quoted message is supplied, attach it to the
            first segment only (True) or to every segment (False).
    """
    inter_segment_delay_ms: int = 500
    quote_first_only: bool = True

    @classmethod
    def from_config(cls) -> "DeliveryPolicy":
        from smartsend import config

        return cls(
            inter_segment_delay_ms=config.MESSAGE_DELAY_MS,
            quote_first_only=config.QUOTE_FIRST_ONLY,
        )


@dataclass
class DeliveryReceipt:
    """Acknowledgement of one accepted segment.

    Attributes:
        id: Provider message id, or "unknown" when the provider returns none.
        raw: Response body as returned by the provider.
    """
    id: str
    raw: Optional[Dict[str, Any]] = None

    @classmethod
    def from_response(cls, data: Optional[Dict[str, Any]]) -> "DeliveryReceipt":
        """Build a receipt from a provider JSON body."""
        if not isinstance(data, dict):
            return cls(id="unknown", raw=None)
        message = data.get("message") or {}
        msg_id = data.get("id") or data.get("message_id")
        if not msg_id and isinstance(message, dict):
            msg_id = message.get("id")
        return cls(id=str(msg_id) if msg_id else "unknown", raw=data)
