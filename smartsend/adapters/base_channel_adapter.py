"""Abstract base interface for channel adapters.

An adapter is the transport the dispatcher sends through: one call to
`send` delivers one text segment to one recipient and returns a receipt.

Note: Keep implementations channel-specific in concrete adapters.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from smartsend.models.delivery import DeliveryReceipt


class TransportError(Exception):
    """Raised when an adapter cannot reach its provider (e.g. missing credentials)."""
    pass


class ChannelAdapter(ABC):
    """Base adapter contract for all channels."""

    # Longest text the channel displays well in a single message
    max_length: int = 3800

    @abstractmethod
    async def send(
        self,
        recipient: str,
        payload: Dict[str, Any],
        options: Optional[Dict[str, Any]] = None,
    ) -> DeliveryReceipt:
        """Send one text segment to the recipient.

        Args:
            recipient: Channel-specific user id (e.g., waId, subscriber.id).
            payload: {"text": str}.
            options: Optional send options, e.g. {"quoted": <message ref>}.

        Returns:
            Receipt for the accepted message.

        Raises:
            Whatever the underlying client raises; adapters never swallow
            delivery failures.
        """
        raise NotImplementedError
