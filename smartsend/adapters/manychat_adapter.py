"""ManyChat channel adapters (Facebook and Instagram).

Both channels go through the same ManyChat endpoint; they differ only in the
API key used and the content type of the payload.
"""
from __future__ import annotations

from typing import Any, Dict, Optional
import logging

from smartsend import config
from smartsend.adapters.base_channel_adapter import ChannelAdapter, TransportError
from smartsend.clients import manychat_client
from smartsend.models.delivery import DeliveryReceipt

logger = logging.getLogger(__name__)


class ManyChatFBAdapter(ChannelAdapter):
    """Adapter for ManyChat Facebook channel."""

    channel = "facebook"
    tag = "FB"
    max_length = 2000  # ManyChat rejects longer texts

    def _api_key(self) -> Optional[str]:
        return config.MANYCHAT_API_KEY

    async def send(
        self,
        recipient: str,
        payload: Dict[str, Any],
        options: Optional[Dict[str, Any]] = None,
    ) -> DeliveryReceipt:
        if not self._api_key():
            raise TransportError(f"[{self.tag}] ManyChat API key is not configured")
        if options and options.get("quoted"):
            logger.debug(f"[{self.tag}] Ignoring quoted context for {recipient}")
        data = await manychat_client.send_text_message(recipient, payload["text"], channel=self.channel)
        return DeliveryReceipt.from_response(data)


class ManyChatIGAdapter(ManyChatFBAdapter):
    """Adapter for ManyChat Instagram channel."""

    channel = "instagram"
    tag = "IG"

    def _api_key(self) -> Optional[str]:
        return config.MANYCHAT_INSTAGRAM_API_KEY
