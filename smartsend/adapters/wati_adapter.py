"""WATI channel adapter.

Delivers text segments to WhatsApp through the WATI session message API.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from smartsend import config, wati_client
from smartsend.adapters.base_channel_adapter import ChannelAdapter, TransportError
from smartsend.models.delivery import DeliveryReceipt

logger = logging.getLogger(__name__)


class WatiAdapter(ChannelAdapter):
    """Adapter for WhatsApp via Wati."""

    max_length = 3800

    async def send(
        self,
        recipient: str,
        payload: Dict[str, Any],
        options: Optional[Dict[str, Any]] = None,
    ) -> DeliveryReceipt:
        if not config.WATI_API_URL or not config.WATI_API_KEY:
            raise TransportError("WATI_API_URL and WATI_API_KEY must be configured")
        if options and options.get("quoted"):
            # sendSessionMessage has no reply threading
            logger.debug(f"[WATI] Ignoring quoted context for {recipient}")
        data = await wati_client.send_session_message(recipient, payload["text"])
        return DeliveryReceipt.from_response(data)
