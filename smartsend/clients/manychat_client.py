"""ManyChat client implementation.

Async client functions for Facebook and Instagram text delivery via ManyChat.
Errors follow the raise_for_status pattern: HTTPStatusError is logged with the
response body and re-raised so the dispatcher can abort the sequence.

Notes:
- FB and IG use the same endpoint path but different API keys.
- IG payloads carry an explicit "instagram" content type.
"""
from __future__ import annotations

from typing import Any, Dict
import logging

import httpx

from smartsend import config

logger = logging.getLogger(__name__)

_CHANNEL_TAGS = {"facebook": "FB", "instagram": "IG"}


def _api_key_for(channel: str) -> str:
    if channel == "instagram":
        return config.MANYCHAT_INSTAGRAM_API_KEY
    return config.MANYCHAT_API_KEY


async def send_text_message(subscriber_id: str, text: str, channel: str = "facebook") -> Dict[str, Any]:
    """Send text to a ManyChat subscriber using the channel's API key."""
    tag = _CHANNEL_TAGS.get(channel, channel)
    api_url = f"{config.MANYCHAT_API_URL}/fb/sending/sendContent"
    headers = {
        "Authorization": f"Bearer {_api_key_for(channel)}",
        "Content-Type": "application/json",
    }
    # ManyChat v2 payload
    content: Dict[str, Any] = {
        "messages": [
            {"type": "text", "text": text},
        ],
    }
    if channel == "instagram":
        content["type"] = "instagram"
    payload: Dict[str, Any] = {
        "subscriber_id": subscriber_id,
        "data": {"version": "v2", "content": content},
    }
    async with httpx.AsyncClient(timeout=config.TRANSPORT_TIMEOUT_SECONDS) as client:
        try:
            response = await client.post(api_url, json=payload, headers=headers)
            response.raise_for_status()
            logger.info(f"[{tag}] Text sent to {subscriber_id}: {response.json()}")
            return response.json()
        except httpx.HTTPStatusError as e:
            logger.error(f"[{tag}] Error sending text to {subscriber_id}: {e.response.text}")
            raise
        except httpx.RequestError as e:
            logger.error(f"[{tag}] Request error sending text to {subscriber_id}: {e!r}")
            raise
