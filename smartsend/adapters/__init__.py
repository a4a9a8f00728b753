"""Adapters package entry.

Provides a factory to obtain adapters by channel string.
"""
from typing import Dict

from smartsend.adapters.base_channel_adapter import ChannelAdapter, TransportError
from smartsend.adapters.manychat_adapter import ManyChatFBAdapter, ManyChatIGAdapter
from smartsend.adapters.wati_adapter import WatiAdapter


_ADAPTERS: Dict[str, ChannelAdapter] = {
    "wati": WatiAdapter(),
    "facebook": ManyChatFBAdapter(),
    "instagram": ManyChatIGAdapter(),
}


def get_adapter_for_channel(channel: str) -> ChannelAdapter:
    """Return a singleton adapter instance for the given channel."""
    adapter = _ADAPTERS.get(channel)
    if adapter is None:
        raise ValueError(f"No adapter for channel: {channel}")
    return adapter


__all__ = [
    "ChannelAdapter",
    "TransportError",
    "WatiAdapter",
    "ManyChatFBAdapter",
    "ManyChatIGAdapter",
    "get_adapter_for_channel",
]
