"""
smartsend: split long chat replies and deliver them in order.

Components:
    - utils.message_splitter: cuts text into parts at natural boundaries
    - message_dispatcher: paced, ordered, fail-fast delivery of the parts
    - adapters: WATI and ManyChat transports for the dispatcher
"""
from smartsend.message_dispatcher import send_chunked_messages, smart_send
from smartsend.models.delivery import DeliveryPolicy, DeliveryReceipt
from smartsend.utils.message_splitter import WA_MESSAGE_LIMIT, split_message

__all__ = [
    "split_message",
    "send_chunked_messages",
    "smart_send",
    "DeliveryPolicy",
    "DeliveryReceipt",
    "WA_MESSAGE_LIMIT",
]
