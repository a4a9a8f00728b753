import httpx
import logging

from . import config

logger = logging.getLogger(__name__)


async def send_session_message(phone_number: str, message: str) -> dict:
    """Send a WhatsApp session message via WATI API."""
    url = f"{config.WATI_API_URL}/api/v1/sendSessionMessage/{phone_number}"
    headers = {
        "Authorization": f"Bearer {config.WATI_API_KEY}",
        "Content-Type": "application/x-www-form-urlencoded"
    }
    payload = {"messageText": message}
    async with httpx.AsyncClient(timeout=config.TRANSPORT_TIMEOUT_SECONDS) as client:
        try:
            response = await client.post(url, data=payload, headers=headers)
            logger.debug(f"[WATI] sendSessionMessage response: {response.status_code} {response.text}")
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as e:
            logger.error(f"[WATI] HTTP error sending message to {phone_number}: {e.response.text}")
            raise
        except httpx.RequestError as e:
            logger.error(f"[WATI] Request error sending message to {phone_number}: {e!r}")
            raise
