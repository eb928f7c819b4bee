"""Best-effort public IP lookup, shown by `freepik-studio status`"""

import logging
from typing import Sequence

import httpx

logger = logging.getLogger(__name__)

IP_SERVICES = (
    "https://api.ipify.org?format=json",
    "https://ipapi.co/json/",
    "https://api.myip.com",
)

UNDETECTED = "Unable to detect"
DETECTION_FAILED = "IP Detection Failed"


async def get_public_ip(services: Sequence[str] = IP_SERVICES, timeout: float = 10.0) -> str:
    """
    Ask each service in turn; the first OK response wins.

    Never raises and never retries. Services report the address under
    ``ip`` or ``query``.
    """
    async with httpx.AsyncClient(timeout=timeout) as client:
        for service in services:
            try:
                response = await client.get(service)
                if response.status_code != 200:
                    continue
                data = response.json()
            except (httpx.HTTPError, ValueError) as e:
                logger.debug(f"IP service {service} failed: {e}")
                continue
            if not isinstance(data, dict):
                return UNDETECTED
            return data.get("ip") or data.get("query") or UNDETECTED

    return DETECTION_FAILED
