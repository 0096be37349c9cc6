from typing import Optional
import httpx

from ..utils.config import settings
from ..utils.logger import logger


class DeviceSettingsClient:
    """Resolves a device's timezone through the voice platform's settings API."""

    def __init__(self, timeout: Optional[float] = None, default_timezone: Optional[str] = None):
        self.timeout = timeout or settings.device_api_timeout
        self.default_timezone = default_timezone or settings.default_timezone

    async def get_timezone(
        self,
        api_endpoint: Optional[str],
        device_id: Optional[str],
        api_access_token: Optional[str]
    ) -> str:
        if not (api_endpoint and device_id and api_access_token):
            logger.info(f"No device settings available, using {self.default_timezone}")
            return self.default_timezone

        url = f"{api_endpoint}/v2/devices/{device_id}/settings/System.timeZone"
        headers = {"Authorization": f"Bearer {api_access_token}"}

        try:
            async with httpx.AsyncClient(timeout=httpx.Timeout(self.timeout)) as http_client:
                response = await http_client.get(url, headers=headers)
                response.raise_for_status()
                timezone = response.json()

        except httpx.HTTPError as e:
            logger.error(f"Device settings HTTP error: {e}")
            raise

        logger.info(f"Resolved device timezone: {timezone}")
        return timezone
