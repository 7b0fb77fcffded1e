"""HTTP transport for the CapsuleCRM API"""
import logging
import re
from typing import Optional, Union

import httpx

from capsule_crm.config import Settings
from capsule_crm.errors import error_for_status

logger = logging.getLogger(__name__)

LOCATION_ID = re.compile(r"/(\d+)/?$")


class Connection:
    """Thin wrapper around httpx that speaks the CapsuleCRM JSON conventions"""

    def __init__(self, settings: Settings, http_client: Optional[httpx.Client] = None):
        self.settings = settings
        if http_client is None:
            http_client = httpx.Client(
                base_url=settings.base_url,
                auth=(settings.capsule_api_token, "x"),
                timeout=settings.request_timeout,
            )
        self.client = http_client
        self.headers = {
            "Accept": "application/json",
            "Content-Type": "application/json",
            "User-Agent": settings.user_agent,
        }

    def __enter__(self) -> "Connection":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self.client.close()

    def get(self, path: str, params: Optional[dict] = None) -> dict:
        response = self._request("GET", path, params=params)
        return self._json(response) or {}

    def post(self, path: str, body: Optional[dict] = None) -> dict:
        """
        POST a JSON body

        CapsuleCRM answers creates with 201 and a Location header pointing at
        the new resource; in that case only the new id is returned.

        Returns:
            {"id": <int>} when a Location header is present, otherwise the
            decoded response body ({} when empty or not JSON)
        """
        response = self._request("POST", path, json=body)
        location = response.headers.get("Location")
        if location:
            match = LOCATION_ID.search(location)
            if match:
                return {"id": int(match.group(1))}
        return self._json(response) or {}

    def put(self, path: str, body: Optional[dict] = None) -> Union[dict, bool]:
        response = self._request("PUT", path, json=body)
        decoded = self._json(response)
        return True if decoded is None else decoded

    def delete(self, path: str) -> bool:
        response = self._request("DELETE", path)
        return response.is_success

    def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        logger.debug(f"{method} {path}")
        response = self.client.request(method, path, headers=self.headers, **kwargs)
        if not response.is_success:
            logger.error(f"{method} {path} failed with {response.status_code}")
            raise error_for_status(
                response.status_code,
                body=response.text,
                url=str(response.request.url),
            )
        return response

    @staticmethod
    def _json(response: httpx.Response) -> Optional[dict]:
        # Capsule answers some writes with an empty or plain text body
        if not response.content or "json" not in response.headers.get("Content-Type", ""):
            return None
        return response.json()
