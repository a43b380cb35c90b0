# storefront/services/api_client.py
import asyncio
import json
import logging
from collections.abc import Mapping
from typing import Any, Dict, Optional

import aiohttp

from ..config import Config, normalize_api_url
from ..exceptions import ApiError, TransportError
from ..i18n.locale import LocaleState


class ApiClient:
    """JSON client for the storefront backend"""

    def __init__(self, base_url: str = Config.API_URL,
                 locale: Optional[LocaleState] = None,
                 token: Optional[str] = None,
                 session: Optional[aiohttp.ClientSession] = None):
        self.base_url = normalize_api_url(base_url)
        self.locale = locale
        self.token = token
        self.session = session
        self._owns_session = session is None
        self.logger = logging.getLogger(__name__)

    async def connect(self):
        """Open the HTTP session"""
        if self.session is None or self.session.closed:
            self.session = aiohttp.ClientSession(headers={
                "Content-Type": "application/json",
                "Accept": "application/json",
            })
            self._owns_session = True
            self.logger.info(f"API session opened for {self.base_url}")

    async def close(self):
        """Close the HTTP session if this client opened it"""
        if self.session and self._owns_session and not self.session.closed:
            await self.session.close()
            self.logger.info("API session closed")

    async def __aenter__(self) -> "ApiClient":
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()

    def _headers(self) -> Dict[str, str]:
        headers = {}
        if self.locale is not None:
            headers["Accept-Language"] = self.locale.locale
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    async def request(self, method: str, path: str, *,
                      params: Optional[Dict[str, Any]] = None,
                      data: Any = None) -> Any:
        """Send a request and return the decoded JSON body (None when empty)"""
        await self.connect()
        url = f"{self.base_url}/{path.lstrip('/')}"
        if params:
            params = {key: str(value) for key, value in params.items() if value is not None}

        try:
            async with self.session.request(
                method, url, params=params, json=data, headers=self._headers()
            ) as response:
                body = await response.read()
                payload = self._decode(body, response.charset or "utf-8", response.status)
                if response.status >= 400:
                    message = self._error_message(payload) or response.reason or f"HTTP {response.status}"
                    self.logger.error(f"API error {response.status} on {method} {path}: {message}")
                    raise ApiError(message, status=response.status, payload=payload)
                return payload
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            self.logger.error(f"Request {method} {path} failed: {e}")
            raise TransportError(f"Request {method} {path} failed: {e}") from e

    async def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        return await self.request("GET", path, params=params)

    async def post(self, path: str, data: Any = None) -> Any:
        return await self.request("POST", path, data=data)

    async def put(self, path: str, data: Any = None) -> Any:
        return await self.request("PUT", path, data=data)

    async def delete(self, path: str) -> Any:
        return await self.request("DELETE", path)

    @staticmethod
    def _decode(body: bytes, charset: str, status: int) -> Any:
        if not body.strip():
            return None
        try:
            return json.loads(body.decode(charset))
        except (ValueError, LookupError) as e:
            if status >= 400:
                return None
            raise TransportError(f"Invalid JSON in response: {e}") from e

    @staticmethod
    def _error_message(payload: Any) -> Optional[str]:
        if isinstance(payload, Mapping):
            message = payload.get("message") or payload.get("error")
            if message:
                return str(message)
        return None
