"""Listen key acquisition for user data streams."""

from __future__ import annotations

import asyncio
import logging

import aiohttp

from ..config import BASE_URL_FUTURES, FUTURES_LISTEN_KEY, ApiAuth
from ..core.exceptions import DecodeError, HttpResponseError
from ..utils.http import HTTPClient

logger = logging.getLogger(__name__)

API_KEY_HEADER = "X-MBX-APIKEY"


class ListenKeyClient:
    """Mints listen keys from the futures REST API.

    A POST to the listen key endpoint either creates a key or extends the
    validity of the active one, so the same call serves initial fetch and
    periodic renewal.
    """

    def __init__(
        self,
        api_auth: ApiAuth,
        base_url: str = BASE_URL_FUTURES,
        http: HTTPClient | None = None,
    ) -> None:
        self._api_auth = api_auth
        self._http = http or HTTPClient(base_url=base_url)

    async def fetch(self) -> str:
        """Return a listen key.

        Raises:
            HttpResponseError: Non-OK status, request failure or timeout
            DecodeError: Response body has no usable ``listenKey``
        """
        headers = {API_KEY_HEADER: self._api_auth.api_key}
        try:
            data = await self._http.post(FUTURES_LISTEN_KEY, headers=headers)
        except aiohttp.ClientResponseError as e:
            raise HttpResponseError(
                f"Not-OK status code received {e.status}: {e.message}", status_code=e.status
            ) from e
        except aiohttp.ClientError as e:
            raise HttpResponseError(f"Listen key request failed: {e}") from e
        except asyncio.TimeoutError as e:
            # aiohttp's total timeout is not a ClientError
            raise HttpResponseError("Listen key request timed out") from e
        except ValueError as e:
            raise DecodeError(f"Listen key response is not JSON: {e}") from e

        listen_key = data.get("listenKey") if isinstance(data, dict) else None
        if not isinstance(listen_key, str) or not listen_key:
            raise DecodeError(f"No listenKey in response: {data!r}", payload=repr(data))
        logger.debug("Listen key obtained")
        return listen_key

    async def close(self) -> None:
        await self._http.close()

    async def __aenter__(self) -> ListenKeyClient:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
