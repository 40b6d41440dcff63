from __future__ import annotations

import asyncio
import json
import logging
import urllib.error
import urllib.request
from typing import Any, Dict, Optional

from .errors import PayloadFailure, TransportFailure

logger = logging.getLogger(__name__)


class DashboardTransport:
    """
    Interface for reaching the dashboard backend.

    ``post`` sends a JSON body to ``path`` and returns the decoded JSON
    response. Implementations raise ``TransportFailure`` for network and HTTP
    errors and ``PayloadFailure`` when the body cannot be decoded.
    """

    async def post(self, path: str, body: Dict[str, Any]) -> Any:
        raise NotImplementedError


class HttpDashboardTransport(DashboardTransport):
    """
    JSON-over-HTTP transport built on ``urllib``.

    The blocking request runs in a worker thread so the event loop stays free
    while a dashboard fetch is in flight.
    """

    def __init__(self, base_url: str, api_token: Optional[str] = None, timeout_s: float = 15.0):
        self.base_url = base_url.rstrip("/")
        self.api_token = api_token
        self.timeout_s = timeout_s

    def _headers(self) -> Dict[str, str]:
        h = {"Content-Type": "application/json", "Accept": "application/json"}
        if self.api_token:
            h["Authorization"] = f"Bearer {self.api_token}"
        return h

    def _post_sync(self, path: str, body: Dict[str, Any]) -> Any:
        url = f"{self.base_url}{path}"
        data = json.dumps(body).encode("utf-8")
        req = urllib.request.Request(url, data=data, headers=self._headers(), method="POST")
        try:
            with urllib.request.urlopen(req, timeout=self.timeout_s) as resp:
                raw = resp.read()
        except urllib.error.HTTPError as exc:
            raise TransportFailure(f"{url} answered HTTP {exc.code}", status_code=exc.code) from exc
        except (urllib.error.URLError, TimeoutError, OSError) as exc:
            raise TransportFailure(f"Could not reach {url}: {exc}") from exc

        try:
            return json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise PayloadFailure(f"{url} returned a body that is not JSON") from exc

    async def post(self, path: str, body: Dict[str, Any]) -> Any:
        logger.debug("POST %s%s %s", self.base_url, path, body)
        return await asyncio.to_thread(self._post_sync, path, body)
