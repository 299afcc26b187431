"""
Blocking HTTP collaborator used by the engine and PDF downloads
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional

import requests

from .. import __version__
from .errors import RequestFailed, RequestTimeout

DEFAULT_USER_AGENT = f"paperlearner/{__version__}"


@dataclass(frozen=True)
class HttpResponse:
    status: int
    content: bytes
    url: str = ""


class HttpClient:
    """One GET per call, no retries; non-2xx responses raise RequestFailed"""

    def __init__(self, user_agent: Optional[str] = None, session: Optional[requests.Session] = None):
        self.session = session or requests.Session()
        self.session.headers.update({"User-Agent": user_agent or DEFAULT_USER_AGENT})

    def get(
        self,
        url: str,
        headers: Optional[Mapping[str, str]] = None,
        timeout: float = 30.0,
    ) -> HttpResponse:
        try:
            response = self.session.get(url, headers=dict(headers or {}), timeout=timeout)
        except requests.Timeout as exc:
            raise RequestTimeout(url, timeout) from exc
        except requests.RequestException as exc:
            raise RequestFailed(None, url, detail=str(exc)) from exc

        if not 200 <= response.status_code < 300:
            raise RequestFailed(response.status_code, url)
        return HttpResponse(status=response.status_code, content=response.content, url=response.url)

    def close(self) -> None:
        self.session.close()
