"""
Paper retrieval engine: classify, request, parse and normalize
"""
from __future__ import annotations

import asyncio
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, List, Optional, Tuple, Union

from .config import Source
from .errors import RequestTimeout, RetrieverError
from .http import HttpClient, HttpResponse
from .models import Paper
from .normalizer import normalize
from .registry import Registry
from .request_builder import Request, build_request
from .response_parser import parse_response
from .settings import get_settings

logger = logging.getLogger(__name__)


class Retriever:
    """Fetch canonical paper records from any configured source"""

    def __init__(
        self,
        registry: Registry,
        http: Optional[HttpClient] = None,
        timeout: Optional[float] = None,
        max_workers: Optional[int] = None,
    ):
        """
        Initialize retriever

        Args:
            registry: Loaded sources, shared read-only by every fetch
            http: HTTP collaborator (a requests-backed client when omitted)
            timeout: Per-request deadline in seconds
            max_workers: Threads available for concurrent network calls
        """
        settings = get_settings()
        self.registry = registry
        self._owns_http = http is None
        self.http = http or HttpClient(user_agent=settings.user_agent)
        self.timeout = timeout if timeout is not None else settings.request_timeout
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers or settings.max_workers,
            thread_name_prefix="paperlearner-fetch",
        )

    def resolve(self, value: str) -> Tuple[Source, str]:
        """Classify an input into its source and identifier"""
        return self.registry.classify(value)

    def request_for(self, value: str) -> Request:
        source, identifier = self.resolve(value)
        return build_request(source, identifier)

    async def fetch(self, value: str) -> Paper:
        """
        Fetch one paper

        Args:
            value: URL or bare identifier

        Returns:
            Fully populated Paper

        Raises:
            NoMatchingSource: If no source accepts the input
            RequestFailed: If the server answers with a non-2xx status
            RequestTimeout: If the network step exceeds the deadline
            MalformedResponse: If the body is not valid JSON/XML
            ExtractionError: If a field is missing or cannot be transformed
        """
        source, identifier = self.resolve(value)
        request = build_request(source, identifier)
        logger.debug("Fetching %s:%s via %s", source.name, identifier, request.url)

        response = await self._download(request)

        # Bytes are in hand; parsing and normalization are not interruptible.
        document = parse_response(response.content, source.response_format)
        paper = normalize(document, source, identifier)
        logger.info("Fetched %s:%s %r", paper.source, paper.identifier, paper.title)
        return paper

    async def fetch_many(self, values: Iterable[str]) -> List[Union[Paper, RetrieverError]]:
        """Fetch several papers concurrently; failures are returned in place"""
        results = await asyncio.gather(
            *(self.fetch(value) for value in values),
            return_exceptions=True,
        )
        for result in results:
            if isinstance(result, BaseException) and not isinstance(result, RetrieverError):
                raise result
        return list(results)

    def fetch_sync(self, value: str) -> Paper:
        return asyncio.run(self.fetch(value))

    async def _download(self, request: Request) -> HttpResponse:
        loop = asyncio.get_running_loop()
        future = loop.run_in_executor(
            self._executor,
            self.http.get,
            request.url,
            request.headers,
            self.timeout,
        )
        try:
            return await asyncio.wait_for(future, timeout=self.timeout)
        except asyncio.TimeoutError as exc:
            raise RequestTimeout(request.url, self.timeout) from exc

    def close(self) -> None:
        self._executor.shutdown(wait=False, cancel_futures=True)
        if self._owns_http:
            self.http.close()

    def __enter__(self) -> "Retriever":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
