# 📄 File: app/shared/infrastructure/external_apis/api_client.py

# 🧭 Purpose (Layman Explanation):
# A reliable HTTP helper for talking to outside services (the payment gateway, YouTube),
# retrying briefly when the network hiccups and reporting clear errors when they refuse.

# 🧪 Purpose (Technical Summary):
# Generic async JSON client over aiohttp with tenacity retries on transport errors and
# timeouts and status-code mapping onto ExternalServiceError.

# 🔗 Dependencies:
# - aiohttp: Async HTTP client
# - tenacity: Retry logic and backoff strategies

# 🔄 Connected Modules / Calls From:
# Used by: MidtransPaymentService (Snap API), YoutubeApiClient (Data API v3)

import asyncio
import logging
import time
from typing import Any, Dict, Optional

import aiohttp
from aiohttp import ClientSession, ClientTimeout
from tenacity import (
    before_sleep_log,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from app.shared.core.exceptions import ExternalServiceError

logger = logging.getLogger(__name__)


class APIClient:
    """
    Generic async HTTP client for external API integrations.

    Features:
    - Automatic retry with exponential backoff on transport failures
    - Status code to exception mapping
    - Request logging
    """

    def __init__(
        self,
        base_url: str,
        api_name: str,
        timeout: int = 30,
        default_headers: Optional[Dict[str, str]] = None,
        auth: Optional[aiohttp.BasicAuth] = None,
    ):
        self.base_url = base_url.rstrip('/')
        self.api_name = api_name
        self.timeout = timeout
        self.default_headers = default_headers or {}
        self.auth = auth
        self.session: Optional[ClientSession] = None

    async def initialize(self):
        """Create the underlying aiohttp session."""
        self.session = ClientSession(
            timeout=ClientTimeout(total=self.timeout),
            headers=self._get_default_headers(),
            auth=self.auth,
        )
        logger.info(f"API client initialized for {self.api_name}")

    def _get_default_headers(self) -> Dict[str, str]:
        headers = {
            'User-Agent': f'LearnHubLMS/1.0 ({self.api_name}-client)',
            'Accept': 'application/json',
            'Content-Type': 'application/json',
        }
        headers.update(self.default_headers)
        return headers

    def _build_url(self, endpoint: str) -> str:
        if not endpoint:
            return self.base_url
        return f"{self.base_url}/{endpoint.lstrip('/')}"

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=4, max=10),
        retry=retry_if_exception_type((aiohttp.ClientError, asyncio.TimeoutError)),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        reraise=True,
    )
    async def _send(self, method: str, url: str, **kwargs) -> Dict[str, Any]:
        if not self.session:
            await self.initialize()

        start_time = time.monotonic()
        async with self.session.request(method, url, **kwargs) as response:
            await self._handle_response_status(response)

            try:
                response_data = await response.json(content_type=None)
            except ValueError:
                response_data = {'raw_response': await response.text()}

            logger.info(
                f"{self.api_name} API request successful: "
                f"{method} {url} - {response.status} - {time.monotonic() - start_time:.2f}s"
            )
            return response_data

    async def _make_request(
        self,
        method: str,
        endpoint: str,
        params: Optional[Dict] = None,
        data: Optional[Dict] = None,
        headers: Optional[Dict] = None,
    ) -> Dict[str, Any]:
        """Make HTTP request with retry logic."""
        url = self._build_url(endpoint)
        request_kwargs: Dict[str, Any] = {}
        if params:
            request_kwargs['params'] = params
        if data is not None:
            request_kwargs['json'] = data
        if headers:
            request_kwargs['headers'] = headers

        try:
            return await self._send(method, url, **request_kwargs)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f"{self.api_name} request failed after retries: {method} {url}: {e!r}")
            raise self._transform_exception(e, method, url)

    async def _handle_response_status(self, response: aiohttp.ClientResponse):
        """Handle HTTP response status codes."""
        if 200 <= response.status < 300:
            return
        elif response.status == 401:
            raise ExternalServiceError(
                f"Authentication failed for {self.api_name}",
                service_name=self.api_name,
                upstream_status=401,
            )
        elif response.status == 403:
            raise ExternalServiceError(
                f"Access forbidden for {self.api_name}",
                service_name=self.api_name,
                upstream_status=403,
            )
        elif response.status == 429:
            retry_after = response.headers.get('Retry-After', '60')
            raise ExternalServiceError(
                f"Rate limit exceeded for {self.api_name}. Retry after {retry_after} seconds.",
                service_name=self.api_name,
                upstream_status=429,
            )
        elif 400 <= response.status < 500:
            response_text = await response.text()
            raise ExternalServiceError(
                f"Client error for {self.api_name} ({response.status}): {response_text}",
                service_name=self.api_name,
                upstream_status=response.status,
            )
        else:
            response_text = await response.text()
            raise ExternalServiceError(
                f"Server error for {self.api_name} ({response.status}): {response_text}",
                service_name=self.api_name,
                upstream_status=response.status,
            )

    def _transform_exception(self, exception: Exception, method: str, url: str) -> ExternalServiceError:
        if isinstance(exception, asyncio.TimeoutError):
            return ExternalServiceError(f"Timeout for {self.api_name}: {method} {url}", service_name=self.api_name)
        return ExternalServiceError(f"Client error for {self.api_name}: {exception}", service_name=self.api_name)

    async def get(self, endpoint: str, params: Optional[Dict] = None, headers: Optional[Dict] = None) -> Dict[str, Any]:
        return await self._make_request('GET', endpoint, params=params, headers=headers)

    async def post(self, endpoint: str, data: Optional[Dict] = None, headers: Optional[Dict] = None) -> Dict[str, Any]:
        return await self._make_request('POST', endpoint, data=data, headers=headers)

    async def close(self):
        """Close the HTTP session."""
        if self.session:
            await self.session.close()
            self.session = None
            logger.info(f"API client closed for {self.api_name}")
