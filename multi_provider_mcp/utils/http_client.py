"""
HTTP client for provider backends

Thin wrapper around httpx with request/response logging, optional CURL
debug output and standardized error descriptions.
"""

import httpx
import json
import shlex
from typing import Dict, Optional, Any
from urllib.parse import urlencode

from .logger import get_logger

logger = get_logger(__name__)

# Header values never written to logs
SENSITIVE_HEADERS = {"apikey", "authorization", "wil-api-key"}


def describe_http_error(error: Exception) -> str:
    """
    Build a human readable description of a failed HTTP call

    Args:
        error: Exception raised by HttpClient

    Returns:
        Message including status and body when a response was received
    """
    if isinstance(error, httpx.HTTPStatusError):
        response = error.response
        body = response.text[:500] if response.content else ""
        message = f"HTTP {response.status_code} {response.reason_phrase}"
        return f"{message}: {body}" if body else message
    if isinstance(error, httpx.TimeoutException):
        return f"Timeout: {error}" if str(error) else "Timeout"
    return str(error) or type(error).__name__


class HttpClient:
    """Async HTTP client with standardized logging and error handling"""

    def __init__(
        self,
        headers: Optional[Dict[str, str]] = None,
        timeout: float = 30.0,
        debug_curl: bool = False,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        """
        Initialize the HTTP client

        Args:
            headers: Headers sent with every request
            timeout: Request timeout in seconds
            debug_curl: Log an equivalent CURL command for every request
            transport: Optional httpx transport (used to stub the backend)
        """
        self.headers = dict(headers or {})
        self.debug_curl = debug_curl
        self.transport = transport

        # HTTP client configuration
        self.timeout = httpx.Timeout(timeout)
        self.limits = httpx.Limits(max_keepalive_connections=5, max_connections=10)

    def _redacted_headers(self, headers: Dict[str, str]) -> Dict[str, str]:
        return {
            key: ("***" if key.lower() in SENSITIVE_HEADERS else value)
            for key, value in headers.items()
        }

    def _generate_curl_command(self, method: str, url: str, headers: Dict,
                               params: Optional[Dict], json_data: Optional[Any]) -> str:
        """Generate curl command for debugging"""
        curl_parts = ['curl', '-X', method.upper()]

        for key, value in self._redacted_headers(headers).items():
            curl_parts.extend(['-H', shlex.quote(f'{key}: {value}')])

        if json_data is not None:
            curl_parts.extend(['-d', shlex.quote(json.dumps(json_data, separators=(',', ':')))])

        if params:
            url = f"{url}?{urlencode(params)}"

        curl_parts.append(shlex.quote(url))
        return ' '.join(curl_parts)

    async def _log_request(self, request: httpx.Request):
        logger.debug(f"Request: {request.method} {request.url}")

    async def _log_response(self, response: httpx.Response):
        logger.debug(f"Response: {response.status_code} {response.reason_phrase}")

    async def _request(
        self,
        method: str,
        url: str,
        json_data: Optional[Any] = None,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None
    ) -> httpx.Response:
        """Make a single HTTP request; non-2xx responses raise httpx.HTTPStatusError"""
        request_headers = dict(self.headers)
        if headers:
            request_headers.update(headers)

        if self.debug_curl:
            curl_cmd = self._generate_curl_command(method, url, request_headers, params, json_data)
            logger.info(f"CURL: {curl_cmd}")

        async with httpx.AsyncClient(
            timeout=self.timeout,
            limits=self.limits,
            transport=self.transport,
            event_hooks={"request": [self._log_request], "response": [self._log_response]}
        ) as client:
            try:
                response = await client.request(
                    method=method.upper(),
                    url=url,
                    params=params,
                    json=json_data,
                    headers=request_headers
                )
            except httpx.RequestError as e:
                logger.error(f"No response received from API for {method.upper()} {url}: {e}")
                raise

        if response.is_error:
            logger.error(f"API Error: {response.status_code} {response.reason_phrase}")
            logger.debug(f"Error response data: {response.text}")
            response.raise_for_status()

        return response

    async def get(self, url: str, params: Optional[Dict[str, Any]] = None,
                  headers: Optional[Dict[str, str]] = None) -> httpx.Response:
        return await self._request("GET", url, params=params, headers=headers)

    async def post(self, url: str, data: Optional[Any] = None,
                   headers: Optional[Dict[str, str]] = None) -> httpx.Response:
        return await self._request("POST", url, json_data=data if data is not None else {}, headers=headers)

    async def put(self, url: str, data: Optional[Any] = None,
                  headers: Optional[Dict[str, str]] = None) -> httpx.Response:
        return await self._request("PUT", url, json_data=data if data is not None else {}, headers=headers)

    async def delete(self, url: str, params: Optional[Dict[str, Any]] = None,
                     headers: Optional[Dict[str, str]] = None) -> httpx.Response:
        return await self._request("DELETE", url, params=params, headers=headers)
