"""Base class with shared functionality for all backend sources.

This module provides the abstract base class that both record sources
implement, along with shared HTTP request handling and response unpacking.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

import requests

from app.domain.models import SourceKind
from app.logging import get_logger

from .exceptions import (
    AdapterConfigurationError,
    AdapterHTTPError,
    AdapterResponseError,
    AdapterTimeoutError,
)

logger = get_logger(__name__, component="adapter")

RawRecord = Dict[str, Any]


class BaseSource(ABC):
    """Base class for record sources.

    Provides shared HTTP request handling and error management. Sources never
    retry and never soften failures: every non-2xx response, transport error,
    timeout or undecodable body is raised as an AdapterError subclass. Turning
    a failed fetch into an empty contribution is the aggregator's job.

    Attributes:
        source_kind: Ownership tag written onto every record from this source
        base_url: Backend base URL without trailing slash
        timeout: HTTP request timeout in seconds
        user_agent: User-Agent header for HTTP requests
    """

    source_kind: SourceKind

    def __init__(
        self,
        base_url: str,
        timeout: int = 30,
        user_agent: str = "ApplicationTracker/1.0",
        api_token: Optional[str] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        """Initialize source with connection settings.

        Args:
            base_url: Backend base URL (http or https)
            timeout: HTTP request timeout in seconds (default 30, range 5-300)
            user_agent: User-Agent header for requests
            api_token: Optional bearer token forwarded on every request
            session: Optional pre-built requests session (tests inject mocks here)

        Raises:
            AdapterConfigurationError: If base_url, timeout or user_agent is invalid
        """
        if not base_url or not base_url.strip().startswith(("http://", "https://")):
            raise AdapterConfigurationError(
                f"base_url must start with http:// or https://, got: {base_url!r}"
            )
        if not 5 <= timeout <= 300:
            raise AdapterConfigurationError(
                f"Timeout must be between 5 and 300 seconds, got: {timeout}"
            )
        if not user_agent or not user_agent.strip():
            raise AdapterConfigurationError("user_agent cannot be empty")

        self.base_url = base_url.strip().rstrip("/")
        self.timeout = timeout
        self.user_agent = user_agent.strip()

        self._session = session or requests.Session()
        self._session.headers.update({
            "User-Agent": self.user_agent,
            "Content-Type": "application/json",
        })
        if api_token:
            self._session.headers["Authorization"] = f"Bearer {api_token}"

    @abstractmethod
    def fetch_records(self, **filters: Any) -> List[RawRecord]:
        """Fetch raw records from the backend.

        Args:
            **filters: Source-specific query filters; None values are dropped

        Returns:
            List of raw record dicts, exactly as the backend sent them

        Raises:
            AdapterError: On any failure (HTTP status, timeout, malformed body)
        """

    @abstractmethod
    def set_status(self, record_id: str, status: str) -> Dict[str, Any]:
        """Write a new status for one record.

        Args:
            record_id: Native identifier of the record
            status: Canonical display status

        Returns:
            Acknowledgement body returned by the backend ({} when empty)

        Raises:
            AdapterError: On any failure
        """

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self._session.close()

    def _url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    @staticmethod
    def _clean_params(params: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
        if not params:
            return None
        cleaned = {key: value for key, value in params.items() if value is not None}
        return cleaned or None

    def _make_request(
        self,
        path: str,
        method: str = "GET",
        params: Optional[Dict[str, Any]] = None,
        json_data: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """Make HTTP request with error handling.

        Handles:
        - Timeout and transport errors
        - Any status outside 2xx
        - Empty bodies (returned as {}) and invalid JSON

        Args:
            path: Path relative to base_url
            method: HTTP method (default "GET")
            params: Query parameters; None values are omitted
            json_data: JSON body for PATCH/PUT requests

        Returns:
            Parsed JSON response

        Raises:
            AdapterHTTPError: On non-2xx status or transport failure
            AdapterTimeoutError: On request timeout
            AdapterResponseError: On invalid JSON
        """
        url = self._url(path)

        logger.debug(
            f"HTTP {method} request to {url}",
            extra={
                "event": "adapter.request.sent",
                "method": method,
                "url": url,
                "timeout": self.timeout,
            },
        )

        try:
            response = self._session.request(
                method=method,
                url=url,
                params=self._clean_params(params),
                json=json_data,
                timeout=self.timeout,
            )
        except requests.exceptions.Timeout as e:
            logger.warning(
                f"Request to {url} timed out after {self.timeout} seconds",
                extra={
                    "event": "adapter.request.timeout",
                    "method": method,
                    "url": url,
                    "timeout": self.timeout,
                },
            )
            raise AdapterTimeoutError(
                f"Request to {url} timed out after {self.timeout} seconds",
                url=url,
            ) from e
        except requests.exceptions.RequestException as e:
            logger.error(
                f"Request to {url} failed: {e}",
                extra={
                    "event": "adapter.request.failed",
                    "error_type": type(e).__name__,
                    "method": method,
                    "url": url,
                },
            )
            raise AdapterHTTPError(
                f"Request to {url} failed: {e}",
                status_code=0,
                url=url,
            ) from e

        if not 200 <= response.status_code < 300:
            log_level = logging.WARNING if response.status_code >= 500 else logging.ERROR
            logger.log(
                log_level,
                f"HTTP {response.status_code} error from {url}",
                extra={
                    "event": "adapter.request.rejected",
                    "method": method,
                    "status_code": response.status_code,
                    "url": url,
                },
            )
            raise AdapterHTTPError(
                f"HTTP {response.status_code}: {response.reason}",
                status_code=response.status_code,
                url=url,
            )

        if response.status_code == 204 or not response.content:
            return {}

        try:
            data = response.json()
        except ValueError as e:
            logger.error(
                f"Failed to parse JSON response from {url}",
                extra={
                    "event": "adapter.response.invalid",
                    "error_type": type(e).__name__,
                    "url": url,
                },
            )
            raise AdapterResponseError(
                f"Failed to parse JSON response from {url}: {e}"
            ) from e

        logger.debug(
            "HTTP request succeeded",
            extra={
                "event": "adapter.request.succeeded",
                "status_code": response.status_code,
                "url": url,
            },
        )
        return data

    @staticmethod
    def _extract_records(payload: Any, *envelope_keys: str) -> List[RawRecord]:
        """Unpack a list of records from a response body.

        Accepts a bare JSON array, or an object holding the array under one of
        ``envelope_keys`` (checked in order) or ``data``. Non-dict items are
        dropped.

        Raises:
            AdapterResponseError: If no array can be found
        """
        records = payload
        if isinstance(payload, dict):
            for key in (*envelope_keys, "data"):
                if isinstance(payload.get(key), list):
                    records = payload[key]
                    break
            else:
                raise AdapterResponseError(
                    f"Expected a JSON array or an object with one of "
                    f"{', '.join((*envelope_keys, 'data'))}, got keys: {sorted(payload)}"
                )

        if not isinstance(records, list):
            raise AdapterResponseError(
                f"Expected JSON array response, got {type(records).__name__}"
            )

        dropped = sum(1 for item in records if not isinstance(item, dict))
        if dropped:
            logger.warning(
                "Dropped non-object entries from response",
                extra={"event": "adapter.response.dropped_entries", "dropped": dropped},
            )
        return [item for item in records if isinstance(item, dict)]
