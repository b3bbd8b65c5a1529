"""
HTTP client for remote SPARQL endpoints.

Only result-set queries (SELECT and ASK) are supported; responses are
requested and parsed as SPARQL results JSON. The client:
- Starts with GET and moves to POST once when the endpoint asks for it
  (HTML error page, HTTP 405, or a method-related network error)
- Retries transient failures with exponential backoff

Switching method does not use up an attempt: ``max_retries`` bounds the
number of tries made with the method that is finally used.

Usage:
    from arqtab.sparql_helper import SparqlHelper

    with SparqlHelper("https://sparql.example.org/") as helper:
        results = helper.select("SELECT ?s WHERE { ?s ?p ?o } LIMIT 10")
"""

from __future__ import annotations

import json
import logging
import secrets
import time
from typing import Any

import requests

from .version import VERSION

logger = logging.getLogger(__name__)

SPARQL_RESULTS_JSON = "application/sparql-results+json"
USER_AGENT = f"arqtab/{VERSION} (SPARQL client)"


class SparqlHelperError(Exception):
    """Base exception for SPARQL helper errors."""


class EndpointError(SparqlHelperError):
    """Raised when the endpoint keeps failing or answers with an error page."""


class QueryError(SparqlHelperError):
    """Raised when the endpoint rejects the query (HTTP 400)."""


class SparqlHelper:
    """
    Run result-set queries against one endpoint.

    Attributes:
        endpoint_url: The SPARQL endpoint URL, without trailing slash
        max_retries: Tries allowed per query with the current method
        initial_backoff: First delay between tries, in seconds
        max_backoff: Upper bound for the delay, in seconds
        timeout: Request timeout in seconds
    """

    # Network error messages suggesting the endpoint wants POST
    METHOD_ERROR_PATTERNS = ("html", "500", "internal", "error", "method not allowed")

    HTML_MARKERS = ("<!DOCTYPE", "<html", "<HTML", "<!doctype")

    RETRY_STATUS_CODES = (429, 500, 502, 503, 504)

    def __init__(
        self,
        endpoint_url: str,
        *,
        use_post: bool = False,
        max_retries: int = 3,
        initial_backoff: float = 1.0,
        max_backoff: float = 30.0,
        timeout: float = 60.0,
    ) -> None:
        """
        Args:
            endpoint_url: SPARQL endpoint URL
            use_post: Send POST from the start instead of trying GET first
            max_retries: Tries allowed for transient failures
            initial_backoff: First delay between tries (seconds)
            max_backoff: Maximum delay between tries (seconds)
            timeout: Request timeout in seconds
        """
        self.endpoint_url = endpoint_url.rstrip("/")
        self.max_retries = max_retries
        self.initial_backoff = initial_backoff
        self.max_backoff = max_backoff
        self.timeout = timeout

        self._requires_post = use_post
        self._session = requests.Session()

        logger.debug("SparqlHelper initialized for %s", self.endpoint_url)

    def select(self, query: str) -> dict[str, Any]:
        """
        Run a SELECT or ASK query and return the decoded results JSON.

        Returns:
            ``{"head": {"vars": [...]}, "results": {"bindings": [...]}}``
            for SELECT, ``{"head": {}, "boolean": ...}`` for ASK.

        Raises:
            QueryError: If the endpoint rejects the query
            EndpointError: If the endpoint still fails after ``max_retries`` tries
        """
        attempt = 1
        while True:
            try:
                body = self._send(query)
            except requests.exceptions.HTTPError as e:
                status_code = e.response.status_code if e.response is not None else 0
                if status_code == 405 and self._switch_to_post("GET returned 405"):
                    continue
                if status_code == 400:
                    raise QueryError(f"Endpoint rejected query: {e}") from e
                if status_code not in self.RETRY_STATUS_CODES:
                    raise EndpointError(f"HTTP {status_code}: {e}") from e
                self._wait_before_retry(attempt, e)
                attempt += 1
                continue
            except requests.exceptions.RequestException as e:
                method_related = any(p in str(e).lower() for p in self.METHOD_ERROR_PATTERNS)
                if method_related and self._switch_to_post(f"GET failed: {e}"):
                    continue
                self._wait_before_retry(attempt, e)
                attempt += 1
                continue

            if self._is_html_response(body):
                if self._switch_to_post("GET returned an HTML page"):
                    continue
                raise EndpointError("Endpoint returned an HTML page even with POST")

            try:
                result: dict[str, Any] = json.loads(body)
            except json.JSONDecodeError as e:
                self._wait_before_retry(attempt, e)
                attempt += 1
                continue
            return result

    def _send(self, query: str) -> str:
        """Send one request with the current method and return the body."""
        headers = {"Accept": SPARQL_RESULTS_JSON, "User-Agent": USER_AGENT}
        if self._requires_post:
            logger.debug("POST %s", self.endpoint_url)
            response = self._session.post(
                self.endpoint_url,
                data={"query": query},
                headers=headers,
                timeout=self.timeout,
            )
        else:
            logger.debug("GET %s", self.endpoint_url)
            response = self._session.get(
                self.endpoint_url,
                params={"query": query},
                headers=headers,
                timeout=self.timeout,
            )
        response.raise_for_status()
        return response.text

    def _switch_to_post(self, reason: str) -> bool:
        """Move to POST; False if POST is already in use."""
        if self._requires_post:
            return False
        logger.debug("%s, switching to POST", reason)
        self._requires_post = True
        return True

    def _wait_before_retry(self, attempt: int, error: Exception) -> None:
        """Sleep before try ``attempt + 1``, or raise if none are left."""
        logger.warning(f"Query attempt {attempt}/{self.max_retries} failed: {error}")

        if attempt >= self.max_retries:
            raise EndpointError(
                f"Query failed after {self.max_retries} attempts: {error}"
            ) from error

        backoff = min(self.initial_backoff * (2 ** (attempt - 1)), self.max_backoff)
        jitter = secrets.randbelow(int(backoff * 100) + 1) / 1000
        logger.info(f"Retrying in {backoff + jitter:.1f}s")
        time.sleep(backoff + jitter)

    def _is_html_response(self, content: str) -> bool:
        return content.strip().startswith(self.HTML_MARKERS)

    def close(self) -> None:
        """Close the underlying requests session."""
        self._session.close()

    def __enter__(self) -> SparqlHelper:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()

    def __repr__(self) -> str:
        method = "POST" if self._requires_post else "GET"
        return f"SparqlHelper({self.endpoint_url!r}, method={method})"
