"""
Overpass API client

Handles communication with Overpass API including:
- Retry logic with exponential backoff
- Per-request timeout
- Cancellation between attempts
"""

import requests
from typing import Dict, Any, Optional
from loguru import logger

from ...cancellation import CancellationToken
from ...config import APIConfig, get_config
from ...errors import RequestCancelled, UpstreamFetchFailure


class OverpassAPIClient:
    """Client for interacting with Overpass API"""

    def __init__(self, api: Optional[APIConfig] = None):
        self.api = api or get_config().api
        self.overpass_url = self.api.overpass_url
        self.timeout = self.api.request_timeout
        self.max_retries = self.api.max_retries
        self.retry_base_delay = self.api.retry_base_delay

    def backoff_delay(self, attempt: int) -> float:
        """Delay after a failed attempt (0-based): base, 2*base, 4*base, ..."""
        return self.retry_base_delay * (2 ** attempt)

    def query(self, query: str, token: Optional[CancellationToken] = None) -> Dict[str, Any]:
        """
        Execute Overpass API query with retry logic

        Args:
            query: Overpass QL query string
            token: Cancellation token of the owning request

        Returns:
            JSON response from Overpass API

        Raises:
            UpstreamFetchFailure: If query fails after all retries
            RequestCancelled: If the token is cancelled before or between attempts
        """
        headers = {
            "User-Agent": self.api.user_agent,
            "Content-Type": "application/x-www-form-urlencoded"
        }

        token = token or CancellationToken()
        last_error: Optional[Exception] = None
        for attempt in range(self.max_retries):
            token.raise_if_cancelled()
            try:
                response = requests.post(
                    self.overpass_url,
                    data={"data": query},
                    headers=headers,
                    timeout=self.timeout
                )
                response.raise_for_status()
                data = response.json()
                # Overpass reports its own timeouts and memory limits with HTTP 200
                if not isinstance(data, dict):
                    raise ValueError(f"unexpected payload type {type(data).__name__}")
                remark = str(data.get("remark") or "")
                if "runtime error" in remark:
                    raise ValueError(f"Overpass {remark}")
                return data
            except requests.exceptions.Timeout as e:
                last_error = e
                reason = "timeout"
            except requests.exceptions.HTTPError as e:
                last_error = e
                status = e.response.status_code if e.response is not None else "?"
                reason = f"HTTP {status}"
            except (requests.exceptions.RequestException, ValueError) as e:
                # JSON decode errors and Overpass runtime remarks are ValueErrors
                last_error = e
                reason = f"request failed: {e}"

            if attempt < self.max_retries - 1:
                wait_time = self.backoff_delay(attempt)
                logger.warning(f"Overpass {reason} (attempt {attempt + 1}/{self.max_retries}). Retrying in {wait_time}s...")
                if token.sleep(wait_time):
                    raise RequestCancelled("Request superseded during retry backoff")
            else:
                logger.error(f"OSM API failed: {reason} after {self.max_retries} attempts")

        raise UpstreamFetchFailure(
            f"Overpass API query failed after {self.max_retries} attempts: {last_error}"
        ) from last_error

