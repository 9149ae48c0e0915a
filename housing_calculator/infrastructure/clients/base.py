"""Shared HTTP plumbing for upstream service clients"""

from typing import Any, Dict, Optional

import httpx

from housing_calculator.config import settings
from housing_calculator.domain.exceptions import UpstreamUnavailableError
from housing_calculator.infrastructure.observability.metrics import (
    upstream_failures_counter,
    upstream_latency_histogram,
)


class UpstreamClient:
    """Base client: GET JSON, unwrap the {success, message, data} envelope, map failures"""

    source = "upstream"

    def __init__(
        self,
        base_url: str,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url
        self.timeout = timeout or settings.http_timeout_seconds
        self.transport = transport

    async def _get_json(
        self,
        path: str,
        requester_id: str | None = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> Optional[Any]:
        """
        Fetch a resource from the upstream service.

        Returns:
            The payload (envelope unwrapped), or None on 404

        Raises:
            UpstreamUnavailableError: On timeout, connection failure or HTTP error
        """
        headers = {"X-User-Id": requester_id} if requester_id else {}
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            try:
                with upstream_latency_histogram.labels(source=self.source).time():
                    response = await client.get(f"{self.base_url}{path}", params=params, headers=headers)
                if response.status_code == 404:
                    return None
                response.raise_for_status()
                data = response.json()

            except httpx.TimeoutException as e:
                upstream_failures_counter.labels(source=self.source).inc()
                raise UpstreamUnavailableError(
                    self.source, f"{self.source} API timeout after {self.timeout}s"
                ) from e
            except httpx.HTTPStatusError as e:
                upstream_failures_counter.labels(source=self.source).inc()
                raise UpstreamUnavailableError(
                    self.source, f"{self.source} API error: {e.response.status_code}"
                ) from e
            except (httpx.RequestError, ValueError) as e:
                upstream_failures_counter.labels(source=self.source).inc()
                raise UpstreamUnavailableError(self.source, f"{self.source} API unreachable: {e}") from e

        if isinstance(data, dict) and "data" in data and "success" in data:
            return data["data"]
        return data

    def _invalid(self, error: Exception) -> UpstreamUnavailableError:
        upstream_failures_counter.labels(source=self.source).inc()
        return UpstreamUnavailableError(self.source, f"Invalid {self.source} data: {error}")
