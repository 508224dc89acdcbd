# SPDX-License-Identifier: MIT
# Copyright (c) 2026 OmniNode Team
"""Remote ABI registry client.

Request:
    ``GET <registry_url>/api/v1/abi?network=<network>&address=<address>``

Response:
    ``{"abi": [...] | "<json string>", "etag": "..."}``; the entity tag may
    instead arrive in the ``ETag`` header. 404 means the registry does not
    know the contract, as does a response with a null or empty ``abi``.

Transport errors and 5xx/429 responses are retried with exponential backoff
(see retry_policy); what remains after the last attempt is raised as
AbiFetchError.
"""

from __future__ import annotations

import json
import logging
from typing import NamedTuple
from uuid import UUID

import httpx
from tenacity import RetryError

from chaingen.abi.retry_policy import RegistryServerError, create_registry_retry_policy
from chaingen.errors import (
    AbiFetchError,
    AbiNotFoundError,
    AbiParseError,
    ModelCodegenErrorContext,
)

logger = logging.getLogger(__name__)

ABI_ENDPOINT_PATH: str = "/api/v1/abi"
_DEFAULT_TIMEOUT_SECONDS: float = 30.0


class RegistryAbiPayload(NamedTuple):
    """Raw ABI as returned by the registry."""

    abi: object
    etag: str | None


class AbiRegistryClient:
    """Async client for the remote ABI registry.

    The underlying httpx.AsyncClient is created lazily and shared by all
    requests; use the client as an async context manager or call ``close``.

    Example:
        >>> async with AbiRegistryClient("https://api.sentio.xyz") as client:
        ...     payload = await client.fetch_abi(address, "1")
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = _DEFAULT_TIMEOUT_SECONDS,
        max_attempts: int = 3,
        retry_wait_min: float = 0.5,
        retry_wait_max: float = 8.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._max_attempts = max_attempts
        self._transport = transport
        self._client: httpx.AsyncClient | None = None
        self._request_with_retry = create_registry_retry_policy(
            max_attempts=max_attempts,
            wait_min=retry_wait_min,
            wait_max=retry_wait_max,
        )(self._request)

    async def __aenter__(self) -> AbiRegistryClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                timeout=httpx.Timeout(self._timeout),
                follow_redirects=True,
                transport=self._transport,
            )
        return self._client

    async def _request(self, address: str, network: str) -> httpx.Response:
        response = await self._get_client().get(
            ABI_ENDPOINT_PATH,
            params={"network": network, "address": address},
            headers={"Accept": "application/json"},
        )
        if response.status_code >= 500 or response.status_code == 429:
            raise RegistryServerError(response.status_code, str(response.request.url))
        return response

    async def fetch_abi(
        self,
        address: str,
        network: str,
        correlation_id: UUID | None = None,
    ) -> RegistryAbiPayload:
        """Fetch the raw ABI of a contract.

        Args:
            address: Canonical contract address.
            network: Network identifier.
            correlation_id: Generation run correlation ID for error context.

        Returns:
            The ABI value (list of items) and the upstream entity tag.

        Raises:
            AbiFetchError: Registry unreachable, timing out, or answering
                with an error after all retries.
            AbiNotFoundError: Registry does not know the contract.
            AbiParseError: Response body is not the expected JSON shape.
        """
        context = ModelCodegenErrorContext(
            operation="fetch_abi",
            target_name=f"{self._base_url}{ABI_ENDPOINT_PATH}",
            correlation_id=correlation_id,
        )
        try:
            response = await self._request_with_retry(address, network)
        except RetryError as e:
            cause = e.last_attempt.exception()
            raise AbiFetchError(
                f"ABI registry request for {address} on network {network} failed "
                f"after {self._max_attempts} attempts: {cause}",
                context=context,
                address=address,
                network=network,
            ) from cause
        except httpx.HTTPError as e:
            raise AbiFetchError(
                f"ABI registry request for {address} failed: {type(e).__name__}",
                context=context,
                address=address,
                network=network,
            ) from e

        if response.status_code == 404:
            raise AbiNotFoundError(
                f"Contract {address} on network {network} is unknown to the ABI registry",
                context=context,
                address=address,
                network=network,
            )
        if response.status_code >= 400:
            raise AbiFetchError(
                f"ABI registry returned HTTP {response.status_code} for {address}",
                context=context,
                status_code=response.status_code,
            )

        try:
            body = response.json()
        except ValueError as e:
            raise AbiParseError(
                f"ABI registry response for {address} is not valid JSON",
                context=context,
            ) from e
        if not isinstance(body, dict):
            raise AbiParseError(
                f"ABI registry response for {address} must be a JSON object",
                context=context,
            )

        abi = body.get("abi")
        if abi is None or abi == "" or abi == []:
            raise AbiNotFoundError(
                f"Contract {address} on network {network} has no verified ABI",
                context=context,
                address=address,
                network=network,
            )
        if isinstance(abi, str):
            try:
                abi = json.loads(abi)
            except json.JSONDecodeError as e:
                raise AbiParseError(
                    f"ABI string for {address} is not valid JSON: {e.msg}",
                    context=context,
                ) from e

        etag = body.get("etag") or response.headers.get("ETag")
        logger.debug(
            "Fetched ABI from registry",
            extra={
                "address": address,
                "network": network,
                "etag": etag,
                "correlation_id": str(correlation_id) if correlation_id else None,
            },
        )
        return RegistryAbiPayload(abi=abi, etag=str(etag) if etag is not None else None)


__all__ = ["ABI_ENDPOINT_PATH", "AbiRegistryClient", "RegistryAbiPayload"]
