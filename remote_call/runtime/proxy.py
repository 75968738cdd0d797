"""Invocation proxy that forwards calls by identifier to a remote endpoint."""

import json
import logging
from collections.abc import Awaitable, Callable, Collection
from typing import Any, Protocol, runtime_checkable

from remote_call.runtime.envelope import (
    CallRequest,
    CallResponse,
    EnvelopeError,
    ErrorKind,
    RemoteCallError,
)

logger = logging.getLogger(__name__)


@runtime_checkable
class Transport(Protocol):
    """Carries a request envelope to the remote side and returns its response."""

    async def send(self, request: dict) -> dict: ...


class RemoteCaller:
    """Produce async callables that forward to a remote execution endpoint.

    No argument types are checked at call time; the generated type
    descriptor is the only static check. Each call is independent and holds
    no state after it settles.

    Usage:
        caller = RemoteCaller(transport, registry=result.registry)
        add = caller.get_proxy("add")
        total = await add(2, 3)
    """

    def __init__(
        self,
        transport: Transport | None = None,
        registry: Collection[str] | None = None,
    ):
        self.transport = transport
        self._known = frozenset(registry) if registry is not None else None

    def get_proxy(self, identifier: str) -> Callable[..., Awaitable[Any]]:
        """Return a callable stand-in for a remote function."""

        async def remote_function(*args: Any) -> Any:
            return await self.invoke(identifier, list(args))

        remote_function.__name__ = identifier
        remote_function.__qualname__ = f"remote:{identifier}"
        return remote_function

    obtain_callable = get_proxy

    async def invoke(self, identifier: str, arguments: list[Any]) -> Any:
        """Send one call envelope and resolve it.

        Raises:
            RemoteCallError: not-implemented when no transport is configured or
                the identifier is unknown, transport-failure when the envelope
                cannot be delivered or decoded, remote-exception when the
                remote function failed
        """
        if self.transport is None:
            raise RemoteCallError(
                f"Remote call not implemented for function: {identifier} (no transport configured)",
                kind=ErrorKind.NOT_IMPLEMENTED,
                identifier=identifier,
            )
        if self._known is not None and identifier not in self._known:
            raise RemoteCallError(
                f"Remote call not implemented for function: {identifier}",
                kind=ErrorKind.NOT_IMPLEMENTED,
                identifier=identifier,
            )

        request = CallRequest(identifier=identifier, arguments=arguments)
        try:
            payload = json.loads(request.to_json())
        except (TypeError, ValueError) as e:
            raise RemoteCallError(
                f"Cannot serialize arguments for {identifier}: {e}",
                kind=ErrorKind.TRANSPORT_FAILURE,
                identifier=identifier,
            ) from e

        logger.debug(f"Remote call to {identifier} with {len(arguments)} arguments")
        try:
            raw_response = await self.transport.send(payload)
        except RemoteCallError:
            raise
        except Exception as e:
            logger.warning(f"Transport failed for {identifier}: {e}")
            raise RemoteCallError(
                f"Transport failed for {identifier}: {e}",
                kind=ErrorKind.TRANSPORT_FAILURE,
                identifier=identifier,
            ) from e

        try:
            response = CallResponse.from_dict(raw_response)
        except EnvelopeError as e:
            raise RemoteCallError(
                f"Invalid response for {identifier}: {e}",
                kind=ErrorKind.TRANSPORT_FAILURE,
                identifier=identifier,
            ) from e

        if response.ok:
            return response.value
        raise RemoteCallError(
            response.message,
            kind=response.error_kind,
            identifier=identifier,
        )


def obtain_callable(
    identifier: str,
    transport: Transport | None = None,
    registry: Collection[str] | None = None,
) -> Callable[..., Awaitable[Any]]:
    """Shortcut for RemoteCaller(transport, registry).get_proxy(identifier)."""
    return RemoteCaller(transport, registry=registry).get_proxy(identifier)
