"""In-process execution side of the call envelope contract."""

import inspect
import json
import logging
from collections.abc import Callable, Mapping
from typing import Any

from remote_call.runtime.envelope import CallRequest, CallResponse, EnvelopeError, ErrorKind

logger = logging.getLogger(__name__)


class CallEndpoint:
    """Execute request envelopes against a table of named functions."""

    def __init__(self, functions: Mapping[str, Callable[..., Any]] | None = None):
        self.functions: dict[str, Callable[..., Any]] = dict(functions or {})

    def add(self, func: Callable[..., Any], name: str | None = None) -> Callable[..., Any]:
        self.functions[name or func.__name__] = func
        return func

    async def handle(self, request: dict) -> dict:
        """Run one request and answer with a response envelope dict."""
        try:
            call = CallRequest.from_dict(request)
        except EnvelopeError as e:
            return CallResponse.failure(ErrorKind.TRANSPORT_FAILURE, str(e)).to_dict()

        func = self.functions.get(call.identifier)
        if func is None:
            logger.info(f"No function registered for {call.identifier}")
            return CallResponse.failure(
                ErrorKind.NOT_IMPLEMENTED,
                f"Remote call not implemented for function: {call.identifier}",
            ).to_dict()

        try:
            result = func(*call.arguments)
            if inspect.isawaitable(result):
                result = await result
        except Exception as e:
            logger.warning(f"Function {call.identifier} raised: {e}")
            return CallResponse.failure(ErrorKind.REMOTE_EXCEPTION, str(e)).to_dict()

        return CallResponse.success(result).to_dict()


class LocalTransport:
    """Transport delivering envelopes to a CallEndpoint in the same process.

    Responses pass through JSON like they would over a wire, so callers get
    copies and values that cannot be encoded fail in send().
    """

    def __init__(self, endpoint: CallEndpoint):
        self.endpoint = endpoint

    async def send(self, request: dict) -> dict:
        response = await self.endpoint.handle(request)
        return json.loads(json.dumps(response))
