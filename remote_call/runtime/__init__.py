"""Runtime side: call envelopes, invocation proxy and transports."""

from remote_call.runtime.browser import PageTransport, open_page_transport
from remote_call.runtime.dispatcher_script import generate_dispatcher_script
from remote_call.runtime.endpoint import CallEndpoint, LocalTransport
from remote_call.runtime.envelope import (
    CallRequest,
    CallResponse,
    EnvelopeError,
    ErrorKind,
    RemoteCallError,
)
from remote_call.runtime.proxy import RemoteCaller, Transport, obtain_callable

__all__ = [
    # Envelopes
    "CallRequest",
    "CallResponse",
    "EnvelopeError",
    "ErrorKind",
    "RemoteCallError",
    # Proxy
    "RemoteCaller",
    "Transport",
    "obtain_callable",
    # Transports
    "CallEndpoint",
    "LocalTransport",
    "PageTransport",
    "open_page_transport",
    "generate_dispatcher_script",
]
