"""Discover exported TypeScript functions and call them by name across an execution boundary."""

from remote_call.config import ConfigError, RemoteCallOptions, load_options
from remote_call.discovery import (
    FunctionRegistry,
    discover,
    render_type_descriptor,
)
from remote_call.models import DiscoveryResult, FunctionSignature
from remote_call.runtime import ErrorKind, RemoteCallError, RemoteCaller, obtain_callable

__all__ = [
    "ConfigError",
    "RemoteCallOptions",
    "load_options",
    "FunctionRegistry",
    "FunctionSignature",
    "DiscoveryResult",
    "discover",
    "render_type_descriptor",
    "ErrorKind",
    "RemoteCallError",
    "RemoteCaller",
    "obtain_callable",
]
