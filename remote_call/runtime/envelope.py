"""Request/response envelopes exchanged with a remote execution endpoint.

Wire shapes:
    request:  {"identifier": str, "arguments": [...]}
    response: {"status": "ok", "value": ...}
              {"status": "error", "errorKind": str, "message": str}
"""

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    """Failure categories a remote call can reject with."""

    NOT_IMPLEMENTED = "not-implemented"
    TRANSPORT_FAILURE = "transport-failure"
    REMOTE_EXCEPTION = "remote-exception"


class RemoteCallError(Exception):
    """A remote call that was rejected."""

    def __init__(
        self,
        message: str,
        kind: ErrorKind = ErrorKind.REMOTE_EXCEPTION,
        identifier: str = "",
    ):
        super().__init__(message)
        self.kind = ErrorKind(kind)
        self.identifier = identifier

    @property
    def message(self) -> str:
        return str(self)


class EnvelopeError(ValueError):
    """An envelope that does not match the wire contract."""


@dataclass
class CallRequest:
    """Outbound call envelope."""

    identifier: str
    arguments: list[Any] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"identifier": self.identifier, "arguments": list(self.arguments)}

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    @classmethod
    def from_dict(cls, data: Any) -> "CallRequest":
        if not isinstance(data, dict):
            raise EnvelopeError("Request must be an object")
        identifier = data.get("identifier")
        arguments = data.get("arguments", [])
        if not isinstance(identifier, str) or not identifier:
            raise EnvelopeError("Request identifier must be a non-empty string")
        if not isinstance(arguments, list):
            raise EnvelopeError("Request arguments must be a list")
        return cls(identifier=identifier, arguments=arguments)


@dataclass
class CallResponse:
    """Inbound result envelope: a value on success, a kind and message on failure."""

    status: str
    value: Any = None
    error_kind: ErrorKind | None = None
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.status == "ok"

    @classmethod
    def success(cls, value: Any) -> "CallResponse":
        return cls(status="ok", value=value)

    @classmethod
    def failure(cls, kind: ErrorKind, message: str) -> "CallResponse":
        return cls(status="error", error_kind=ErrorKind(kind), message=message)

    def to_dict(self) -> dict:
        if self.ok:
            return {"status": "ok", "value": self.value}
        return {
            "status": "error",
            "errorKind": self.error_kind.value,
            "message": self.message,
        }

    @classmethod
    def from_dict(cls, data: Any) -> "CallResponse":
        """Decode a response envelope.

        Raises:
            EnvelopeError: If the data does not match the wire contract
        """
        if not isinstance(data, dict):
            raise EnvelopeError(f"Response must be an object, got {type(data).__name__}")

        status = data.get("status")
        if status == "ok":
            return cls.success(data.get("value"))
        if status == "error":
            try:
                kind = ErrorKind(data.get("errorKind"))
            except ValueError as e:
                raise EnvelopeError(f"Unknown errorKind: {data.get('errorKind')!r}") from e
            message = data.get("message", "")
            if not isinstance(message, str):
                message = str(message)
            return cls.failure(kind, message)
        raise EnvelopeError(f"Unknown response status: {status!r}")
