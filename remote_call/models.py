"""Data models for function discovery output."""

import json
from dataclasses import asdict, dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from remote_call.discovery.registry import FunctionRegistry


@dataclass
class FunctionSignature:
    """A function signature recovered from an exported declaration."""

    identifier: str
    parameters: list[tuple[str, str]]  # [(name, type), ...]
    return_type: str
    source_path: str = ""

    def to_dict(self) -> dict:
        return {
            "identifier": self.identifier,
            "parameters": [
                {"name": name, "type": type_text} for name, type_text in self.parameters
            ],
            "return_type": self.return_type,
            "source_path": self.source_path,
        }


@dataclass(frozen=True)
class RegistryConflict:
    """A duplicate identifier dropped during registration."""

    identifier: str
    kept_path: str
    dropped_path: str


@dataclass
class DiscoveryError:
    """A non-fatal error encountered during discovery."""

    path: str
    error: str
    phase: str  # "reading", "extraction"


@dataclass
class DiscoveryResult:
    """Complete result of a discovery pass."""

    root: str
    files: list[str]
    registry: "FunctionRegistry"
    errors: list[DiscoveryError] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "root": self.root,
            "files": self.files,
            "functions": [sig.to_dict() for sig in self.registry.values()],
            "conflicts": [asdict(c) for c in self.registry.conflicts],
            "errors": [asdict(e) for e in self.errors],
        }

    def to_json(self, indent: int = 2) -> str:
        """Serialize to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)
