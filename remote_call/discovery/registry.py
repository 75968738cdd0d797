"""Accumulate function signatures into a deduplicated registry."""

import logging
from collections.abc import Iterator, Mapping
from types import MappingProxyType

from remote_call.models import FunctionSignature, RegistryConflict

logger = logging.getLogger(__name__)


class RegistryFrozenError(Exception):
    """Registration attempted after the registry was finalized."""


class FunctionRegistry(Mapping):
    """Read-only identifier -> signature mapping produced by one discovery pass.

    Iteration follows registration order.
    """

    def __init__(
        self,
        signatures: Mapping[str, FunctionSignature] | None = None,
        conflicts: tuple[RegistryConflict, ...] = (),
    ):
        self._signatures = MappingProxyType(dict(signatures or {}))
        self.conflicts = tuple(conflicts)

    def __getitem__(self, identifier: str) -> FunctionSignature:
        return self._signatures[identifier]

    def __iter__(self) -> Iterator[str]:
        return iter(self._signatures)

    def __len__(self) -> int:
        return len(self._signatures)

    def __repr__(self) -> str:
        return f"FunctionRegistry({list(self._signatures)!r})"

    @property
    def identifiers(self) -> list[str]:
        return list(self._signatures)


class RegistryBuilder:
    """Single-owner accumulator for one discovery pass.

    The first signature registered for an identifier wins. Later ones are
    dropped and reported as conflicts; registration never raises for them.

    Usage:
        builder = RegistryBuilder()
        for sig in signatures:
            builder.register(sig)
        registry = builder.finalize()
    """

    def __init__(self):
        self._signatures: dict[str, FunctionSignature] = {}
        self._conflicts: list[RegistryConflict] = []
        self._registry: FunctionRegistry | None = None

    def register(self, signature: FunctionSignature) -> bool:
        """Insert a signature unless its identifier is already registered.

        Args:
            signature: The signature to insert

        Returns:
            True if inserted, False if dropped as a duplicate

        Raises:
            RegistryFrozenError: If finalize() was already called
        """
        if self._registry is not None:
            raise RegistryFrozenError(
                f"Cannot register {signature.identifier}: registry is finalized"
            )

        existing = self._signatures.get(signature.identifier)
        if existing is not None:
            logger.warning(
                f'[remote-call] Duplicate function name "{signature.identifier}" found '
                f"in {signature.source_path or '<source>'} "
                f"(already defined in {existing.source_path or '<source>'}). "
                "The later one will be ignored."
            )
            self._conflicts.append(
                RegistryConflict(
                    identifier=signature.identifier,
                    kept_path=existing.source_path,
                    dropped_path=signature.source_path,
                )
            )
            return False

        self._signatures[signature.identifier] = signature
        return True

    def finalize(self) -> FunctionRegistry:
        """Freeze the accumulated signatures. Repeated calls return the same registry."""
        if self._registry is None:
            self._registry = FunctionRegistry(self._signatures, tuple(self._conflicts))
            logger.info(
                f"Registry finalized with {len(self._registry)} functions, "
                f"{len(self._conflicts)} conflicts"
            )
        return self._registry
