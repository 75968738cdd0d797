"""Generate the TypeScript declaration describing callable remote functions."""

import json
import logging
from pathlib import Path

from remote_call.discovery.registry import FunctionRegistry
from remote_call.models import FunctionSignature

logger = logging.getLogger(__name__)

IDS_TYPE = "RemoteCallIds"
FUNCTIONS_TYPE = "RemoteCallFunctions"
ASYNC_RESULT_TYPE = "AsyncResult"

ASYNC_TYPE_PREFIXES = ("Promise<", "PromiseLike<", f"{ASYNC_RESULT_TYPE}<")


def is_async_type(type_text: str) -> bool:
    """Check whether a return type already denotes an asynchronous result."""
    return type_text.strip().startswith(ASYNC_TYPE_PREFIXES)


def render_call_shape(signature: FunctionSignature) -> str:
    """Render a signature as an asynchronous arrow function type.

    A return type that is already asynchronous is kept as is, so wrapping
    never nests.
    """
    params_str = ", ".join(f"{name}: {type_text}" for name, type_text in signature.parameters)
    return_type = signature.return_type
    if not is_async_type(return_type):
        return_type = f"{ASYNC_RESULT_TYPE}<{return_type}>"
    return f"({params_str}) => {return_type}"


def render_type_descriptor(registry: FunctionRegistry) -> str:
    """Render the global declaration for all registered identifiers.

    An empty registry yields a never identifier type and an empty call map,
    so any identifier used by consuming code fails to type-check.

    Args:
        registry: The finalized registry of a discovery pass

    Returns:
        TypeScript declaration file content
    """
    if len(registry) == 0:
        logger.info("Rendering empty type descriptor")
        return "\n".join(
            [
                "declare global {",
                f"  type {IDS_TYPE} = never;",
                f"  type {FUNCTIONS_TYPE} = {{}};",
                "}",
                "export {};",
            ]
        )

    function_ids = " | ".join(json.dumps(identifier) for identifier in registry)
    function_types = [
        f"    {json.dumps(identifier)}: {render_call_shape(sig)};"
        for identifier, sig in registry.items()
    ]

    logger.info(f"Rendering type descriptor for {len(registry)} functions")
    return "\n".join(
        [
            "declare global {",
            f"  type {ASYNC_RESULT_TYPE}<T> = Promise<T>;",
            f"  type {IDS_TYPE} = {function_ids};",
            f"  type {FUNCTIONS_TYPE} = {{",
            *function_types,
            "  };",
            "}",
            "export {};",
        ]
    )


def write_type_descriptor(registry: FunctionRegistry, path: Path) -> Path:
    """Write the rendered descriptor to path, creating parent directories."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_type_descriptor(registry) + "\n", encoding="utf-8")
    logger.info(f"Type descriptor written to {path}")
    return path
