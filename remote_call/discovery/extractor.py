"""Parse TypeScript source files to extract exported function signatures."""

import logging
import re
from pathlib import Path

import tree_sitter_typescript
from tree_sitter import Language, Node, Parser

from remote_call.models import FunctionSignature

logger = logging.getLogger(__name__)

TYPESCRIPT = Language(tree_sitter_typescript.language_typescript())

DEFAULT_PARAMETER_TYPE = "any"
DEFAULT_RETURN_TYPE = "void"

PARAMETER_NODES = ("required_parameter", "optional_parameter")

# Bodiless signatures cover overloads and `export declare function`
FUNCTION_NODES = ("function_declaration", "generator_function_declaration", "function_signature")


class SignatureExtractionError(Exception):
    """A source file that could not be read or parsed."""

    def __init__(self, message: str, path: str = "", phase: str = "extraction"):
        super().__init__(message)
        self.path = path
        self.phase = phase


def parse_file(path: Path) -> list[FunctionSignature]:
    """Parse a source file and extract its exported function signatures.

    Args:
        path: Path to a .ts or .mts file

    Returns:
        List of FunctionSignature objects in declaration order

    Raises:
        SignatureExtractionError: If the file cannot be read or has syntax errors
    """
    try:
        content = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise SignatureExtractionError(
            f"Cannot read {path}: {e}", path=str(path), phase="reading"
        ) from e
    return parse_source(content, path=str(path))


def extract_signatures(path: Path) -> list[FunctionSignature]:
    """Extract signatures from a file, treating any failure as no signatures."""
    try:
        return parse_file(path)
    except Exception as e:
        logger.warning(f"Failed to parse {path}: {e}")
        return []


def parse_source(content: str, path: str = "") -> list[FunctionSignature]:
    """Parse TypeScript source text and extract exported function signatures.

    Args:
        content: The TypeScript source
        path: Source path recorded on each signature

    Returns:
        List of FunctionSignature objects in declaration order

    Raises:
        SignatureExtractionError: If the source has syntax errors
    """
    tree = Parser(TYPESCRIPT).parse(content.encode("utf-8"))
    root = tree.root_node
    if root.has_error:
        raise SignatureExtractionError(
            f"Syntax error in {path or '<source>'} at line {_first_error_line(root)}",
            path=path,
        )

    signatures = []
    for node in _walk(root):
        if node.type not in FUNCTION_NODES or not _is_exported(node):
            continue
        sig = _signature_from_declaration(node, path)
        if sig is None:
            continue
        signatures.append(sig)
        logger.debug(
            f"Parsed function: {sig.identifier}"
            f"({', '.join(f'{n}: {t}' for n, t in sig.parameters)}) -> {sig.return_type}"
        )

    logger.info(f"Found {len(signatures)} exported functions in {path or '<source>'}")
    return signatures


def _walk(root: Node):
    """Yield every node below root in document order."""
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


def _is_exported(node: Node) -> bool:
    parent = node.parent
    if parent is not None and parent.type == "ambient_declaration":
        parent = parent.parent
    return parent is not None and parent.type == "export_statement"


def _first_error_line(root: Node) -> int:
    for node in _walk(root):
        if node.type == "ERROR" or node.is_missing:
            return node.start_point[0] + 1
    return root.start_point[0] + 1


def _text(node: Node) -> str:
    return node.text.decode("utf-8")


def _annotation_text(node: Node) -> str:
    """Type text of a ": type" annotation, without the colon."""
    text = _text(node).strip()
    if text.startswith(":"):
        text = text[1:].strip()
    return text


def _type_parameter_names(node: Node) -> set[str]:
    type_params = node.child_by_field_name("type_parameters")
    if type_params is None:
        return set()
    names = set()
    for child in type_params.named_children:
        name = child.child_by_field_name("name")
        if name is not None:
            names.add(_text(name))
    return names


def _degrade_generic(type_text: str, type_params: set[str]) -> str:
    # Type parameters do not exist outside the declaration
    for name in type_params:
        if re.search(rf"\b{re.escape(name)}\b", type_text):
            return DEFAULT_PARAMETER_TYPE
    return type_text


def _signature_from_declaration(node: Node, path: str) -> FunctionSignature | None:
    name_node = node.child_by_field_name("name")
    if name_node is None:
        return None

    type_params = _type_parameter_names(node)
    parameters = []
    params_node = node.child_by_field_name("parameters")
    for param in params_node.named_children if params_node is not None else []:
        if param.type not in PARAMETER_NODES:
            continue
        pattern = param.child_by_field_name("pattern")
        if pattern is None or _text(pattern) == "this":
            continue

        name = _text(pattern)
        optional = (
            param.type == "optional_parameter"
            or param.child_by_field_name("value") is not None
        )
        if optional and not name.startswith("..."):
            name += "?"

        type_node = param.child_by_field_name("type")
        type_text = _annotation_text(type_node) if type_node is not None else DEFAULT_PARAMETER_TYPE
        parameters.append((name, _degrade_generic(type_text, type_params)))

    return_node = node.child_by_field_name("return_type")
    return_type = _annotation_text(return_node) if return_node is not None else DEFAULT_RETURN_TYPE

    return FunctionSignature(
        identifier=_text(name_node),
        parameters=parameters,
        return_type=_degrade_generic(return_type, type_params),
        source_path=path,
    )
