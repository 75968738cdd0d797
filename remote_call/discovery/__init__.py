"""Build-time discovery of exported functions and their type descriptor."""

from remote_call.discovery.descriptor import (
    is_async_type,
    render_call_shape,
    render_type_descriptor,
    write_type_descriptor,
)
from remote_call.discovery.extractor import (
    SignatureExtractionError,
    extract_signatures,
    parse_file,
    parse_source,
)
from remote_call.discovery.patterns import (
    PatternError,
    normalize_pattern,
    normalize_patterns,
)
from remote_call.discovery.pipeline import discover
from remote_call.discovery.registry import (
    FunctionRegistry,
    RegistryBuilder,
    RegistryFrozenError,
)
from remote_call.discovery.scanner import ScanError, scan_files

__all__ = [
    # Patterns and scanning
    "PatternError",
    "normalize_pattern",
    "normalize_patterns",
    "ScanError",
    "scan_files",
    # Signature extraction
    "SignatureExtractionError",
    "extract_signatures",
    "parse_file",
    "parse_source",
    # Registry
    "FunctionRegistry",
    "RegistryBuilder",
    "RegistryFrozenError",
    # Type descriptor
    "is_async_type",
    "render_call_shape",
    "render_type_descriptor",
    "write_type_descriptor",
    # Pipeline
    "discover",
]
