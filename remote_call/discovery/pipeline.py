"""Discovery pass that orchestrates scanning, extraction and registration."""

import asyncio
import logging
from pathlib import Path

from remote_call.config import RemoteCallOptions
from remote_call.discovery.extractor import SignatureExtractionError, parse_file
from remote_call.discovery.registry import RegistryBuilder
from remote_call.discovery.scanner import scan_files
from remote_call.models import DiscoveryError, DiscoveryResult, FunctionSignature

logger = logging.getLogger(__name__)

DEFAULT_CONCURRENCY = 8


async def discover(
    root_dir: str | Path,
    options: RemoteCallOptions,
    concurrency: int = DEFAULT_CONCURRENCY,
) -> DiscoveryResult:
    """Run one discovery pass over a project.

    Files are parsed concurrently in worker threads, then registered one at
    a time in scan order, so duplicate resolution does not depend on which
    parse finished first.

    Args:
        root_dir: Project root the function paths are relative to
        options: Options carrying function_paths
        concurrency: Maximum number of files parsed at once

    Returns:
        DiscoveryResult with the finalized registry and per-file errors

    Raises:
        ScanError: If the root cannot be scanned
        PatternError: If a function path is malformed
    """
    builder = RegistryBuilder()
    errors: list[DiscoveryError] = []

    if not options.function_paths:
        logger.info("No function paths configured, registry stays empty")
        return DiscoveryResult(
            root=str(Path(root_dir).absolute()), files=[], registry=builder.finalize()
        )

    root = Path(root_dir).resolve()
    logger.info(f"Starting discovery in {root} for {options.function_paths}")
    files = scan_files(root, options.function_paths)

    semaphore = asyncio.Semaphore(max(1, concurrency))

    async def extract(path: Path) -> list[FunctionSignature]:
        async with semaphore:
            return await asyncio.to_thread(parse_file, path)

    outcomes = await asyncio.gather(
        *(extract(path) for path in files), return_exceptions=True
    )

    for path, outcome in zip(files, outcomes):
        if isinstance(outcome, BaseException):
            if not isinstance(outcome, Exception):
                raise outcome
            logger.warning(f"Skipping {path}: {outcome}")
            phase = outcome.phase if isinstance(outcome, SignatureExtractionError) else "extraction"
            errors.append(DiscoveryError(path=str(path), error=str(outcome), phase=phase))
            continue
        for sig in outcome:
            builder.register(sig)

    registry = builder.finalize()
    logger.info(
        f"Discovery complete: {len(files)} files, {len(registry)} functions, "
        f"{len(registry.conflicts)} conflicts, {len(errors)} errors"
    )
    return DiscoveryResult(
        root=str(root),
        files=[str(p) for p in files],
        registry=registry,
        errors=errors,
    )
