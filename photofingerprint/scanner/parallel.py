"""
Parallel processing module for the scanner package.

Runs one pipeline mode over a directory with a pool of worker threads fed
by a single background DirectoryWalker.
"""

from __future__ import annotations

import threading
from functools import partial
from pathlib import Path
from typing import Callable, Optional

from ..models import PipelineStats, WorkerMode, WorkerOptions
from .dependencies import _logger
from .pipeline import consume, generate_fingerprint, find_duplicates, extract_metadata
from .store import FingerprintStore
from .walker import DirectoryWalker


def _make_handler(
    options: WorkerOptions,
    store: Optional[FingerprintStore],
    stats: PipelineStats,
) -> Callable[[Path], object]:
    if options.mode == WorkerMode.GENERATE:
        return partial(
            generate_fingerprint,
            destination=options.destination_directory,
            stats=stats,
        )

    if options.mode == WorkerMode.FIND_DUPLICATES:
        if store is None:
            raise ValueError("find-duplicates needs a loaded FingerprintStore")
        return partial(
            find_duplicates,
            store=store,
            fuzz=options.fuzz,
            low=options.low_threshold,
            high=options.high_threshold,
            stats=stats,
        )

    if options.mode == WorkerMode.EXTRACT_METADATA:
        return partial(extract_metadata, stats=stats)

    raise ValueError(f"Unknown worker mode: {options.mode}")


def run_workers(
    options: WorkerOptions,
    store: Optional[FingerprintStore] = None,
) -> PipelineStats:
    """
    Walk the mode's directory and process it with a pool of worker threads.

    The walker belongs to this call: it is started before the workers,
    and finished after every worker has exited.

    Args:
        options: Run configuration
        store: Loaded fingerprints (find-duplicates only)

    Returns:
        PipelineStats for the run

    Raises:
        ValueError: For a thread count below 1 or a missing store
    """
    if options.num_threads < 1:
        raise ValueError(f"num_threads must be at least 1, got {options.num_threads}")

    stats = PipelineStats()
    handler = _make_handler(options, store, stats)

    walker = DirectoryWalker(options.search_directory)
    walker.traverse(descend=True)

    threads = [
        threading.Thread(
            target=consume,
            args=(walker, handler, options.poll_interval, stats),
            name=f"{options.mode.value}-{i}",
        )
        for i in range(options.num_threads)
    ]
    for thread in threads:
        thread.start()

    for thread in threads:
        thread.join()

    walker.finish()

    _logger.debug(
        f"{options.mode.value}: {walker.discovered:,} files discovered, "
        f"{stats.attempted:,} images attempted"
    )
    return stats


def dispatch(options: WorkerOptions) -> PipelineStats:
    """
    Run one complete mode.

    Find-duplicates first loads the fingerprint directory in full; workers
    only start once the store is complete.

    Args:
        options: Run configuration

    Returns:
        PipelineStats for the worker pool run
    """
    store = None
    if options.mode == WorkerMode.FIND_DUPLICATES:
        store = FingerprintStore()
        store.load(options.source_directory, show_progress=options.show_progress)
        if not len(store):
            _logger.warning(f"No fingerprints found in {options.source_directory}")

    return run_workers(options, store)


__all__ = ['run_workers', 'dispatch']
