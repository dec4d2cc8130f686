"""
Background directory traversal for the scanner package.

DirectoryWalker enumerates a directory tree on its own thread and hands the
discovered file paths to any number of consumer threads through a shared,
lock-protected queue.
"""

from __future__ import annotations

import logging
import os
import threading
from collections import deque
from pathlib import Path
from typing import Iterator, Optional

logger = logging.getLogger(__name__)


class DirectoryWalker:
    """
    Producer side of the traversal pipeline.

    The traversal thread is the only writer to the queue. Consumers pull with
    get_next(); each path is delivered to exactly one consumer. The done flag
    is set once, after the walk has fully returned, and never reset.

    Typical use:
        walker = DirectoryWalker(root)
        walker.traverse(descend=True)
        ... consumers call walker.get_next() until it reports done ...
        walker.finish()
    """

    def __init__(self, root: str | Path):
        self.root = Path(root)
        self._queue: deque[Path] = deque()
        self._cond = threading.Condition(threading.Lock())
        self._done = False
        self._thread: Optional[threading.Thread] = None
        self._finished = False
        self.discovered = 0

    @property
    def done(self) -> bool:
        """True once the traversal thread has finished enumerating."""
        with self._cond:
            return self._done

    def traverse(self, descend: bool = True) -> None:
        """
        Start enumerating the root directory on a background thread.

        Args:
            descend: Also enumerate subdirectories

        Raises:
            RuntimeError: If traversal was already started
        """
        if self._thread is not None:
            raise RuntimeError("Traversal already started")

        self._thread = threading.Thread(
            target=self._run,
            args=(descend,),
            name=f"walker:{self.root.name or self.root}",
        )
        self._thread.start()

    def get_next(self, timeout: Optional[float] = None) -> tuple[Optional[Path], bool]:
        """
        Take the next discovered path.

        Without a timeout this never blocks. With a timeout, an empty queue
        waits until a path arrives, traversal completes, or the timeout
        elapses.

        Returns:
            (path, False): a path to process
            (None, False): nothing queued yet, traversal still running; retry
            (None, True): queue drained and traversal finished; stop
        """
        with self._cond:
            if not self._queue and not self._done and timeout:
                self._cond.wait_for(lambda: self._queue or self._done, timeout=timeout)

            if self._queue:
                return self._queue.popleft(), False
            return None, self._done

    def finish(self) -> None:
        """
        Wait for the traversal thread to terminate.

        Call exactly once, after the consumers have observed completion.

        Raises:
            RuntimeError: If traversal never started or finish() was already called
        """
        if self._thread is None:
            raise RuntimeError("Traversal was never started")
        if self._finished:
            raise RuntimeError("finish() already called")

        self._thread.join()
        self._finished = True

    def __iter__(self) -> Iterator[Path]:
        """Yield paths until traversal completes (single consumer)."""
        while True:
            path, done = self.get_next(timeout=0.1)
            if path is not None:
                yield path
            elif done:
                return

    def _enqueue(self, path: Path) -> None:
        with self._cond:
            self._queue.append(path)
            self.discovered += 1
            self._cond.notify()

    def _run(self, descend: bool) -> None:
        try:
            for dirpath, dirnames, filenames in os.walk(self.root, onerror=self._on_error):
                for filename in filenames:
                    self._enqueue(Path(dirpath) / filename)
                if not descend:
                    dirnames.clear()
        except Exception as e:
            # Never leave consumers waiting on a walk that died
            logger.error(f"Traversal of {self.root} aborted: {e}")
        finally:
            with self._cond:
                self._done = True
                self._cond.notify_all()
            logger.debug(f"Traversal of {self.root} complete ({self.discovered:,} files)")

    @staticmethod
    def _on_error(error: OSError) -> None:
        logger.debug(f"Skipping unreadable path {error.filename}: {error.strerror}")


__all__ = ['DirectoryWalker']
