"""
In-memory fingerprint collection for the scanner package.

The store is filled once, single-threaded, before any find-duplicates worker
starts, and is only read afterwards, so workers share it without locking.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Iterator, Optional, Any

from ..config import FINGERPRINT_SIZE, LOW_DISTORTION_THRESHOLD, HIGH_DISTORTION_THRESHOLD
from ..models import Fingerprint, MatchResult, MatchType, classify
from .backend import load_image, normalize_image, read_comment, to_pixels, distortion
from .dependencies import HAS_TQDM, _tqdm_class, _logger
from .file_discovery import is_supported_image
from .walker import DirectoryWalker


class FingerprintStore:
    """
    Fingerprints loaded from a directory, scanned linearly against probes.

    Nothing is evicted: the whole fingerprint directory stays resident for
    the run. Fingerprints are 100x100 so this stays small.
    """

    def __init__(self):
        self._fingerprints: list[Fingerprint] = []

    def __len__(self) -> int:
        return len(self._fingerprints)

    def __iter__(self) -> Iterator[Fingerprint]:
        return iter(self._fingerprints)

    def add(self, fingerprint: Fingerprint) -> None:
        """Add one fingerprint. Only call before matching starts."""
        self._fingerprints.append(fingerprint)

    def load(self, directory: str | Path, show_progress: bool = True) -> int:
        """
        Load every supported image under a directory as a fingerprint.

        Runs its own traversal and consumes it on the calling thread; returns
        only when the whole directory has been read. Unreadable files are
        logged and skipped.

        Args:
            directory: Fingerprint directory
            show_progress: Report the loaded count on stdout

        Returns:
            Number of fingerprints loaded by this call
        """
        walker = DirectoryWalker(directory)
        walker.traverse(descend=True)

        print("Loading fingerprints into memory...", flush=True)

        pbar: Optional[Any] = None
        if HAS_TQDM and show_progress and _tqdm_class is not None:
            pbar = _tqdm_class(desc="Fingerprints", unit="img", ncols=80, file=sys.stdout)

        loaded = 0
        for path in walker:
            if not is_supported_image(path):
                continue

            fingerprint = self._load_fingerprint(path)
            if fingerprint is None:
                continue

            self._fingerprints.append(fingerprint)
            loaded += 1
            if pbar is not None:
                pbar.update(1)
            elif show_progress:
                print(f"\r{loaded}", end="", flush=True)

        walker.finish()

        if pbar is not None:
            pbar.close()
        if show_progress:
            print("\rDONE", flush=True)

        _logger.info(f"Loaded {loaded:,} fingerprints from {directory}")
        return loaded

    @staticmethod
    def _load_fingerprint(path: Path) -> Optional[Fingerprint]:
        result = load_image(path)
        if not result.ok:
            _logger.warning(f"skipping fingerprint {path} {result.error}")
            return None

        image = result.image
        # Read before normalizing; a resized copy has no tags
        name = read_comment(image) or path.stem
        if image.size != FINGERPRINT_SIZE or image.mode != 'RGB':
            image = normalize_image(image)

        return Fingerprint(path=str(path), name=name, pixels=to_pixels(image))

    def find_matches(
        self,
        pixels,
        candidate: str,
        fuzz: float,
        low: float = LOW_DISTORTION_THRESHOLD,
        high: float = HIGH_DISTORTION_THRESHOLD,
    ) -> list[MatchResult]:
        """
        Score a normalized probe against every fingerprint.

        Each fingerprint is classified on its own, so one probe can match
        several fingerprints.

        Args:
            pixels: Probe pixels from to_pixels()
            candidate: Probe path, used in the results
            fuzz: Fuzz tolerance
            low: Identical/similar boundary
            high: Similar/no-match boundary

        Returns:
            Identical and similar matches, in store order
        """
        matches = []
        for fingerprint in self._fingerprints:
            score = distortion(pixels, fingerprint.pixels, fuzz)
            match_type = classify(score, low, high)
            if match_type == MatchType.NO_MATCH:
                continue
            matches.append(MatchResult(
                candidate=candidate,
                name=fingerprint.name,
                score=score,
                match_type=match_type,
            ))
        return matches


__all__ = ['FingerprintStore']
