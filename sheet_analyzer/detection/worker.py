"""
Analysis Worker - Runs sheet analysis off the interactive thread

Every submit() supersedes the previous one: its token is cancelled so an
older scan never overwrites a newer result.
"""

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Optional, Tuple

from ..core.buffer import PixelBuffer
from ..errors import AnalysisCancelled
from .analyzer import analyze
from .cancellation import CancellationToken
from .frames import AnalysisResult
from .options import DetectionOptions

logger = logging.getLogger(__name__)


class AnalysisWorker:
    """Single background thread for interactive re-analysis"""

    def __init__(self):
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix='sheet-analysis')
        self._lock = threading.Lock()
        self._token: Optional[CancellationToken] = None
        self._generation = 0
        self._latest: Optional[AnalysisResult] = None
        self._cache: Optional[Tuple[PixelBuffer, DetectionOptions, AnalysisResult]] = None

    def submit(self, buffer: PixelBuffer, options: Optional[DetectionOptions] = None) -> Future:
        """
        Queue an analysis, cancelling whatever was submitted before.

        Returns:
            Future resolving to the AnalysisResult, or raising
            AnalysisCancelled if a later submit() superseded it
        """
        options = options or DetectionOptions()
        token = CancellationToken()

        with self._lock:
            if self._token is not None:
                self._token.cancel()
            self._token = token
            self._generation += 1
            generation = self._generation

        return self._executor.submit(self._run, buffer, options, token, generation)

    def _run(self, buffer: PixelBuffer, options: DetectionOptions,
             token: CancellationToken, generation: int) -> AnalysisResult:
        token.raise_if_cancelled()

        cached = self._cached(buffer, options)
        if cached is not None:
            logger.debug("Reusing cached analysis for generation %d", generation)
            result = cached
        else:
            result = analyze(buffer, options, token)

        with self._lock:
            if generation != self._generation:
                raise AnalysisCancelled("Analysis was superseded")
            self._latest = result
            self._cache = (buffer, options, result)
        return result

    def _cached(self, buffer: PixelBuffer, options: DetectionOptions) -> Optional[AnalysisResult]:
        with self._lock:
            if self._cache is None:
                return None
            cached_buffer, cached_options, result = self._cache
        if cached_buffer is buffer and cached_options == options:
            return result
        return None

    def cancel(self) -> None:
        """Cancel the most recent submission"""
        with self._lock:
            if self._token is not None:
                self._token.cancel()
            self._generation += 1

    def latest_result(self) -> Optional[AnalysisResult]:
        """Most recent result that was not superseded"""
        with self._lock:
            return self._latest

    def shutdown(self, wait: bool = True) -> None:
        self.cancel()
        self._executor.shutdown(wait=wait)

    def __enter__(self) -> 'AnalysisWorker':
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.shutdown()
