"""
Cancellation tokens for long pixel scans
"""

import threading
from typing import Optional

from ..errors import AnalysisCancelled


class CancellationToken:
    """Thread-safe flag a superseded analysis is abandoned through"""

    def __init__(self):
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise AnalysisCancelled("Analysis was superseded")


def check(token: Optional[CancellationToken]) -> None:
    """Raise AnalysisCancelled if token is set (no-op without a token)"""
    if token is not None:
        token.raise_if_cancelled()
