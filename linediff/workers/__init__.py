"""
Background workers for non-blocking comparisons.

All workers use Qt signals for thread-safe communication
with the UI thread.
"""

from linediff.workers.base_worker import (
    CancellableWorker,
    CancelledException,
    WorkerSignals,
    WorkerState,
    WorkerThread,
)
from linediff.workers.compare_worker import (
    DebouncedDiffRunner,
    DiffWorker,
)

__all__ = [
    # Base
    'CancellableWorker',
    'CancelledException',
    'WorkerSignals',
    'WorkerState',
    'WorkerThread',
    # Compare
    'DebouncedDiffRunner',
    'DiffWorker',
]
