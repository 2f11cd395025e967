"""
Cancellable comparison workers for a QThread.

A worker computes one result. The engine calls the worker's row callback
after each row of the comparison table, and that callback is where a
cancel request takes effect.
"""

from __future__ import annotations

import logging
from enum import Enum, auto
from typing import Any, Optional

from PyQt6.QtCore import Qt, QObject, QThread, pyqtSignal, pyqtSlot, QMutex, QMutexLocker

from linediff.core.diff.text_diff import ProgressCallback


logger = logging.getLogger(__name__)


class WorkerState(Enum):
    """Lifecycle of a worker."""
    PENDING = auto()
    RUNNING = auto()
    CANCELLED = auto()
    COMPLETED = auto()
    FAILED = auto()


class CancelledException(Exception):
    """Raised from the row callback once cancellation was requested."""


class WorkerSignals(QObject):
    """Signals emitted by a worker, usually from its own thread."""
    # (rows_done, total_rows, message)
    progress = pyqtSignal(int, int, str)

    status = pyqtSignal(str)

    # Exactly one of these ends every run
    finished = pyqtSignal(object)
    error = pyqtSignal(str, str)  # (error_type, message)
    cancelled = pyqtSignal()

    state_changed = pyqtSignal(object)  # WorkerState


class CancellableWorker(QObject):
    """
    Runs a single computation that can be stopped between table rows.

    Subclasses implement `compute` and pass the given row callback to the
    engine. Errors raised by the computation end the run with `error`.
    """

    progress_message = ""

    def __init__(self, parent: Optional[QObject] = None):
        super().__init__(parent)
        self.signals = WorkerSignals()
        self.result: Any = None
        self.error: Optional[tuple[str, str]] = None
        self._mutex = QMutex()
        self._state = WorkerState.PENDING
        self._cancel_requested = False

    @property
    def state(self) -> WorkerState:
        with QMutexLocker(self._mutex):
            return self._state

    def _set_state(self, state: WorkerState) -> None:
        with QMutexLocker(self._mutex):
            self._state = state
        self.signals.state_changed.emit(state)

    @property
    def is_cancelled(self) -> bool:
        with QMutexLocker(self._mutex):
            return self._cancel_requested

    def cancel(self) -> None:
        """Ask the computation to stop after the current row. Safe from any thread."""
        with QMutexLocker(self._mutex):
            self._cancel_requested = True

    def on_row(self, rows_done: int, total_rows: int) -> None:
        """Row callback for the engine."""
        if self.is_cancelled:
            raise CancelledException(f"Stopped at row {rows_done} of {total_rows}")
        self.signals.progress.emit(rows_done, total_rows, self.progress_message)

    def compute(self, on_row: ProgressCallback) -> Any:
        raise NotImplementedError

    @pyqtSlot()
    def run(self) -> None:
        """Run the computation and emit how it ended."""
        if self.is_cancelled:
            self._end_cancelled()
            return

        self._set_state(WorkerState.RUNNING)
        try:
            result = self.compute(self.on_row)
        except CancelledException:
            self._end_cancelled()
            return
        except Exception as e:
            logger.debug("%s failed", type(self).__name__, exc_info=True)
            self.error = (type(e).__name__, str(e))
            self._set_state(WorkerState.FAILED)
            self.signals.error.emit(*self.error)
            return

        # A cancel after the last row still wins
        if self.is_cancelled:
            self._end_cancelled()
            return

        self.result = result
        self._set_state(WorkerState.COMPLETED)
        self.signals.finished.emit(result)

    def _end_cancelled(self) -> None:
        self._set_state(WorkerState.CANCELLED)
        self.signals.cancelled.emit()


class WorkerThread(QThread):
    """
    Owns one worker and runs it when started.

    The thread's event loop quits as soon as the worker ends, whichever way.
    """

    def __init__(
        self,
        worker: CancellableWorker,
        parent: Optional[QObject] = None
    ):
        super().__init__(parent)
        self.worker = worker
        self.worker.moveToThread(self)

        # quit() is thread-safe, so call it straight from the worker's thread
        direct = Qt.ConnectionType.DirectConnection
        self.started.connect(self.worker.run)
        for signal in (worker.signals.finished, worker.signals.error, worker.signals.cancelled):
            signal.connect(self.quit, direct)

    def cancel(self) -> None:
        self.worker.cancel()
