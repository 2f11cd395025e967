"""
Workers for running line comparisons off the UI thread.
"""

from __future__ import annotations

import logging
from typing import Optional

from PyQt6.QtCore import QObject, QTimer, pyqtSignal, pyqtSlot

from linediff.core.diff.text_diff import LineDiffEngine, NormalizationPolicy, ProgressCallback
from linediff.core.models import DiffResult
from linediff.services.settings import ComparisonSettings
from linediff.workers.base_worker import CancellableWorker, WorkerThread


logger = logging.getLogger(__name__)


class DiffWorker(CancellableWorker):
    """
    Worker for comparing two in-memory texts.

    Cancellation is noticed after every row of the comparison table,
    so even large inputs stop promptly.
    """

    progress_message = "Comparing lines..."

    def __init__(
        self,
        left_text: str,
        right_text: str,
        policy: Optional[NormalizationPolicy] = None,
        max_cells: Optional[int] = None,
        parent: Optional[QObject] = None
    ):
        super().__init__(parent)
        self.left_text = left_text
        self.right_text = right_text
        self.policy = policy or NormalizationPolicy()
        self.max_cells = max_cells

    def compute(self, on_row: ProgressCallback) -> DiffResult:
        """Perform the comparison."""
        self.signals.status.emit("Computing differences...")

        engine = LineDiffEngine(self.policy, max_cells=self.max_cells)
        result = engine.compare_text(self.left_text, self.right_text, on_row)

        self.signals.status.emit("Complete")
        return result


class DebouncedDiffRunner(QObject):
    """
    Recomputes a diff in the background after input settles.

    Each `request` restarts a single-shot timer. When it fires, any running
    comparison is cancelled and a new worker starts on the latest texts.
    Only the latest request's outcome is emitted.
    """

    # Latest comparison finished
    result_ready = pyqtSignal(object)  # DiffResult

    # Latest comparison failed: (error_type, message)
    failed = pyqtSignal(str, str)

    # A comparison started or the last one ended
    busy_changed = pyqtSignal(bool)

    def __init__(
        self,
        settings: Optional[ComparisonSettings] = None,
        parent: Optional[QObject] = None
    ):
        super().__init__(parent)
        self.settings = settings or ComparisonSettings()

        self._timer = QTimer(self)
        self._timer.setSingleShot(True)
        self._timer.timeout.connect(self._start_pending)

        self._pending: Optional[tuple[str, str]] = None
        self._active: Optional[WorkerThread] = None
        self._threads: list[WorkerThread] = []

    @property
    def is_busy(self) -> bool:
        """True while the latest comparison is pending or running."""
        return self._pending is not None or self._active is not None

    def request(self, left_text: str, right_text: str) -> None:
        """Schedule a comparison of the given texts."""
        self._pending = (left_text, right_text)
        self._timer.stop()
        self._timer.start(self.settings.debounce_ms)

    def flush(self) -> None:
        """Start the pending comparison without waiting for the delay."""
        self._timer.stop()
        self._start_pending()

    def cancel(self) -> None:
        """Drop the pending request and cancel the running comparison."""
        self._timer.stop()
        self._pending = None
        if self._active is not None:
            self._active.cancel()
            self._active = None
            self.busy_changed.emit(False)

    def wait(self, msecs: int = 5000) -> bool:
        """Block until every started thread has ended."""
        return all(thread.wait(msecs) for thread in list(self._threads))

    @pyqtSlot()
    def _start_pending(self) -> None:
        if self._pending is None:
            return
        left_text, right_text = self._pending
        self._pending = None

        was_busy = self._active is not None
        if self._active is not None:
            logger.debug("Cancelling superseded comparison")
            self._active.cancel()

        worker = DiffWorker(
            left_text,
            right_text,
            policy=self.settings.policy,
            max_cells=self.settings.max_table_cells
        )
        worker.signals.finished.connect(self._on_finished)
        worker.signals.error.connect(self._on_error)

        thread = WorkerThread(worker)
        thread.finished.connect(self._on_thread_finished)
        self._threads.append(thread)
        self._active = thread

        if not was_busy:
            self.busy_changed.emit(True)
        thread.start()

    def _is_current(self) -> bool:
        return self._active is not None and self.sender() is self._active.worker.signals

    @pyqtSlot(object)
    def _on_finished(self, result: DiffResult) -> None:
        if not self._is_current():
            return
        self._active = None
        self.busy_changed.emit(False)
        self.result_ready.emit(result)

    @pyqtSlot(str, str)
    def _on_error(self, error_type: str, message: str) -> None:
        if not self._is_current():
            return
        logger.warning("Comparison failed: %s: %s", error_type, message)
        self._active = None
        self.busy_changed.emit(False)
        self.failed.emit(error_type, message)

    @pyqtSlot()
    def _on_thread_finished(self) -> None:
        thread = self.sender()
        if thread in self._threads:
            thread.wait()
            self._threads.remove(thread)
