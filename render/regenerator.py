"""Debounced, single-flight PDF regeneration for the preview step."""
from __future__ import annotations
import threading
import time
import uuid
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional, Set

from core.config import config
from core.logger import get_logger
from core.utils import safe_write, stable_hash
from models.receipt import ReceiptRecord
from render.pdf import build_receipt_pdf, pdf_filename

log = get_logger("render/regenerator")

PDF_NOT_AVAILABLE = "PDF not available"


class Debouncer:
    """Run ``fn`` once, ``delay_s`` after the last ``call``; earlier calls are cancelled."""

    def __init__(self, delay_s: float, fn: Callable[..., None]):
        self.delay_s = max(0.0, float(delay_s))
        self._fn = fn
        self._lock = threading.Lock()
        self._timer: Optional[threading.Timer] = None

    def call(self, *args) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            timer = threading.Timer(self.delay_s, self._fire, args=(args,))
            timer.daemon = True
            self._timer = timer
            timer.start()

    def _fire(self, args) -> None:
        # Stay "pending" until fn has handed the work on
        try:
            self._fn(*args)
        finally:
            with self._lock:
                if self._timer is threading.current_thread():
                    self._timer = None

    def cancel(self) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None

    @property
    def pending(self) -> bool:
        with self._lock:
            return self._timer is not None and self._timer.is_alive()


@dataclass(frozen=True)
class PdfArtifact:
    generation: int
    content_hash: str
    filename: str
    path: Path

    def read_bytes(self) -> bytes:
        return self.path.read_bytes()


class PdfRegenerator:
    """
    Keeps one rendered PDF in sync with the record on screen.

    - change detection is content based (hash of the serialized record)
    - bursts of changes collapse into one render after the debounce delay
    - renders run on a single worker; each carries a generation id and only
      the latest generation is kept, late results are discarded
    - a superseded artifact's file is deleted, and ``close()`` deletes the last
    """

    def __init__(
        self,
        render: Callable[[ReceiptRecord], bytes] = build_receipt_pdf,
        delay_ms: Optional[int] = None,
        out_dir: Optional[Path] = None,
    ):
        self._render_fn = render
        delay_ms = config.pdf_debounce_ms if delay_ms is None else delay_ms
        self._debouncer = Debouncer(delay_ms / 1000.0, self._submit)
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="pdf-regen")
        self._lock = threading.Lock()
        self._generation = 0
        self._last_hash = ""
        self._artifact: Optional[PdfArtifact] = None
        self._futures: Set[Future] = set()
        self._closed = False
        self.last_error = ""
        self.out_dir = Path(out_dir or (config.pdf_dir / f"session-{uuid.uuid4().hex}"))

    # ------------------------------------------------------------------
    # scheduling
    # ------------------------------------------------------------------
    def request(self, record: ReceiptRecord) -> bool:
        """Schedule a render if the record's content changed. Returns True when scheduled."""
        content_hash = stable_hash(record.to_payload())
        with self._lock:
            if self._closed or content_hash == self._last_hash:
                return False
            self._last_hash = content_hash
        self._schedule(record, content_hash)
        return True

    def regenerate(self, record: ReceiptRecord) -> None:
        """Force a new render even if the content is unchanged."""
        content_hash = stable_hash(record.to_payload())
        with self._lock:
            if self._closed:
                return
            self._last_hash = content_hash
        self._schedule(record, content_hash)

    def _schedule(self, record: ReceiptRecord, content_hash: str) -> None:
        with self._lock:
            self._generation += 1
            generation = self._generation
        log.debug(f"PDF generation {generation} scheduled for {record.receiptNo}")
        self._debouncer.call(record, content_hash, generation)

    def _submit(self, record: ReceiptRecord, content_hash: str, generation: int) -> None:
        with self._lock:
            if self._closed or generation != self._generation:
                return
            future = self._executor.submit(self._run, record, content_hash, generation)
            self._futures.add(future)
        future.add_done_callback(self._forget)

    def _forget(self, future: Future) -> None:
        with self._lock:
            self._futures.discard(future)

    # ------------------------------------------------------------------
    # rendering
    # ------------------------------------------------------------------
    def _run(self, record: ReceiptRecord, content_hash: str, generation: int) -> None:
        try:
            data = self._render_fn(record)
        except Exception as e:
            log.error(f"PDF generation {generation} failed for {record.receiptNo}: {e!r}")
            with self._lock:
                if generation == self._generation:
                    self.last_error = str(e) or type(e).__name__
                    # Same content must be renderable again on the next request
                    self._last_hash = ""
            return

        filename = pdf_filename(record)
        path = self.out_dir / f"{Path(filename).stem}-{generation}.pdf"
        try:
            safe_write(path, data)
        except IOError as e:
            log.error(f"Could not store PDF generation {generation}: {e}")
            with self._lock:
                if generation == self._generation:
                    self.last_error = str(e)
                    self._last_hash = ""
            return

        with self._lock:
            stale = self._closed or generation != self._generation
            previous = None
            if not stale:
                previous = self._artifact
                self._artifact = PdfArtifact(generation, content_hash, filename, path)
                self.last_error = ""

        if stale:
            log.debug(f"Discarding stale PDF generation {generation}")
            self._release_path(path)
            return
        if previous is not None:
            self._release_path(previous.path)
        log.info(f"PDF generation {generation} ready: {filename}")

    @staticmethod
    def _release_path(path: Path) -> None:
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            log.warning(f"Could not release PDF artifact {path}: {e}")

    # ------------------------------------------------------------------
    # state
    # ------------------------------------------------------------------
    @property
    def artifact(self) -> Optional[PdfArtifact]:
        with self._lock:
            return self._artifact

    @property
    def generation(self) -> int:
        with self._lock:
            return self._generation

    @property
    def busy(self) -> bool:
        if self._debouncer.pending:
            return True
        with self._lock:
            return any(not f.done() for f in self._futures)

    def status(self) -> str:
        if self.busy:
            return "Generating PDF…"
        return "PDF ready" if self.artifact is not None else PDF_NOT_AVAILABLE

    def wait_idle(self, timeout: float = 10.0) -> bool:
        """Block until no render is pending or running. Returns False on timeout."""
        deadline = time.monotonic() + timeout
        while self.busy:
            if time.monotonic() >= deadline:
                return False
            time.sleep(0.01)
        return True

    def close(self) -> None:
        """Cancel pending work and release the current artifact."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            artifact, self._artifact = self._artifact, None
        self._debouncer.cancel()
        self._executor.shutdown(wait=True, cancel_futures=True)
        if artifact is not None:
            self._release_path(artifact.path)
        try:
            self.out_dir.rmdir()
        except OSError as e:
            # Missing or still holding files
            log.debug(f"Session PDF dir not removed: {self.out_dir} error={e}")
        log.debug("PDF regenerator closed")
