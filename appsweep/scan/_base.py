from __future__ import annotations

import logging
import queue
import threading
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Callable

from appsweep.models.scan import CancelCheck, ProgressCallback
from appsweep.services.probes import ProbeFindings

log = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class ProbeTask:
    label: str
    run: Callable[[], ProbeFindings]


def run_tasks(
    tasks: Sequence[ProbeTask],
    workers: int = 4,
    progress_callback: ProgressCallback | None = None,
    cancel_check: CancelCheck | None = None,
) -> tuple[list[ProbeFindings], bool]:
    """Run independent probe tasks on a small thread pool.

    Results come back in task order regardless of completion order, so the
    caller's "first occurrence wins" merge stays deterministic. Returns
    ``(findings, cancelled)``.
    """
    results: list[ProbeFindings] = [ProbeFindings() for _ in tasks]
    if not tasks:
        return results, False

    q: queue.Queue[int | None] = queue.Queue()
    for idx in range(len(tasks)):
        q.put(idx)

    total = len(tasks)
    finished = 0
    lock = threading.Lock()
    cancelled = threading.Event()

    def _is_cancelled() -> bool:
        if cancelled.is_set():
            return True
        if cancel_check is not None and cancel_check():
            cancelled.set()
            return True
        return False

    def run_worker() -> None:
        nonlocal finished
        while True:
            idx = q.get()
            if idx is None:
                q.task_done()
                break

            if _is_cancelled():
                q.task_done()
                continue

            task = tasks[idx]
            try:
                try:
                    results[idx] = task.run()
                except Exception:  # noqa: BLE001
                    log.debug("Probe %s failed", task.label, exc_info=True)
                with lock:
                    finished += 1
                    done = finished
                if progress_callback is not None:
                    progress_callback(task.label, done, total)
            except Exception:  # noqa: BLE001
                log.debug("Progress callback failed for %s", task.label, exc_info=True)
            finally:
                q.task_done()

    num_workers = max(1, min(workers, total))
    threads = [threading.Thread(target=run_worker, daemon=True) for _ in range(num_workers)]
    for thread in threads:
        thread.start()
    q.join()
    for _ in threads:
        q.put(None)
    q.join()
    for thread in threads:
        thread.join(timeout=0.3)

    return results, cancelled.is_set()
