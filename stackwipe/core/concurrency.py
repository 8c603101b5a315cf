"""Fail-fast bounded fan-out on top of ThreadPoolExecutor.

A TaskGroup runs callables on a bounded pool. The first task that raises
cancels the group's token: tasks that have not started yet are skipped, tasks
that are already running are left to finish, and wait() re-raises that first
error once everything has settled.
"""
import os
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Iterable, List, Optional

from stackwipe.core.errors import OperationCancelledError


def default_concurrency() -> int:
    return os.cpu_count() or 1


class CancelToken:
    """Cooperative cancellation flag; a child is cancelled when its parent is."""

    def __init__(self, parent: Optional['CancelToken'] = None):
        self._parent = parent
        self._event = threading.Event()

    def child(self) -> 'CancelToken':
        return CancelToken(self)

    def cancel(self):
        self._event.set()

    @property
    def cancelled(self) -> bool:
        if self._event.is_set():
            return True
        return self._parent is not None and self._parent.cancelled

    def raise_if_cancelled(self, resource_name: str):
        if self.cancelled:
            raise OperationCancelledError(resource_name)


class TaskGroup:
    def __init__(self, max_workers: int, token: Optional[CancelToken] = None, name: str = ''):
        self.name = name
        self.token = (token or CancelToken()).child()
        self._executor = ThreadPoolExecutor(max_workers=max(1, max_workers))
        # admission bound: submit blocks while every worker is busy
        self._slots = threading.BoundedSemaphore(max(1, max_workers))
        self._lock = threading.Lock()
        self._first_error: Optional[BaseException] = None

    def submit(self, func: Callable[..., Any], *args):
        self._slots.acquire()
        self._executor.submit(self._run, func, *args)

    def _record(self, error: BaseException):
        with self._lock:
            if self._first_error is None:
                self._first_error = error
        self.token.cancel()

    def _run(self, func, *args):
        try:
            if self.token.cancelled:
                if self._first_error is None:
                    self._record(OperationCancelledError(self.name))
                return
            func(*args)
        except Exception as e:
            self._record(e)
        finally:
            self._slots.release()

    def wait(self):
        self._executor.shutdown(wait=True)
        if self._first_error is not None:
            raise self._first_error

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        if exc is not None:
            # the producer loop failed: stop queued work, let running work drain
            self.token.cancel()
            self._executor.shutdown(wait=True)
            return False
        self.wait()
        return False


def run_fail_fast(func: Callable[..., Any], items: Iterable[Any], max_workers: int,
                  token: Optional[CancelToken] = None, name: str = ''):
    """Call func(item, token) for every item, at most max_workers at a time."""
    items: List[Any] = list(items)
    if not items:
        return
    with TaskGroup(min(max_workers, len(items)), token, name) as group:
        for item in items:
            group.submit(func, item, group.token)
