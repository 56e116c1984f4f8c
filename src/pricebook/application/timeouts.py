"""Time-bounded collaborator reads.

Catalog fetches and override store reads go through
``call_with_timeout``.  Each call runs on its own daemon thread and the
caller waits at most ``timeout`` seconds for it.  A call that overruns
is abandoned; its eventual result is discarded, and it holds no slot
that a later call would need.

Writes never go through here.  An abandoned write could still commit
after the caller was told it failed, so writes run on the caller's
thread and are bounded by the store's own lock timeout, which rolls the
transaction back.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from concurrent.futures import Future
from concurrent.futures import TimeoutError as FutureTimeoutError
from typing import TypeVar

from pricebook.domain.exceptions import OperationTimeoutError

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_TIMEOUT = 5.0


def _run(future: Future, fn: Callable[..., T], args: tuple, kwargs: dict) -> None:
    if not future.set_running_or_notify_cancel():
        return
    try:
        result = fn(*args, **kwargs)
    except BaseException as exc:
        future.set_exception(exc)
    else:
        future.set_result(result)


def call_with_timeout(
    operation: str,
    fn: Callable[..., T],
    *args,
    timeout: float = DEFAULT_TIMEOUT,
    **kwargs,
) -> T:
    """Run ``fn(*args, **kwargs)`` and return its result.

    Raises OperationTimeoutError if no result arrives within
    ``timeout`` seconds.  Exceptions raised by ``fn`` propagate
    unchanged.
    """
    future: Future = Future()
    worker = threading.Thread(
        target=_run,
        args=(future, fn, args, kwargs),
        name=f"pricebook-{operation}",
        daemon=True,
    )
    worker.start()
    try:
        return future.result(timeout=timeout)
    except FutureTimeoutError:
        logger.warning("Collaborator call '%s' exceeded %.2fs", operation, timeout)
        raise OperationTimeoutError(operation, timeout) from None
