"""HTTP call primitives used by dispatchers."""
from __future__ import annotations

from concurrent.futures import Executor, Future
from typing import TYPE_CHECKING, Any, Callable

import requests

if TYPE_CHECKING:
    from restdispatch.request_utils import RequestInit

Fetch = Callable[[str, "RequestInit"], Any]


def fetch(target: str, init: RequestInit) -> requests.Response:
    """Send a single request.

    The status code is not checked, network errors propagate as is.

    Raises:
        RequestException: if the request could not be sent.
    """
    return requests.request(
        str(init.method),
        target,
        headers=dict(init.headers),
        data=init.body,
    )


def executor_fetch(executor: Executor, send: Fetch = fetch) -> Callable[[str, RequestInit], Future]:
    """Wrap `send` so that every call is submitted to `executor`.

    The wrapped primitive returns the `Future` right away, failures surface from `Future.result()`.
    """

    def submit(target: str, init: RequestInit) -> Future:
        return executor.submit(send, target, init)

    return submit
