"""Request assembly and dispatching on top of a connection."""
from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any
from urllib.parse import quote, urlencode

from requests.structures import CaseInsensitiveDict

from restdispatch import transport
from restdispatch.base import BaseConnection
from restdispatch.constants import RequestMethod

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RequestInit:
    """Options of a single HTTP call."""
    method: RequestMethod | str
    body: Any
    headers: CaseInsensitiveDict


@dataclass(frozen=True)
class DispatcherConfig:
    """Static configuration of a dispatcher, fixed at construction."""
    base_path: str = ""
    # None means no parameter is allowed at all
    allowed_params: frozenset[str] | None = None

    @classmethod
    def build(cls, base_path: str = "", allowed_query_params: Iterable[str] | None = None) -> DispatcherConfig:
        return cls(
            base_path=base_path,
            allowed_params=None if allowed_query_params is None else frozenset(allowed_query_params),
        )


def get_request_init(
        connection: BaseConnection,
        method: RequestMethod | str = RequestMethod.GET,
        body: Any = None,
        request_headers: Mapping[str, str] | None = None,
) -> RequestInit:
    """Connection headers overwritten by `request_headers`, along with `method` and `body`."""
    headers = connection.headers()
    if request_headers:
        for key, value in request_headers.items():
            headers[key] = value
    return RequestInit(method=method, body=body, headers=headers)


def get_request_target(
        connection: BaseConnection,
        base_path: str,
        path_suffix: str,
        allowed_params: frozenset[str] | None,
        params: Mapping[str, Any] | None = None,
) -> str:
    """Build the full request target.

    Only the `params` whose names are in `allowed_params` end up in the query string,
    the rest are dropped silently. With no `allowed_params` every parameter is dropped.
    """
    if not params:
        return connection.request(base_path, path_suffix)

    allowed = allowed_params or frozenset()
    query_params = {name: value for name, value in params.items() if name in allowed}
    query_string = urlencode(query_params, doseq=True, quote_via=quote)
    if query_string:
        path_suffix = f"{path_suffix}?{query_string}"
    return connection.request(base_path, path_suffix)


class Dispatcher:
    """Callable sending requests under a fixed base path.

    Converts `params` to a query string (dropping the ones that are not allowed),
    merges request headers into the connection's ones and prepends the connection's
    endpoint and the base path to the target. The result of the fetch primitive is
    returned untouched.
    """

    def __init__(self, config: DispatcherConfig, fetch: transport.Fetch | None = None):
        self.config = config
        self._fetch = fetch

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.config!r})"

    def __call__(
            self,
            connection: BaseConnection,
            method: RequestMethod | str = RequestMethod.GET,
            body: Any = None,
            request_headers: Mapping[str, str] | None = None,
            params: Mapping[str, Any] | None = None,
            path_suffix: str = "",
    ) -> Any:
        target = get_request_target(
            connection,
            self.config.base_path,
            path_suffix,
            self.config.allowed_params,
            params,
        )
        init = get_request_init(connection, method, body, request_headers)
        logger.debug("Dispatching [%s] request for the URL %s", init.method, target)
        send = self._fetch or transport.fetch
        return send(target, init)


def create_dispatcher(
        base_path: str = "",
        allowed_query_params: Iterable[str] | None = None,
        fetch: transport.Fetch | None = None,
) -> Dispatcher:
    """Create a dispatcher for `base_path` accepting only `allowed_query_params`."""
    return Dispatcher(DispatcherConfig.build(base_path, allowed_query_params), fetch=fetch)


dispatch_generic_fetch = create_dispatcher()
