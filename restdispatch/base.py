"""The basic abstract connection."""

import abc

from requests.structures import CaseInsensitiveDict


class BaseConnection(abc.ABC):
    """The most basic abstract connection to a REST API.

    Dispatchers only need these two methods, so any object providing them will do.
    """

    @abc.abstractmethod
    def headers(self) -> CaseInsensitiveDict:
        """Base headers for a single request.

        The returned collection is mutated by the caller.
        """
        ...

    @abc.abstractmethod
    def request(self, *resource: str) -> str:
        """Request target for `resource` pieces, e.g. `request("/documents", "/123")`."""
        ...
