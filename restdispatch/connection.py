"""Reference connection to a REST API endpoint."""
from __future__ import annotations

import base64
import os
from dataclasses import dataclass, field

from requests.structures import CaseInsensitiveDict

from restdispatch.base import BaseConnection


@dataclass(frozen=True)
class Connection(BaseConnection):
    """Endpoint URL plus the credentials and headers shared by every request."""
    endpoint: str
    username: str | None = None
    password: str | None = None
    token: str | None = None
    default_headers: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_env(cls, prefix: str = "RESTDISPATCH") -> Connection:
        """Build a connection from `<prefix>_ENDPOINT` and friends.

        Raises:
            KeyError: if `<prefix>_ENDPOINT` is missing from the env.
        """
        return cls(
            endpoint=os.environ[f"{prefix}_ENDPOINT"],
            username=os.environ.get(f"{prefix}_USERNAME"),
            password=os.environ.get(f"{prefix}_PASSWORD"),
            token=os.environ.get(f"{prefix}_TOKEN"),
        )

    @property
    def authorization(self) -> str | None:
        """Header value for authorization, bearer token wins over basic credentials."""
        if self.token:
            return f"Bearer {self.token}"
        if self.username is not None:
            credentials = f"{self.username}:{self.password or ''}".encode()
            return f"Basic {base64.b64encode(credentials).decode('ascii')}"
        return None

    def headers(self) -> CaseInsensitiveDict:
        # NOTE: a new collection per call, callers are free to mutate it.
        headers = CaseInsensitiveDict(self.default_headers)
        if (authorization := self.authorization) is not None:
            headers["Authorization"] = authorization
        return headers

    def request(self, *resource: str) -> str:
        target = self.endpoint.rstrip("/")
        for piece in resource:
            if not piece:
                continue
            if piece.startswith(("/", "?")):
                target += piece
            else:
                target += f"/{piece}"
        return target
