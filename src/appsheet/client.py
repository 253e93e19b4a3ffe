"""HTTP client for the user service."""

from __future__ import annotations

import logging
from typing import Callable, TypeVar

import requests

from .models import User, UserIdPage

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ServerError(RuntimeError):
    """The service answered with a status other than 200."""

    def __init__(self, status_code: int, reason: str | None) -> None:
        self.status_code = status_code
        self.reason = reason or ""
        super().__init__(f"Server error (HTTP {status_code}: {self.reason}).")


def get_resource(
    session: requests.Session,
    url: str,
    parse: Callable[[dict], T],
    params: dict | None = None,
    timeout: float | None = None,
) -> T:
    """GET `url` and turn its JSON body into an object with `parse`.

    Transport and JSON decode errors from requests are not caught.
    """
    logger.debug(f"GET {url} params={params}")
    response = session.get(url, params=params, timeout=timeout)
    try:
        if response.status_code != 200:
            raise ServerError(response.status_code, response.reason)
        return parse(response.json())
    finally:
        response.close()


class UserServiceClient:
    """Typed access to the `/list` and `/detail/{id}` endpoints."""

    def __init__(
        self,
        base_url: str,
        session: requests.Session | None = None,
        timeout: float | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._owns_session = session is None
        self.session = session if session is not None else requests.Session()

    def list_user_ids(self, token: str | None = None) -> UserIdPage:
        """Fetch one page of user IDs, continuing from `token` if given."""
        params = {"token": token} if token else None
        return get_resource(
            self.session,
            f"{self.base_url}/list",
            UserIdPage.from_dict,
            params=params,
            timeout=self.timeout,
        )

    def get_user(self, user_id: int) -> User:
        """Fetch the detail record of one user."""
        return get_resource(
            self.session,
            f"{self.base_url}/detail/{user_id}",
            User.from_dict,
            timeout=self.timeout,
        )

    def close(self) -> None:
        if self._owns_session:
            self.session.close()

    def __enter__(self) -> UserServiceClient:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
