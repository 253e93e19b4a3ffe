"""Pagination over the user service and youngest-user selection."""

from __future__ import annotations

import logging
from operator import attrgetter
from typing import Callable, Iterable, Protocol

from .models import User, UserIdPage
from .phone import is_valid_phone_number

logger = logging.getLogger(__name__)

DEFAULT_COUNT = 5


class PaginationLimitError(RuntimeError):
    """The service kept returning continuation tokens past the page cap."""


class UserSource(Protocol):
    def list_user_ids(self, token: str | None = None) -> UserIdPage: ...

    def get_user(self, user_id: int) -> User: ...


def collect_valid_users(
    client: UserSource,
    is_valid: Callable[[str], bool] = is_valid_phone_number,
    max_pages: int | None = None,
) -> list[User]:
    """Walk every page of user IDs and return the users with valid phones.

    Users are kept in the order they were listed. IDs repeated across
    pages are not deduplicated.

    With `max_pages=None` there is no bound on the number of pages: a
    service that never stops handing out tokens is followed forever.
    """
    valid_users: list[User] = []
    token: str | None = ""
    pages = 0

    while True:
        if max_pages is not None and pages >= max_pages:
            raise PaginationLimitError(
                f"Service still returned a continuation token after {pages} page(s)"
            )
        page = client.list_user_ids(token)
        pages += 1
        logger.info(f"Page {pages}: {len(page.result)} user id(s)")

        for user_id in page.result:
            user = client.get_user(user_id)
            if is_valid(user.phone):
                valid_users.append(user)
            else:
                logger.debug(f"Skipping user {user.id}: invalid phone {user.phone!r}")

        if not page.has_next:
            break
        token = page.token

    logger.info(f"Collected {len(valid_users)} user(s) with valid phone numbers")
    return valid_users


def select_youngest(users: Iterable[User], count: int = DEFAULT_COUNT) -> list[User]:
    """Return the `count` youngest users, ordered by name.

    Both sorts are stable, so users of equal age keep their listing order
    when deciding who makes the cut.
    """
    if count < 0:
        raise ValueError(f"count must be non-negative: {count}")
    youngest = sorted(users, key=attrgetter("age"))[:count]
    return sorted(youngest, key=attrgetter("name"))


def format_user(user: User) -> str:
    return f"{user.name} has number {user.phone} and is {user.age} years old"


def run(
    client: UserSource,
    count: int = DEFAULT_COUNT,
    max_pages: int | None = None,
) -> list[str]:
    """Collect, select and format. Returns the lines to print."""
    valid_users = collect_valid_users(client, max_pages=max_pages)
    return [format_user(user) for user in select_youngest(valid_users, count)]
