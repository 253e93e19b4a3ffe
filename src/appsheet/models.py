"""Data models for the user service payloads."""

from __future__ import annotations

from dataclasses import dataclass


class PayloadError(ValueError):
    """A JSON payload does not have the expected shape."""


def _require(data: dict, key: str, kind: type, what: str):
    """Return data[key], checking it is present and of JSON type `kind`."""
    if key not in data:
        raise PayloadError(f"{what} payload is missing '{key}'")
    value = data[key]
    # bool is an int subclass but never a valid JSON integer here
    if isinstance(value, bool) or not isinstance(value, kind):
        raise PayloadError(
            f"{what} payload field '{key}' must be {kind.__name__}, got {type(value).__name__}"
        )
    return value


@dataclass(frozen=True)
class User:
    """A user detail record."""

    id: int
    name: str
    age: int
    phone: str

    @classmethod
    def from_dict(cls, data: dict) -> User:
        """Create a User from a `/detail/{id}` response body."""
        if not isinstance(data, dict):
            raise PayloadError(f"User payload must be an object, got {type(data).__name__}")
        return cls(
            id=_require(data, "id", int, "User"),
            name=_require(data, "name", str, "User"),
            age=_require(data, "age", int, "User"),
            phone=_require(data, "number", str, "User"),
        )


@dataclass(frozen=True)
class UserIdPage:
    """One page of user identifiers from `/list`."""

    result: tuple[int, ...] = ()
    token: str | None = None

    @property
    def has_next(self) -> bool:
        """Whether the service handed out a continuation token."""
        return bool(self.token)

    @classmethod
    def from_dict(cls, data: dict) -> UserIdPage:
        """Create a UserIdPage from a `/list` response body."""
        if not isinstance(data, dict):
            raise PayloadError(f"UserIdPage payload must be an object, got {type(data).__name__}")
        result = _require(data, "result", list, "UserIdPage")
        for item in result:
            if isinstance(item, bool) or not isinstance(item, int):
                raise PayloadError(f"UserIdPage 'result' must hold integers, got {item!r}")

        token = data.get("token")
        if token is not None and not isinstance(token, str):
            raise PayloadError(
                f"UserIdPage field 'token' must be str or null, got {type(token).__name__}"
            )
        return cls(result=tuple(result), token=token)
