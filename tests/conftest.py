import json

import pytest
import requests


class FakeResponse:
    def __init__(self, status_code=200, body=None, reason="OK", text=None):
        self.status_code = status_code
        self.reason = reason
        self._body = body
        self._text = text
        self.closed = False

    def json(self):
        if self._text is not None:
            # Mirror requests: a body that is not JSON raises its JSONDecodeError
            try:
                return json.loads(self._text)
            except json.JSONDecodeError as e:
                raise requests.exceptions.JSONDecodeError(e.msg, e.doc, e.pos)
        return self._body

    def close(self):
        self.closed = True


class FakeSession:
    """Serves canned responses keyed by (url, token)."""

    def __init__(self, routes):
        self.routes = routes
        self.calls = []
        self.closed = False

    def get(self, url, params=None, timeout=None):
        token = (params or {}).get("token")
        self.calls.append((url, params, timeout))
        return self.routes[(url, token)]

    def close(self):
        self.closed = True


BASE = "http://users.test"


def make_routes(pages, users):
    """Build routes for `pages` ({token: (ids, next_token)}) and `users` ({id: body})."""
    routes = {}
    for token, (ids, next_token) in pages.items():
        routes[(f"{BASE}/list", token)] = FakeResponse(body={"result": ids, "token": next_token})
    for user_id, body in users.items():
        routes[(f"{BASE}/detail/{user_id}", None)] = FakeResponse(body=body)
    return routes


@pytest.fixture
def two_page_session():
    pages = {
        None: ([1, 2], "abc"),
        "abc": ([3], None),
    }
    users = {
        1: {"id": 1, "name": "Carol", "age": 30, "number": "415-555-2671"},
        2: {"id": 2, "name": "Bob", "age": 25, "number": "555-2671"},
        3: {"id": 3, "name": "Alice", "age": 41, "number": "(212) 555-0187"},
    }
    return FakeSession(make_routes(pages, users))
