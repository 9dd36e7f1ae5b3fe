from collections.abc import Callable, Iterable
from typing import Any

import httpx


def set_access_token_cookie(client: httpx.AsyncClient, access_token: str) -> None:
    """Set only the access token cookie on the test client."""
    client.cookies.set("access_token", access_token)


def assert_error_envelope(data: dict[str, Any], code: str) -> None:
    assert data["success"] is False
    assert data["error"]["code"] == code
    assert data["error"]["message"]


def sequence_generator(ids: Iterable[str]) -> Callable[[], str]:
    """Credential ID generator that hands out ``ids`` in order."""
    iterator = iter(ids)
    return lambda: next(iterator)
