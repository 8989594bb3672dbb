"""Cookie attributes shared by the credential stores and the OAuth state cookie."""

from starlette.responses import Response


def set_http_only_cookie(
    response: Response,
    key: str,
    value: str,
    *,
    max_age: int,
    secure: bool,
) -> None:
    response.set_cookie(
        key=key,
        value=value,
        max_age=max_age,
        path="/",
        httponly=True,
        secure=secure,
        samesite="lax",
    )


def clear_cookie(response: Response, key: str, *, secure: bool) -> None:
    response.delete_cookie(key=key, path="/", httponly=True, secure=secure, samesite="lax")
