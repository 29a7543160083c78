"""In-process fakes for the upstream HTTP API and the token components."""

from __future__ import annotations

import asyncio
import json as _json
from collections.abc import Iterable
from typing import Any

from credential_lifecycle.errors.internal import IssuanceFailed


class FakeResp:
    def __init__(
        self,
        status: int,
        payload: Any = None,
        *,
        raise_exception: BaseException | None = None,
        json_exception: Exception | None = None,
        text: str | None = None,
        body: bytes | None = None,
    ):
        self.status = status
        self._payload = payload
        self.raise_exception = raise_exception
        self.json_exception = json_exception
        self._text = text
        self._body = body

    async def __aenter__(self):
        if self.raise_exception:
            raise self.raise_exception
        return self

    async def __aexit__(self, _exc_type, _exc, _tb):
        return False

    async def json(self, content_type: str | None = "application/json"):
        await asyncio.sleep(0)
        if self.json_exception:
            raise self.json_exception
        if self._body is not None:
            return _json.loads(self._body.decode("utf-8"))
        return self._payload

    async def text(self, errors: str = "strict"):
        if self._body is not None:
            return self._body.decode("utf-8", errors=errors)
        if self._text is not None:
            return self._text
        return _json.dumps(self._payload)


class FakeSession:
    """Stands in for aiohttp.ClientSession; records every call.

    ``valid_tokens`` get a 200 from the validation probe, all others get
    ``invalid_status``.
    """

    def __init__(
        self,
        *,
        valid_tokens: Iterable[str] = (),
        invalid_status: int = 401,
        validate_exception: BaseException | None = None,
        issue_status: int = 200,
        issue_payload: Any = None,
        issue_exception: BaseException | None = None,
        issue_json_exception: Exception | None = None,
        issue_text: str | None = None,
        issue_body: bytes | None = None,
    ):
        self.valid_tokens = set(valid_tokens)
        self.invalid_status = invalid_status
        self.validate_exception = validate_exception
        self.issue_status = issue_status
        self.issue_payload = (
            issue_payload
            if issue_payload is not None
            else {"accessToken": "issued-token", "expiresIn": 3600, "tokenType": "Bearer"}
        )
        self.issue_exception = issue_exception
        self.issue_json_exception = issue_json_exception
        self.issue_text = issue_text
        self.issue_body = issue_body
        self.get_calls: list[dict[str, Any]] = []
        self.post_calls: list[dict[str, Any]] = []

    def get(self, url, headers=None, timeout=None):
        self.get_calls.append({"url": url, "headers": headers or {}, "timeout": timeout})
        token = (headers or {}).get("Authorization", "").removeprefix("Bearer ")
        status = 200 if token in self.valid_tokens else self.invalid_status
        return FakeResp(status, {}, raise_exception=self.validate_exception)

    def post(self, url, json=None, headers=None, timeout=None):
        self.post_calls.append(
            {"url": url, "json": json, "headers": headers or {}, "timeout": timeout}
        )
        return FakeResp(
            self.issue_status,
            self.issue_payload,
            raise_exception=self.issue_exception,
            json_exception=self.issue_json_exception,
            text=self.issue_text,
            body=self.issue_body,
        )


class FakeValidator:
    """Validator double: accepts tokens from ``valid``; can be held open by ``gate``."""

    def __init__(self, valid: Iterable[str] = (), gate: asyncio.Event | None = None):
        self.valid = set(valid)
        self.gate = gate
        self.calls: list[str] = []
        self.entered = asyncio.Event()

    async def validate(self, token: str | None) -> bool:
        self.calls.append(token)  # type: ignore[arg-type]
        self.entered.set()
        if self.gate is not None:
            await self.gate.wait()
        return bool(token) and token in self.valid


class FakeGenerator:
    """Generator double returning ``tokens`` in order, or raising ``error``."""

    def __init__(self, tokens: Iterable[str] = (), error: Exception | None = None):
        self.tokens = list(tokens)
        self.error = error
        self.calls = 0

    async def generate(self) -> str:
        self.calls += 1
        await asyncio.sleep(0)
        if self.error is not None:
            raise self.error
        if not self.tokens:
            raise IssuanceFailed("no more tokens", status=500)
        return self.tokens.pop(0)
