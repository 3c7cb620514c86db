# SPDX-License-Identifier: MIT
# Copyright (c) 2025 kakao-token contributors

"""Fake Kakao user API for tests.

Replaces the profile endpoint with an ``httpx.MockTransport`` so tests can
count outbound requests and control the provider's answer.
"""

import json
from typing import Callable

import httpx

from kakao_token import OAuth2Client

PROFILE_JSON = {
    "id": 123,
    "properties": {
        "nickname": "Alice",
        "profile_image": "http://x/img.png",
    },
}


class FakeKakaoAPI:
    """Records requests and answers them with a configurable handler."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response] | None = None):
        self.requests: list[httpx.Request] = []
        self.handler = handler or self.respond_json(PROFILE_JSON)

    @staticmethod
    def respond_json(payload, status_code: int = 200):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(status_code, text=json.dumps(payload))
        return handler

    @staticmethod
    def respond_text(text: str, status_code: int = 200):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(status_code, text=text)
        return handler

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)

    def client(self) -> OAuth2Client:
        """Build an OAuth2Client whose requests reach this fake API."""
        return OAuth2Client(http_client=httpx.AsyncClient(transport=httpx.MockTransport(self)))
