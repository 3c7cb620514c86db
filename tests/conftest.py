# SPDX-License-Identifier: MIT
# Copyright (c) 2025 kakao-token contributors

"""Shared fixtures for kakao_token tests."""

import pytest

from kakao_token import SilentLogger

from fake_kakao import FakeKakaoAPI


@pytest.fixture
def kakao_api():
    """Fake Kakao API answering with a complete profile."""
    return FakeKakaoAPI()


@pytest.fixture
def silent_logger():
    """Logger that keeps entries in memory."""
    return SilentLogger(name="kakao_token.tests")
