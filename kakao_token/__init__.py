# SPDX-License-Identifier: MIT
# Copyright (c) 2025 kakao-token contributors

"""Kakao access-token authentication.

Validates a Kakao access token obtained elsewhere (for example by a mobile
app) by fetching the user's Kakao profile, normalizes the profile, and hands
it to an application-supplied verify function. Includes a FastAPI middleware
that runs the strategy per request.
"""

__version__ = "0.1.0"

from .config import AUTHORIZATION_URL, PROFILE_URL, TOKEN_URL, KakaoTokenConfig
from .factory import create_kakao_token_strategy
from .kakao_strategy import MISSING_TOKEN_MESSAGE, KakaoTokenStrategy
from .logger import Logger, SilentLogger, StdoutLogger, create_logger
from .middleware import StrategyMiddleware, build_token_request, create_strategy_middleware
from .models import AuthOutcome, Credentials, Error, Fail, Photo, Profile, Success, TokenRequest
from .oauth2_client import OAuth2Client
from .strategy import (
    InternalOAuthError,
    MalformedProfileError,
    OAuth2RequestError,
    ProviderError,
    Strategy,
)

__all__ = [
    # Version
    "__version__",
    # Models
    "TokenRequest",
    "Credentials",
    "Photo",
    "Profile",
    "AuthOutcome",
    "Success",
    "Fail",
    "Error",
    # Strategies
    "Strategy",
    "KakaoTokenStrategy",
    "MISSING_TOKEN_MESSAGE",
    # OAuth2
    "OAuth2Client",
    # Config
    "KakaoTokenConfig",
    "AUTHORIZATION_URL",
    "TOKEN_URL",
    "PROFILE_URL",
    # Factory
    "create_kakao_token_strategy",
    # Middleware
    "StrategyMiddleware",
    "build_token_request",
    "create_strategy_middleware",
    # Logging
    "Logger",
    "StdoutLogger",
    "SilentLogger",
    "create_logger",
    # Exceptions
    "ProviderError",
    "OAuth2RequestError",
    "InternalOAuthError",
    "MalformedProfileError",
]
