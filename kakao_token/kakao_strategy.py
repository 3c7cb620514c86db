# SPDX-License-Identifier: MIT
# Copyright (c) 2025 kakao-token contributors

"""Kakao access-token authentication strategy.

This module authenticates requests that already carry a Kakao access token.
The token is read from the request, exchanged for the user's Kakao profile,
and handed to an application-supplied ``verify`` function that decides which
local user (if any) the profile belongs to.

Usage:
    from kakao_token import KakaoTokenStrategy

    async def verify(access_token, refresh_token, profile):
        user = await users.find_by_kakao_id(profile.id)
        return user, {"scope": "full"}

    strategy = KakaoTokenStrategy({}, verify)
    outcome = await strategy.authenticate(request)
"""

import inspect
import json
from typing import Any, Callable, Mapping, Optional, Union

from .config import AUTHORIZATION_URL, PROFILE_URL, TOKEN_URL, KakaoTokenConfig
from .logger import Logger, create_logger
from .models import AuthOutcome, Credentials, Photo, Profile
from .oauth2_client import OAuth2Client
from .strategy import InternalOAuthError, MalformedProfileError, Strategy

_module_logger = create_logger(logger_type="stdout", level="INFO", name="kakao_token.kakao_strategy")

MISSING_TOKEN_MESSAGE = "You should provide access_token"


class KakaoTokenStrategy(Strategy):
    """Authenticates requests carrying a Kakao access token.

    The ``verify`` function receives ``(access_token, refresh_token, profile)``,
    or ``(request, access_token, refresh_token, profile)`` when
    ``pass_request_to_callback`` is set. It may be a plain function or a
    coroutine function and always returns a ``(user, info)`` pair, so a user
    that is itself a tuple is never split. A falsy user rejects the request
    with ``info``; raising, or returning anything but a pair, reports an error.

    Attributes:
        config: Validated construction options
        oauth2: OAuth2 client used for the profile request
    """

    name = "kakao-token"

    AUTHORIZATION_URL = AUTHORIZATION_URL
    TOKEN_URL = TOKEN_URL
    PROFILE_URL = PROFILE_URL

    def __init__(
        self,
        options: Union[KakaoTokenConfig, Mapping[str, Any], None],
        verify: Callable[..., Any],
        *,
        oauth2: Optional[OAuth2Client] = None,
        logger: Optional[Logger] = None,
    ):
        """Initialize the strategy.

        Args:
            options: KakaoTokenConfig, or a mapping of its fields
            verify: Verification function
            oauth2: OAuth2 client; built from ``options`` when omitted
            logger: Logger; defaults to the module logger

        Raises:
            ValueError: If verify is not callable
            pydantic.ValidationError: If options are invalid
        """
        if not callable(verify):
            raise ValueError("KakaoTokenStrategy requires a verify function")

        if isinstance(options, KakaoTokenConfig):
            self.config = options
        else:
            self.config = KakaoTokenConfig(**dict(options or {}))

        self._verify = verify
        self._logger = logger or _module_logger
        self.oauth2 = oauth2 or OAuth2Client(
            client_id=self.config.client_id,
            client_secret=self.config.client_secret,
            authorization_url=self.config.authorization_url,
            token_url=self.config.token_url,
            scope_separator=self.config.scope_separator,
            timeout=self.config.timeout,
        )

    @staticmethod
    def _lookup(request: Any, field: str) -> Optional[str]:
        """Return the first non-empty ``field`` value from body, query, headers."""
        for container_name in ("body", "query", "headers"):
            container = getattr(request, container_name, None)
            if not container:
                continue
            value = container.get(field)
            if value:
                return value
        return None

    def extract_credentials(self, request: Any) -> Optional[Credentials]:
        """Read the access and refresh tokens from a request.

        Args:
            request: Request view with optional body, query and headers

        Returns:
            Credentials, or None when no access token is present
        """
        access_token = self._lookup(request, self.config.access_token_field)
        if not access_token:
            return None
        refresh_token = self._lookup(request, self.config.refresh_token_field)
        return Credentials(access_token=access_token, refresh_token=refresh_token)

    async def authenticate(
        self, request: Any, options: Optional[Mapping[str, Any]] = None
    ) -> AuthOutcome:
        """Authenticate a request carrying a Kakao access token.

        Args:
            request: Request view with optional body, query and headers
            options: Per-call options from the host pipeline (unused)

        Returns:
            Success, Fail or Error; exactly one per call
        """
        credentials = self.extract_credentials(request)
        if credentials is None:
            self._logger.info("No access token in request", strategy=self.name)
            return self.fail({"message": MISSING_TOKEN_MESSAGE})

        try:
            profile = await self.user_profile(credentials.access_token)
        except Exception as e:
            self._logger.error(
                f"Profile lookup failed: {type(e).__name__}: {e}",
                strategy=self.name,
                token_length=len(credentials.access_token),
            )
            return self.error(e)

        if self.config.pass_request_to_callback:
            args: tuple = (request, credentials.access_token, credentials.refresh_token, profile)
        else:
            args = (credentials.access_token, credentials.refresh_token, profile)

        try:
            result = self._verify(*args)
            if inspect.isawaitable(result):
                result = await result
        except Exception as e:
            self._logger.error(
                f"Verify function raised: {type(e).__name__}: {e}",
                strategy=self.name,
                profile_id=profile.id,
            )
            return self.error(e)

        if not (isinstance(result, tuple) and len(result) == 2):
            self._logger.error(
                f"Verify function returned {type(result).__name__}, expected (user, info)",
                strategy=self.name,
                profile_id=profile.id,
            )
            return self.error(TypeError(
                f"verify must return a (user, info) tuple, got {type(result).__name__}"
            ))

        user, info = result
        if not user:
            self._logger.info("Verify function rejected profile", strategy=self.name, profile_id=profile.id)
            return self.fail(info)

        self._logger.info("Request authenticated", strategy=self.name, profile_id=profile.id)
        return self.success(user, info)

    async def user_profile(self, access_token: str) -> Profile:
        """Retrieve the user profile from Kakao.

        Args:
            access_token: Kakao access token

        Returns:
            Normalized profile

        Raises:
            InternalOAuthError: If the profile request fails
            json.JSONDecodeError: If the response body is not JSON
            MalformedProfileError: If the response JSON is not an object or
                has no ``properties`` object
        """
        try:
            body, _ = await self.oauth2.get(self.config.profile_url, access_token)
        except Exception as e:
            raise InternalOAuthError("Failed to fetch user profile", e) from e

        parsed = json.loads(body)
        if not isinstance(parsed, dict):
            raise MalformedProfileError(
                f"Expected a JSON object from the profile endpoint, got {type(parsed).__name__}"
            )

        properties = parsed.get("properties")
        if not isinstance(properties, dict):
            raise MalformedProfileError(
                f"Expected a properties object in the profile, got {type(properties).__name__}"
            )

        return Profile(
            id=parsed.get("id"),
            display_name=properties.get("nickname") or "",
            photos=(Photo(value=properties.get("profile_image")),),
            raw=body,
            json=parsed,
        )
