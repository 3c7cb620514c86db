# SPDX-License-Identifier: MIT
# Copyright (c) 2025 kakao-token contributors

"""Abstract authentication strategy interface.

A strategy is a pluggable authentication method that a host pipeline calls
once per incoming request. Each call ends in exactly one terminal signal:
``success`` (a user was authenticated), ``fail`` (an expected rejection such
as a missing or refused credential) or ``error`` (an unexpected fault such as
a network or parse failure).
"""

from abc import ABC, abstractmethod
from typing import Any, Mapping, Optional

from .models import AuthOutcome, Error, Fail, Success


class Strategy(ABC):
    """Abstract base class for authentication strategies.

    Subclasses set ``name`` and implement ``authenticate``, returning the
    value of one of the terminal signal methods.
    """

    name: str = ""

    @abstractmethod
    async def authenticate(
        self, request: Any, options: Optional[Mapping[str, Any]] = None
    ) -> AuthOutcome:
        """Authenticate an incoming request.

        Args:
            request: Request view exposing optional ``body``, ``query`` and
                ``headers`` mappings
            options: Per-call options supplied by the host pipeline

        Returns:
            Exactly one of Success, Fail or Error
        """
        pass

    def success(self, user: Any, info: Any = None) -> Success:
        """Signal that ``user`` was authenticated."""
        return Success(user=user, info=info)

    def fail(self, info: Any = None) -> Fail:
        """Signal an expected authentication rejection."""
        return Fail(info=info)

    def error(self, err: BaseException) -> Error:
        """Signal an unexpected fault while authenticating."""
        return Error(error=err)


class ProviderError(Exception):
    """Raised when the identity provider service is unavailable."""
    pass


class OAuth2RequestError(ProviderError):
    """Raised by the OAuth2 client when a provider request fails.

    Attributes:
        status_code: HTTP status of the provider response, or None when the
            request never got a response (connection, timeout, ...)
        data: Response body returned by the provider, if any
    """

    def __init__(self, message: str, status_code: Optional[int] = None, data: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.data = data


class InternalOAuthError(ProviderError):
    """Wraps a failure that happened while talking to the OAuth2 provider.

    Attributes:
        message: Description of the step that failed
        oauth_error: The underlying client error
    """

    def __init__(self, message: str, oauth_error: Optional[BaseException] = None):
        super().__init__(message)
        self.message = message
        self.oauth_error = oauth_error

    def __str__(self) -> str:
        status_code = getattr(self.oauth_error, "status_code", None)
        if status_code is not None:
            return f"{self.message} (status: {status_code})"
        return self.message


class MalformedProfileError(ValueError):
    """Raised when a profile response parses as JSON but is not an object."""
    pass
