# SPDX-License-Identifier: MIT
# Copyright (c) 2025 kakao-token contributors

"""Request, profile and outcome models for Kakao token authentication.

This module defines the request view a strategy reads credentials from, the
normalized profile built from the Kakao user API, and the three outcome
variants a strategy can produce.
"""

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Union


@dataclass(frozen=True)
class TokenRequest:
    """Read-only view of an incoming request.

    Attributes:
        body: Parsed request body fields, if the request had a body
        query: Query string parameters
        headers: Request headers
    """
    body: Optional[Mapping[str, Any]] = None
    query: Optional[Mapping[str, Any]] = None
    headers: Optional[Mapping[str, Any]] = None


@dataclass(frozen=True)
class Credentials:
    """Tokens extracted from a single request."""
    access_token: str
    refresh_token: Optional[str] = None


@dataclass(frozen=True)
class Photo:
    """A profile image reference."""
    value: Optional[str]


@dataclass(frozen=True)
class Profile:
    """Normalized Kakao user profile.

    Attributes:
        id: Kakao user ID, as returned by the provider
        display_name: Kakao nickname, empty string when the provider omits it
        photos: Profile images (the Kakao profile image)
        raw: Original response body
        json: Parsed response body
        provider: Always "kakao"
    """
    id: Any
    display_name: str
    photos: tuple[Photo, ...] = ()
    raw: str = ""
    json: Any = None
    provider: str = "kakao"

    def to_dict(self) -> dict:
        """Convert the profile to the conventional passport-style shape.

        Returns:
            Dictionary with provider, id, displayName, photos, _raw and _json
        """
        return {
            "provider": self.provider,
            "id": self.id,
            "displayName": self.display_name,
            "photos": [{"value": photo.value} for photo in self.photos],
            "_raw": self.raw,
            "_json": self.json,
        }


@dataclass(frozen=True)
class Success:
    """The request was authenticated as ``user``."""
    user: Any
    info: Any = None


@dataclass(frozen=True)
class Fail:
    """The request was rejected; ``info`` describes why."""
    info: Any = None


@dataclass(frozen=True)
class Error:
    """An unexpected fault stopped authentication."""
    error: BaseException


AuthOutcome = Union[Success, Fail, Error]
