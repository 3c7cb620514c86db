# SPDX-License-Identifier: MIT
# Copyright (c) 2025 kakao-token contributors

"""Configuration for the Kakao token strategy.

Holds every construction option of ``KakaoTokenStrategy`` with the fixed
Kakao endpoints as defaults. Options can be given explicitly or loaded from
``KAKAO_*`` environment variables.
"""

import os
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

AUTHORIZATION_URL = "https://kauth.kakao.com/oauth/authorize"
TOKEN_URL = "https://kauth.kakao.com/oauth/token"
PROFILE_URL = "https://kapi.kakao.com/v1/user/me"

_TRUE_VALUES = {"1", "true", "yes", "on"}


class KakaoTokenConfig(BaseModel):
    """Construction options for ``KakaoTokenStrategy``.

    Attributes:
        client_id: Kakao app key; not needed to validate an existing token
        client_secret: Kakao does not issue one, so this normally stays None
        authorization_url: Authorization endpoint (unused when only passing tokens through)
        token_url: Token endpoint (unused when only passing tokens through)
        profile_url: User profile endpoint
        scope_separator: Separator used when joining scopes
        access_token_field: Request field holding the access token
        refresh_token_field: Request field holding the refresh token
        pass_request_to_callback: Pass the request as first argument to verify
        timeout: Profile request timeout in seconds
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    client_id: Optional[str] = None
    client_secret: Optional[str] = None
    authorization_url: str = Field(default=AUTHORIZATION_URL, min_length=1)
    token_url: str = Field(default=TOKEN_URL, min_length=1)
    profile_url: str = Field(default=PROFILE_URL, min_length=1)
    scope_separator: str = Field(default=",", min_length=1)
    access_token_field: str = Field(default="access_token", min_length=1)
    refresh_token_field: str = Field(default="refresh_token", min_length=1)
    pass_request_to_callback: bool = False
    timeout: float = Field(default=10.0, gt=0)

    @classmethod
    def from_env(cls, prefix: str = "KAKAO_") -> "KakaoTokenConfig":
        """Load configuration from environment variables.

        Only variables that are set override the defaults, e.g.
        ``KAKAO_PROFILE_URL`` or ``KAKAO_PASS_REQUEST_TO_CALLBACK=true``.

        Args:
            prefix: Environment variable prefix

        Returns:
            Validated configuration
        """
        values: dict[str, object] = {}
        for name in cls.model_fields:
            raw = os.getenv(f"{prefix}{name.upper()}")
            if raw is None:
                continue
            if name == "pass_request_to_callback":
                values[name] = raw.strip().lower() in _TRUE_VALUES
            else:
                values[name] = raw
        return cls(**values)
