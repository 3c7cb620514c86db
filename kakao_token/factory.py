# SPDX-License-Identifier: MIT
# Copyright (c) 2025 kakao-token contributors

"""Factory for creating Kakao token strategies from configuration.

Explicit keyword arguments win over a supplied config, and when no config is
supplied the ``KAKAO_*`` environment variables are used.
"""

from typing import Any, Callable, Optional

from .config import KakaoTokenConfig
from .kakao_strategy import KakaoTokenStrategy
from .logger import Logger
from .oauth2_client import OAuth2Client


def create_kakao_token_strategy(
    verify: Optional[Callable[..., Any]] = None,
    config: Optional[KakaoTokenConfig] = None,
    oauth2: Optional[OAuth2Client] = None,
    logger: Optional[Logger] = None,
    **kwargs: Any,
) -> KakaoTokenStrategy:
    """Create a KakaoTokenStrategy.

    Args:
        verify: Verification function (required)
        config: Base configuration; loaded from the environment when omitted
        oauth2: Optional OAuth2 client to use for the profile request
        logger: Optional logger
        **kwargs: KakaoTokenConfig fields overriding ``config``, e.g.
            ``profile_url`` or ``pass_request_to_callback``

    Returns:
        KakaoTokenStrategy instance

    Raises:
        ValueError: If verify is missing or not callable, or an option is
            not a KakaoTokenConfig field

    Examples:
        >>> strategy = create_kakao_token_strategy(
        ...     verify,
        ...     access_token_field="kakao_token",
        ...     pass_request_to_callback=True,
        ... )
    """
    if verify is None:
        raise ValueError(
            "verify parameter is required. "
            "Provide a function accepting (access_token, refresh_token, profile)"
        )

    if not callable(verify):
        raise ValueError(f"verify must be callable, got {type(verify).__name__}")

    unknown = sorted(set(kwargs) - set(KakaoTokenConfig.model_fields))
    if unknown:
        raise ValueError(
            f"Unknown Kakao token option(s): {', '.join(unknown)}. "
            f"Supported options: {', '.join(KakaoTokenConfig.model_fields)}"
        )

    base = config or KakaoTokenConfig.from_env()
    if kwargs:
        base = KakaoTokenConfig(**{**base.model_dump(), **kwargs})

    return KakaoTokenStrategy(base, verify, oauth2=oauth2, logger=logger)
