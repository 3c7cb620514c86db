# SPDX-License-Identifier: MIT
# Copyright (c) 2025 kakao-token contributors

"""Minimal OAuth2 client used by token strategies.

Only the authenticated GET is implemented: strategies that validate an
existing access token never exchange codes or refresh tokens. The client
secret is optional because some providers (Kakao among them) do not issue
one.
"""

from typing import Optional

import httpx

from .config import AUTHORIZATION_URL, TOKEN_URL
from .logger import create_logger
from .strategy import OAuth2RequestError

logger = create_logger(logger_type="stdout", level="INFO", name="kakao_token.oauth2_client")


class OAuth2Client:
    """OAuth2 client performing bearer-authenticated requests.

    Attributes:
        client_id: OAuth client ID, if any
        client_secret: OAuth client secret, if any
        authorization_url: Authorization endpoint
        token_url: Token endpoint
        scope_separator: Separator used when joining scopes
        timeout: Request timeout in seconds
    """

    def __init__(
        self,
        client_id: Optional[str] = None,
        client_secret: Optional[str] = None,
        authorization_url: str = AUTHORIZATION_URL,
        token_url: str = TOKEN_URL,
        scope_separator: str = ",",
        timeout: float = 10.0,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        """Initialize the OAuth2 client.

        Args:
            client_id: OAuth client ID
            client_secret: OAuth client secret (optional)
            authorization_url: Authorization endpoint
            token_url: Token endpoint
            scope_separator: Separator used when joining scopes
            timeout: Request timeout in seconds
            http_client: Shared AsyncClient; when omitted a client is opened
                per request. A shared client is never closed here.
        """
        self.client_id = client_id
        self.client_secret = client_secret
        self.authorization_url = authorization_url
        self.token_url = token_url
        self.scope_separator = scope_separator
        self.timeout = timeout
        self._http_client = http_client

    async def get(self, url: str, access_token: str) -> tuple[str, httpx.Response]:
        """Issue a GET authenticated with ``access_token`` as bearer credential.

        Args:
            url: Resource URL
            access_token: OAuth access token

        Returns:
            Tuple of (response body text, response)

        Raises:
            OAuth2RequestError: If the request fails or the provider answers
                with a non-2xx status
        """
        headers = {"Authorization": f"Bearer {access_token}"}

        try:
            if self._http_client is not None:
                response = await self._http_client.get(url, headers=headers, timeout=self.timeout)
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.get(url, headers=headers)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.warning(
                "Provider request rejected",
                url=url,
                status_code=e.response.status_code,
            )
            raise OAuth2RequestError(
                f"Provider returned HTTP {e.response.status_code}",
                status_code=e.response.status_code,
                data=e.response.text,
            ) from e
        except httpx.HTTPError as e:
            logger.error(f"Provider request failed: {type(e).__name__}: {e}", url=url)
            raise OAuth2RequestError(f"Provider request failed: {e}") from e

        return response.text, response
