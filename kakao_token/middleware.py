# SPDX-License-Identifier: MIT
# Copyright (c) 2025 kakao-token contributors

"""FastAPI middleware running an authentication strategy per request.

The middleware is the host pipeline for a ``Strategy``: it builds the request
view the strategy reads credentials from, awaits ``authenticate`` and turns
the single outcome into an HTTP response.

Usage:
    from fastapi import FastAPI
    from kakao_token import create_kakao_token_strategy, create_strategy_middleware

    app = FastAPI()
    strategy = create_kakao_token_strategy(verify)
    app.add_middleware(create_strategy_middleware(strategy))

    @app.get("/me")
    async def me(request: Request):
        return request.state.user
"""

import json
from typing import Any, Callable, List, Optional

from fastapi import Request, Response, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from .logger import create_logger
from .models import Error, Fail, Success, TokenRequest
from .strategy import ProviderError, Strategy

logger = create_logger(logger_type="stdout", level="INFO", name="kakao_token.middleware")

_FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


async def build_token_request(request: Request) -> TokenRequest:
    """Build the strategy's request view from a Starlette request.

    JSON object bodies and form bodies become ``body``; other bodies are
    ignored.

    Args:
        request: Incoming request

    Returns:
        TokenRequest with body, query and headers
    """
    body: Optional[dict] = None
    content_type = request.headers.get("content-type", "").split(";")[0].strip().lower()

    if content_type == "application/json":
        try:
            parsed = await request.json()
        except (json.JSONDecodeError, UnicodeDecodeError):
            logger.debug("Ignoring unparseable JSON body", path=request.url.path)
            parsed = None
        if isinstance(parsed, dict):
            body = parsed
    elif content_type in _FORM_CONTENT_TYPES:
        # Reading body() first caches it so the downstream route can parse it again
        await request.body()
        form = await request.form()
        body = {key: value for key, value in form.items() if isinstance(value, str)}

    return TokenRequest(
        body=body,
        query=dict(request.query_params),
        headers=request.headers,
    )


class StrategyMiddleware(BaseHTTPMiddleware):
    """Middleware authenticating requests with a strategy.

    Attributes:
        strategy: Strategy run for every non-public request
        public_paths: Paths that don't require authentication
    """

    def __init__(
        self,
        app,
        strategy: Strategy,
        public_paths: Optional[List[str]] = None,
    ):
        """Initialize the middleware.

        Args:
            app: ASGI application
            strategy: Authentication strategy
            public_paths: Paths that don't require auth
        """
        super().__init__(app)
        self.strategy = strategy
        self.public_paths = public_paths or ["/health", "/readyz", "/docs", "/openapi.json"]

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Authenticate the request and call the next handler on success."""
        if request.url.path in self.public_paths:
            logger.debug("Public path, skipping authentication", path=request.url.path)
            return await call_next(request)

        token_request = await build_token_request(request)
        outcome = await self.strategy.authenticate(token_request)

        if isinstance(outcome, Success):
            request.state.user = outcome.user
            request.state.auth_info = outcome.info
            logger.debug(
                "Request authenticated",
                path=request.url.path,
                method=request.method,
                strategy=self.strategy.name,
            )
            return await call_next(request)

        if isinstance(outcome, Fail):
            logger.warning(
                "Authentication failed",
                path=request.url.path,
                method=request.method,
                strategy=self.strategy.name,
            )
            return JSONResponse(
                status_code=status.HTTP_401_UNAUTHORIZED,
                content={"detail": _jsonable(outcome.info)},
                headers={"WWW-Authenticate": "Bearer"},
            )

        error = outcome.error if isinstance(outcome, Error) else None
        if isinstance(error, ProviderError):
            logger.error(
                f"Identity provider error: {type(error).__name__}: {error}",
                path=request.url.path,
                strategy=self.strategy.name,
            )
            return JSONResponse(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                content={"detail": "Identity provider unavailable"},
            )

        logger.error(
            f"Unexpected error during authentication: {type(error).__name__}: {error}",
            path=request.url.path,
            strategy=self.strategy.name,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Authentication error"},
        )


def _jsonable(info: Any) -> Any:
    """Return ``info`` if it serializes to JSON, else its string form."""
    try:
        json.dumps(info)
    except (TypeError, ValueError):
        return str(info)
    return info


def create_strategy_middleware(
    strategy: Strategy,
    public_paths: Optional[List[str]] = None,
) -> type[StrategyMiddleware]:
    """Factory function to create strategy middleware with configuration.

    Args:
        strategy: Authentication strategy
        public_paths: List of paths that don't require auth

    Returns:
        Configured StrategyMiddleware class

    Example:
        >>> app.add_middleware(create_strategy_middleware(strategy, public_paths=["/health"]))
    """

    class ConfiguredStrategyMiddleware(StrategyMiddleware):
        def __init__(self, app):
            super().__init__(app=app, strategy=strategy, public_paths=public_paths)

    return ConfiguredStrategyMiddleware
