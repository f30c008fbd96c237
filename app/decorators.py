# -*- coding: utf-8 -*-
import time
from functools import wraps
from typing import Any, Dict, Optional, Union

from fastapi import APIRouter, HTTPException, Request, status
from loguru import logger
from starlette.responses import Response

from app import config
from app.rate_limiter import limiter


def router_request(
    *,
    method: str,
    router: APIRouter,
    path: str,
    response_model: Any,
    responses: Optional[Dict[Union[int, str], Dict[str, Any]]] = None,
    status_code: int = status.HTTP_200_OK,
):
    """
    Registers a rate-limited route on `router` and logs every call.

    The decorated endpoint must accept a `request: Request` argument.
    """

    def decorator(f):
        @router.api_route(
            path,
            methods=[method],
            response_model=response_model,
            responses=responses,
            status_code=status_code,
        )
        @limiter.limit(config.RATE_LIMIT_DEFAULT)
        @wraps(f)
        async def wrapper(*args, **kwargs):
            request: Request = None
            if "request" not in kwargs:
                raise HTTPException(
                    status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                    detail="The request dependency is missing. This is a bug. Please report it.",
                )
            request = kwargs["request"]
            full_path = router.prefix + path
            # Format the path with its parameters
            for key, value in kwargs.items():
                full_path = full_path.replace(f"{{{key}}}", str(value))
            start = time.perf_counter()
            try:
                response = await f(*args, **kwargs)
            except HTTPException as exc:
                logger.info(
                    f"{request.method} {full_path} -> {exc.status_code} "
                    f"({(time.perf_counter() - start) * 1000:.1f}ms)"
                )
                raise exc
            response_status = (
                response.status_code if isinstance(response, Response) else status_code
            )
            logger.info(
                f"{request.method} {full_path} -> {response_status} "
                f"({(time.perf_counter() - start) * 1000:.1f}ms)"
            )
            return response

        return wrapper

    return decorator
