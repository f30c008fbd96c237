# -*- coding: utf-8 -*-
import math
from contextlib import AbstractAsyncContextManager
from types import ModuleType
from typing import Dict, Iterable, Optional, Union

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from loguru import logger
from redis.exceptions import RedisError
from tortoise import Tortoise, connections
from tortoise.exceptions import DoesNotExist, IntegrityError

from app.redis_cache import Cache

ANALYTICS_CACHE_PATTERN = "analytics:*"


def register_tortoise(
    app: FastAPI,
    config: Optional[dict] = None,
    config_file: Optional[str] = None,
    db_url: Optional[str] = None,
    modules: Optional[Dict[str, Iterable[Union[str, ModuleType]]]] = None,
    generate_schemas: bool = False,
    add_exception_handlers: bool = False,
) -> AbstractAsyncContextManager:
    """Custom implementation of `register_tortoise` for lifespan support"""

    async def init_orm() -> None:  # pylint: disable=W0612
        await Tortoise.init(
            config=config, config_file=config_file, db_url=db_url, modules=modules
        )
        logger.info(f"Tortoise-ORM started, {Tortoise.apps}")
        if generate_schemas:
            logger.info("Tortoise-ORM generating schema")
            await Tortoise.generate_schemas()

    async def close_orm() -> None:  # pylint: disable=W0612
        await connections.close_all()
        logger.info("Tortoise-ORM shutdown")

    class Manager(AbstractAsyncContextManager):
        async def __aenter__(self) -> "Manager":
            await init_orm()
            return self

        async def __aexit__(self, *args, **kwargs) -> None:
            await close_orm()

    if add_exception_handlers:

        @app.exception_handler(DoesNotExist)
        async def doesnotexist_exception_handler(request: Request, exc: DoesNotExist):
            return JSONResponse(status_code=404, content={"detail": str(exc)})

        @app.exception_handler(IntegrityError)
        async def integrityerror_exception_handler(
            request: Request, exc: IntegrityError
        ):
            return JSONResponse(
                status_code=422,
                content={
                    "detail": [{"loc": [], "msg": str(exc), "type": "IntegrityError"}]
                },
            )

    return Manager()


def parse_numeric_query(raw: Optional[str], default: float) -> float:
    """
    Parses a numeric query parameter.

    Missing, unparseable, NaN and zero values fall back to `default`; any other number,
    negative ones included, is returned as is so the caller can reject it.
    """
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError:
        return default
    if math.isnan(value) or value == 0:
        return default
    return value


def validate_analysis_parameters(max_distance: float, min_points: float) -> Optional[str]:
    """Returns an error message for out-of-range clustering parameters, or None."""
    if not math.isfinite(max_distance) or max_distance <= 0 or min_points < 1:
        return "maxDistance must be positive and minPoints must be at least 1"
    if not math.isfinite(min_points) or not float(min_points).is_integer():
        return "minPoints must be an integer"
    return None


def build_analytics_cache_key(
    max_distance: float, min_points: int, agent_id: Optional[str] = None
) -> str:
    return f"analytics:{agent_id or 'all'}:{float(max_distance)!r}:{min_points}"


async def invalidate_analytics_cache(cache: Cache) -> None:
    """Drops cached analysis results. Redis failures are logged, not raised."""
    try:
        await cache.invalidate(ANALYTICS_CACHE_PATTERN)
    except RedisError as exc:
        logger.warning(f"Failed to invalidate analytics cache: {exc}")
