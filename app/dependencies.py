# -*- coding: utf-8 -*-
from fastapi import HTTPException, Request, status

from app.redis_cache import Cache


async def get_cache(request: Request) -> Cache:
    cache: Cache = getattr(request.app.state, "cache", None)
    if cache is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Cache is not initialized.",
        )
    return cache
