# -*- coding: utf-8 -*-
from typing import Annotated, Any, Optional, Union
from uuid import UUID

import pendulum
from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.concurrency import run_in_threadpool
from loguru import logger
from redis.exceptions import RedisError
from starlette.responses import JSONResponse

from app import config
from app.decorators import router_request
from app.dependencies import get_cache
from app.pydantic_models import (
    AnalysisParameters,
    AnalyticsErrorOut,
    AnalyticsHealthCheck,
    AnalyzeNoDataOut,
    AnalyzeOut,
    NoDataPayload,
)
from app.redis_cache import Cache
from app.services import ComplianceReportService, GeospatialAnalyticsService
from app.utils import (
    build_analytics_cache_key,
    parse_numeric_query,
    validate_analysis_parameters,
)

router = APIRouter(
    prefix="/analytics",
    tags=["Analytics"],
    responses={
        429: {"error": "Rate limit exceeded"},
    },
)


@router_request(
    method="GET",
    router=router,
    path="/health",
    response_model=AnalyticsHealthCheck,
)
async def health_check(request: Request):
    """
    Identifies the analytics service.
    """
    return AnalyticsHealthCheck(
        status="healthy",
        service=config.ANALYTICS_SERVICE_NAME,
        timestamp=pendulum.now("UTC").to_iso8601_string(),
        version=config.ANALYTICS_SERVICE_VERSION,
    )


@router_request(
    method="GET",
    router=router,
    path="/analyze",
    response_model=Union[AnalyzeOut, AnalyzeNoDataOut],
    responses={
        400: {"model": AnalyticsErrorOut},
        500: {"model": AnalyticsErrorOut},
    },
)
async def analyze_compliance(
    request: Request,
    cache: Annotated[Cache, Depends(get_cache)],
    max_distance: Annotated[Optional[str], Query(alias="maxDistance")] = None,
    min_points: Annotated[Optional[str], Query(alias="minPoints")] = None,
    agent_id: Annotated[Optional[str], Query(alias="agentId")] = None,
):
    """
    Clusters geolocated compliance reports with DBSCAN.

    - **maxDistance**: neighborhood radius in kilometers (default 1000)
    - **minPoints**: minimum reports within `maxDistance` to form a cluster (default 3)
    - **agentId**: only analyze reports from this agent
    """
    max_distance_km = parse_numeric_query(
        max_distance, config.ANALYTICS_DEFAULT_MAX_DISTANCE_KM
    )
    min_points_value = parse_numeric_query(min_points, config.ANALYTICS_DEFAULT_MIN_POINTS)

    error_message = validate_analysis_parameters(max_distance_km, min_points_value)
    agent_uuid: Optional[UUID] = None
    if error_message is None and agent_id:
        try:
            agent_uuid = UUID(agent_id)
        except ValueError:
            error_message = "agentId must be a valid UUID"
    if error_message is not None:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=AnalyticsErrorOut(
                error="Invalid parameters", message=error_message
            ).model_dump(),
        )

    min_points_int = int(min_points_value)
    parameters = AnalysisParameters(
        maxDistance=max_distance_km,
        minPoints=min_points_int,
        agentId=str(agent_uuid) if agent_uuid else "all",
    )
    cache_key = build_analytics_cache_key(
        max_distance_km, min_points_int, str(agent_uuid) if agent_uuid else None
    )

    try:
        cached = await _read_cached(cache, cache_key)
        if cached is not None:
            logger.debug(f"Serving compliance analysis from cache ({cache_key})")
            return AnalyzeOut.model_validate(cached)

        reports = await ComplianceReportService.get_located_reports(agent_id=agent_uuid)
        if not reports:
            return AnalyzeNoDataOut(
                message="No compliance reports with location data found",
                data=NoDataPayload(totalReports=0),
            )

        result = await run_in_threadpool(
            GeospatialAnalyticsService.analyze, reports, max_distance_km, min_points_int
        )
        response = AnalyzeOut(
            message="Compliance analysis completed successfully",
            data=result,
            parameters=parameters,
        )
        await _store_cached(cache, cache_key, response.model_dump(mode="json"))
        return response
    except Exception as exc:
        logger.error(f"Analytics analysis error: {exc!r}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=AnalyticsErrorOut(
                error="Failed to perform compliance analysis",
                message=str(exc) or "Unknown error",
            ).model_dump(),
        )


async def _read_cached(cache: Cache, key: str) -> Optional[Any]:
    try:
        return await cache.get(key)
    except RedisError as exc:
        logger.warning(f"Analytics cache read failed, computing fresh results: {exc}")
        return None


async def _store_cached(cache: Cache, key: str, value: Any) -> None:
    try:
        await cache.set(key, value, ttl=config.CACHE_ANALYTICS_TTL)
    except RedisError as exc:
        logger.warning(f"Analytics cache write failed: {exc}")
