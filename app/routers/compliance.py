# -*- coding: utf-8 -*-
from typing import Annotated, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from fastapi_pagination import Page, Params
from tortoise.exceptions import ValidationError

from app.decorators import router_request
from app.dependencies import get_cache
from app.enums import ComplianceStatusEnum
from app.pydantic_models import (
    ComplianceReportCreatedOut,
    ComplianceReportIn,
    ComplianceReportOut,
)
from app.redis_cache import Cache
from app.services import ComplianceReportService
from app.utils import invalidate_analytics_cache

router = APIRouter(
    prefix="/compliance",
    tags=["Compliance reports"],
    responses={
        429: {"error": "Rate limit exceeded"},
    },
)


@router_request(
    method="POST",
    router=router,
    path="/report",
    response_model=ComplianceReportCreatedOut,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Invalid report"},
    },
)
async def create_report(
    request: Request,
    report_in: ComplianceReportIn,
    cache: Annotated[Cache, Depends(get_cache)],
):
    """
    Submits a compliance report.

    Cached analytics results are discarded so the next analysis sees the new report.
    """
    try:
        report = await ComplianceReportService.create_report(report_in)
    except ValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
    await invalidate_analytics_cache(cache)
    return ComplianceReportCreatedOut(
        message="Compliance report submitted successfully", data=report
    )


@router_request(
    method="GET",
    router=router,
    path="/reports",
    response_model=Page[ComplianceReportOut],
)
async def list_reports(
    request: Request,
    params: Params = Depends(),
    agent_id: Annotated[Optional[UUID], Query(alias="agentId")] = None,
    report_status: Annotated[Optional[ComplianceStatusEnum], Query(alias="status")] = None,
):
    """
    Lists compliance reports, newest first.
    """
    return await ComplianceReportService.list_reports(
        params, agent_id=agent_id, status=report_status
    )


@router_request(
    method="GET",
    router=router,
    path="/reports/{report_id}",
    response_model=ComplianceReportOut,
    responses={
        404: {"description": "Report not found"},
    },
)
async def get_report(request: Request, report_id: UUID):
    return await ComplianceReportService.get_report(report_id)
