# -*- coding: utf-8 -*-
"""
Compliance report service.

Stores the reports submitted by field agents and serves them back, either page by page or
as the geolocated batch consumed by the geospatial analytics engine.
"""
from typing import List, Optional
from uuid import UUID

from fastapi import HTTPException
from fastapi_pagination import Page, Params
from fastapi_pagination.api import create_page
from loguru import logger

from app.enums import ComplianceStatusEnum
from app.models import ComplianceReport
from app.pydantic_models import (
    AnalyticsComplianceReport,
    ComplianceReportIn,
    ComplianceReportOut,
)


class ComplianceReportService:
    """Service for managing compliance reports."""

    @staticmethod
    async def create_report(report_in: ComplianceReportIn) -> ComplianceReportOut:
        """
        Persist a new compliance report.

        Raises:
            tortoise.exceptions.ValidationError: If the model validation fails.
        """
        data = report_in.model_dump(exclude={"location"})
        data["front_image_url"] = str(report_in.front_image_url)
        data["back_image_url"] = str(report_in.back_image_url)
        if report_in.location is not None:
            data["latitude"] = report_in.location.latitude
            data["longitude"] = report_in.location.longitude
            data["address"] = report_in.location.address

        report = await ComplianceReport.create(**data)
        logger.info(
            f"Agent {report.agent_id} submitted compliance report {report.id}: {report.status.value}"
        )
        return ComplianceReportOut.from_model(report)

    @staticmethod
    async def get_report(report_id: UUID) -> ComplianceReportOut:
        report = await ComplianceReport.get_or_none(id=report_id)
        if report is None:
            raise HTTPException(status_code=404, detail="Report not found")
        return ComplianceReportOut.from_model(report)

    @staticmethod
    async def list_reports(
        params: Params,
        agent_id: Optional[UUID] = None,
        status: Optional[ComplianceStatusEnum] = None,
    ) -> Page[ComplianceReportOut]:
        """
        List reports, newest first.

        Args:
            params: Pagination parameters
            agent_id: Only reports submitted by this agent
            status: Only reports with this status

        Returns:
            A page of reports
        """
        queryset = ComplianceReport.all()
        if agent_id is not None:
            queryset = queryset.filter(agent_id=agent_id)
        if status is not None:
            queryset = queryset.filter(status=status)

        offset = params.size * (params.page - 1)
        reports = (
            await queryset.order_by("-created_at", "id").limit(params.size).offset(offset)
        )
        return create_page(
            [ComplianceReportOut.from_model(report) for report in reports],
            params=params,
            total=await queryset.count(),
        )

    @staticmethod
    async def get_located_reports(
        agent_id: Optional[UUID] = None,
    ) -> List[AnalyticsComplianceReport]:
        """
        Fetch every report with stored coordinates, oldest first.

        Args:
            agent_id: Only reports submitted by this agent

        Returns:
            The reports, in a stable order
        """
        queryset = ComplianceReport.filter(latitude__isnull=False, longitude__isnull=False)
        if agent_id is not None:
            queryset = queryset.filter(agent_id=agent_id)
        reports = await queryset.order_by("created_at", "id")
        logger.debug(f"Loaded {len(reports)} located compliance reports (agent={agent_id})")
        return [AnalyticsComplianceReport.from_model(report) for report in reports]
