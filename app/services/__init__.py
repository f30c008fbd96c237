# -*- coding: utf-8 -*-
"""
Service layer for business logic.

This module contains service classes that encapsulate business logic,
keeping the routers limited to request and response handling.
"""

from .compliance_report_service import ComplianceReportService
from .geospatial_analytics_service import GeospatialAnalyticsService

__all__ = [
    "ComplianceReportService",
    "GeospatialAnalyticsService",
]
