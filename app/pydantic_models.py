# -*- coding: utf-8 -*-
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple
from uuid import UUID

from pydantic import BaseModel, Field, HttpUrl, field_validator

from app.enums import ComplianceStatusEnum, NonComplianceReasonEnum
from app.models import ComplianceReport


class HealthCheck(BaseModel):
    status: str


class AnalyticsHealthCheck(BaseModel):
    status: str
    service: str
    timestamp: str
    version: str


class Location(BaseModel):
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    address: Optional[str] = None


class LocationIn(BaseModel):
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)
    address: Optional[str] = Field(default=None, max_length=255)


class ComplianceReportIn(BaseModel):
    agent_id: UUID
    status: ComplianceStatusEnum
    scanned_data: Dict[str, Any]
    product_search_result: Optional[Dict[str, Any]] = None
    non_compliance_reason: Optional[NonComplianceReasonEnum] = None
    additional_notes: Optional[str] = Field(default=None, max_length=500)
    front_image_url: HttpUrl
    back_image_url: HttpUrl
    ocr_blob_text: Optional[str] = None
    location: Optional[LocationIn] = None

    @field_validator("front_image_url", "back_image_url")
    @classmethod
    def validate_url_length(cls, value: HttpUrl):
        if len(str(value)) > 500:
            raise ValueError("Image URLs must have at most 500 characters")
        return value


class ComplianceReportOut(BaseModel):
    id: UUID
    agent_id: UUID
    status: ComplianceStatusEnum
    scanned_data: Dict[str, Any]
    product_search_result: Optional[Dict[str, Any]] = None
    non_compliance_reason: Optional[NonComplianceReasonEnum] = None
    additional_notes: Optional[str] = None
    front_image_url: str
    back_image_url: str
    ocr_blob_text: Optional[str] = None
    location: Optional[Location] = None
    created_at: datetime

    @classmethod
    def from_model(cls, report: ComplianceReport) -> "ComplianceReportOut":
        location = None
        if report.latitude is not None or report.address is not None:
            location = Location(
                latitude=report.latitude,
                longitude=report.longitude,
                address=report.address,
            )
        return cls(
            id=report.id,
            agent_id=report.agent_id,
            status=report.status,
            scanned_data=report.scanned_data,
            product_search_result=report.product_search_result,
            non_compliance_reason=report.non_compliance_reason,
            additional_notes=report.additional_notes,
            front_image_url=report.front_image_url,
            back_image_url=report.back_image_url,
            ocr_blob_text=report.ocr_blob_text,
            location=location,
            created_at=report.created_at,
        )


class ComplianceReportCreatedOut(BaseModel):
    success: bool = True
    message: str
    data: ComplianceReportOut


class AnalyticsComplianceReport(BaseModel):
    """A compliance report as consumed by the clustering engine."""

    id: UUID
    agent_id: UUID
    status: ComplianceStatusEnum
    non_compliance_reason: Optional[str] = None
    scanned_data: Dict[str, Any] = Field(default_factory=dict)
    location: Optional[Location] = None
    created_at: datetime

    @classmethod
    def from_model(cls, report: ComplianceReport) -> "AnalyticsComplianceReport":
        return cls(
            id=report.id,
            agent_id=report.agent_id,
            status=report.status,
            non_compliance_reason=(
                report.non_compliance_reason.value if report.non_compliance_reason else None
            ),
            scanned_data=report.scanned_data or {},
            location=Location(
                latitude=report.latitude,
                longitude=report.longitude,
                address=report.address,
            ),
            created_at=report.created_at,
        )


class ClusterPoint(BaseModel):
    index: int
    coordinates: Tuple[float, float]  # (longitude, latitude)
    lng: float
    lat: float
    report: AnalyticsComplianceReport
    cluster_id: int


class ClusterCenter(BaseModel):
    latitude: float
    longitude: float


class ClusterComplianceStats(BaseModel):
    compliant: int = 0
    non_compliant: int = 0
    fraudulent: int = 0


class ClusterInfo(BaseModel):
    cluster_id: int
    size: int
    center: ClusterCenter
    radius_km: float
    points: List[ClusterPoint]
    compliance_stats: ClusterComplianceStats


class ClusteringParams(BaseModel):
    eps_km: float
    min_samples: int


class ComplianceOverview(BaseModel):
    total_compliant: int = 0
    total_non_compliant: int = 0
    total_fraudulent: int = 0


class AnalysisSummary(BaseModel):
    total_points: int
    n_clusters: int
    n_noise_points: int
    noise_percentage: float
    compliance_overview: ComplianceOverview


class AnalysisResult(BaseModel):
    clustering_params: ClusteringParams
    summary: AnalysisSummary
    clusters: List[ClusterInfo]
    noise_points: List[ClusterPoint]
    timestamp: str


class AnalysisParameters(BaseModel):
    maxDistance: float
    minPoints: int
    agentId: str


class AnalyzeOut(BaseModel):
    success: bool = True
    message: str
    data: AnalysisResult
    parameters: AnalysisParameters


class NoDataStatistics(BaseModel):
    totalClusters: int = 0
    totalCompliantReports: int = 0
    totalNonCompliantReports: int = 0
    averageReportsPerCluster: float = 0


class NoDataPayload(BaseModel):
    totalReports: int
    clusters: List[ClusterInfo] = Field(default_factory=list)
    statistics: NoDataStatistics = Field(default_factory=NoDataStatistics)


class AnalyzeNoDataOut(BaseModel):
    success: bool = True
    message: str
    data: NoDataPayload


class AnalyticsErrorOut(BaseModel):
    success: bool = False
    error: str
    message: str
