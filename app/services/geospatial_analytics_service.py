# -*- coding: utf-8 -*-
"""
Geospatial analytics over compliance reports.

Groups geotagged compliance reports into hotspots with DBSCAN (haversine distance, kilometers)
and derives per-cluster and global compliance statistics. The computation is pure: reports
are only read, nothing is cached or persisted, and identical input always yields identical
cluster ids and ordering.
"""
import math
from numbers import Integral, Real
from typing import Dict, Iterable, List

import numpy as np
import pendulum
from loguru import logger
from sklearn.cluster import DBSCAN

from app.enums import ComplianceStatusEnum
from app.exceptions import EmptyInputError, InvalidParameterError
from app.geography import GeographyService
from app.pydantic_models import (
    AnalysisResult,
    AnalysisSummary,
    AnalyticsComplianceReport,
    ClusterCenter,
    ClusterComplianceStats,
    ClusterInfo,
    ClusteringParams,
    ClusterPoint,
    ComplianceOverview,
)

NOISE = -1


class GeospatialAnalyticsService:
    """DBSCAN clustering of compliance reports."""

    @staticmethod
    def analyze(
        reports: Iterable[AnalyticsComplianceReport],
        eps_km: float = 5.0,
        min_points: int = 3,
    ) -> AnalysisResult:
        """
        Cluster reports by location and summarize compliance per cluster.

        Args:
            reports: The reports to analyze. Reports without a valid latitude and longitude
                are skipped.
            eps_km: Neighborhood radius, in kilometers. Must be positive.
            min_points: Minimum neighborhood size (the point itself included) for a point to
                seed a cluster. Must be at least 1.

        Returns:
            AnalysisResult: Clusters sorted by size (largest first), noise points in input
                order and the global summary.

        Raises:
            InvalidParameterError: If `eps_km` or `min_points` is out of range.
            EmptyInputError: If no report has a valid location.
        """
        GeospatialAnalyticsService._validate_parameters(eps_km, min_points)

        located = GeospatialAnalyticsService.filter_located_reports(reports)
        if not located:
            raise EmptyInputError("No reports with valid location data found")

        latitudes = [report.location.latitude for report in located]
        longitudes = [report.location.longitude for report in located]

        labels = GeospatialAnalyticsService.dbscan(latitudes, longitudes, eps_km, min_points)

        members: Dict[int, List[ClusterPoint]] = {}
        noise_points: List[ClusterPoint] = []
        for index, (report, label) in enumerate(zip(located, labels)):
            point = ClusterPoint(
                index=index,
                coordinates=(longitudes[index], latitudes[index]),
                lng=longitudes[index],
                lat=latitudes[index],
                report=report,
                cluster_id=label,
            )
            if label == NOISE:
                noise_points.append(point)
            else:
                members.setdefault(label, []).append(point)

        # Labels are handed out in discovery order, so dict order is discovery order and
        # the stable sort keeps it for clusters of equal size.
        clusters = [
            GeospatialAnalyticsService._build_cluster_info(cluster_id, points)
            for cluster_id, points in members.items()
        ]
        clusters.sort(key=lambda cluster: cluster.size, reverse=True)

        total_points = len(located)
        logger.debug(
            f"DBSCAN over {total_points} points (eps={eps_km}km, min_points={min_points}): "
            f"{len(clusters)} clusters, {len(noise_points)} noise points"
        )

        return AnalysisResult(
            clustering_params=ClusteringParams(eps_km=eps_km, min_samples=min_points),
            summary=AnalysisSummary(
                total_points=total_points,
                n_clusters=len(clusters),
                n_noise_points=len(noise_points),
                noise_percentage=len(noise_points) / total_points * 100,
                compliance_overview=GeospatialAnalyticsService._compliance_overview(located),
            ),
            clusters=clusters,
            noise_points=noise_points,
            timestamp=pendulum.now("UTC").to_iso8601_string(),
        )

    @staticmethod
    def filter_located_reports(
        reports: Iterable[AnalyticsComplianceReport],
    ) -> List[AnalyticsComplianceReport]:
        """Keeps, in order, the reports whose latitude and longitude are real numbers."""
        return [
            report
            for report in reports
            if report.location is not None
            and GeographyService.is_valid_coordinate(report.location.latitude)
            and GeographyService.is_valid_coordinate(report.location.longitude)
        ]

    @staticmethod
    def dbscan(
        latitudes: List[float],
        longitudes: List[float],
        eps_km: float,
        min_points: int,
    ) -> List[int]:
        """
        Labels each point with a cluster id, or NOISE.

        Neighborhoods are inclusive of `eps_km` and count the point itself. Cluster ids follow
        the input order of each cluster's first core point, and border points keep the first
        cluster that reaches them.
        """
        coordinates = np.radians(np.column_stack([latitudes, longitudes]))
        model = DBSCAN(
            eps=eps_km / GeographyService.EARTH_RADIUS_KM,
            min_samples=min_points,
            metric="haversine",
            algorithm="ball_tree",
        ).fit(coordinates)
        return model.labels_.tolist()

    @staticmethod
    def _build_cluster_info(cluster_id: int, points: List[ClusterPoint]) -> ClusterInfo:
        center_lat, center_lng = GeographyService.mean_center(
            [point.lat for point in points], [point.lng for point in points]
        )
        radius_km = max(
            GeographyService.haversine_distance(center_lat, center_lng, point.lat, point.lng)
            for point in points
        )
        counts = GeospatialAnalyticsService._count_statuses(
            point.report for point in points
        )
        return ClusterInfo(
            cluster_id=cluster_id,
            size=len(points),
            center=ClusterCenter(latitude=center_lat, longitude=center_lng),
            radius_km=radius_km,
            points=points,
            compliance_stats=ClusterComplianceStats(
                compliant=counts[ComplianceStatusEnum.COMPLIANT],
                non_compliant=counts[ComplianceStatusEnum.NON_COMPLIANT],
                fraudulent=counts[ComplianceStatusEnum.FRAUDULENT],
            ),
        )

    @staticmethod
    def _compliance_overview(reports: List[AnalyticsComplianceReport]) -> ComplianceOverview:
        counts = GeospatialAnalyticsService._count_statuses(reports)
        return ComplianceOverview(
            total_compliant=counts[ComplianceStatusEnum.COMPLIANT],
            total_non_compliant=counts[ComplianceStatusEnum.NON_COMPLIANT],
            total_fraudulent=counts[ComplianceStatusEnum.FRAUDULENT],
        )

    @staticmethod
    def _count_statuses(
        reports: Iterable[AnalyticsComplianceReport],
    ) -> Dict[ComplianceStatusEnum, int]:
        """Tallies statuses; values outside ComplianceStatusEnum are not counted."""
        counts = {status: 0 for status in ComplianceStatusEnum}
        for report in reports:
            try:
                status = ComplianceStatusEnum(report.status)
            except ValueError:
                continue
            counts[status] += 1
        return counts

    @staticmethod
    def _validate_parameters(eps_km: float, min_points: int) -> None:
        if isinstance(min_points, bool) or not isinstance(min_points, Integral):
            raise InvalidParameterError("min_points must be an integer")
        if min_points < 1:
            raise InvalidParameterError("min_points must be at least 1")
        if isinstance(eps_km, bool) or not isinstance(eps_km, Real):
            raise InvalidParameterError("eps_km must be a number")
        if not math.isfinite(eps_km) or eps_km <= 0:
            raise InvalidParameterError("eps_km must be a positive, finite number")
