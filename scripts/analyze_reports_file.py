# -*- coding: utf-8 -*-
"""
Runs the compliance clustering over a JSON export of reports, without a database.

Usage:
    python scripts/analyze_reports_file.py reports.json --max-distance 2.5 --min-points 4
    python scripts/analyze_reports_file.py reports.json --summary
"""
import argparse
import sys
from pathlib import Path
from typing import List

import orjson as json
from loguru import logger
from pydantic import TypeAdapter, ValidationError

from app.exceptions import AnalyticsError
from app.pydantic_models import AnalyticsComplianceReport
from app.services.geospatial_analytics_service import GeospatialAnalyticsService

_reports_adapter = TypeAdapter(List[AnalyticsComplianceReport])


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Cluster geolocated compliance reports with DBSCAN",
    )
    parser.add_argument("file", type=Path, help="JSON file with a list of reports")
    parser.add_argument(
        "--max-distance",
        type=float,
        default=5.0,
        help="Neighborhood radius in kilometers (default: 5)",
    )
    parser.add_argument(
        "--min-points",
        type=int,
        default=3,
        help="Minimum reports within the radius to form a cluster (default: 3)",
    )
    parser.add_argument(
        "--summary",
        action="store_true",
        help="Print a one-line summary instead of the full result",
    )
    return parser.parse_args(argv)


def load_reports(file_path: Path) -> List[AnalyticsComplianceReport]:
    return _reports_adapter.validate_json(file_path.read_bytes())


def main(argv=None) -> int:
    args = parse_args(argv)

    try:
        reports = load_reports(args.file)
    except (OSError, ValidationError) as exc:
        logger.error(f"Could not load reports from {args.file}: {exc}")
        return 1
    logger.info(f"Loaded {len(reports)} reports from {args.file}")

    try:
        result = GeospatialAnalyticsService.analyze(
            reports, eps_km=args.max_distance, min_points=args.min_points
        )
    except AnalyticsError as exc:
        logger.error(f"Analysis failed: {exc}")
        return 1

    if args.summary:
        summary = result.summary
        print(
            f"{summary.total_points} points, {summary.n_clusters} clusters, "
            f"{summary.n_noise_points} noise points ({summary.noise_percentage:.1f}%)"
        )
        return 0

    sys.stdout.buffer.write(
        json.dumps(result.model_dump(mode="json"), option=json.OPT_INDENT_2) + b"\n"
    )
    return 0


if __name__ == "__main__":
    logger.remove()
    logger.add(sys.stderr, level="INFO")
    sys.exit(main())
