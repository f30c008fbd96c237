import os
from datetime import datetime, timedelta, timezone
from itertools import count
from uuid import UUID, uuid4

import pytest

# Set environment variables for testing before any imports
os.environ.update({
    "ENVIRONMENT": "test",
    "LOG_LEVEL": "DEBUG",
    "RATE_LIMIT_DEFAULT": "10000/second",
})

DEFAULT_AGENT_ID = UUID("7f5d7c1e-2b7a-4a51-9a55-0d3b1f7c2a10")


@pytest.fixture
def make_report():
    """Builds analytics reports with increasing creation times."""
    from app.enums import ComplianceStatusEnum
    from app.pydantic_models import AnalyticsComplianceReport, Location

    sequence = count()
    base_time = datetime(2025, 1, 1, 8, 0, tzinfo=timezone.utc)

    def _make_report(
        latitude=None,
        longitude=None,
        status=ComplianceStatusEnum.COMPLIANT,
        agent_id=DEFAULT_AGENT_ID,
        with_location=True,
    ):
        location = None
        if with_location:
            location = Location(latitude=latitude, longitude=longitude)
        return AnalyticsComplianceReport(
            id=uuid4(),
            agent_id=agent_id,
            status=status,
            scanned_data={"productName": "Paracetamol 500mg"},
            location=location,
            created_at=base_time + timedelta(minutes=next(sequence)),
        )

    return _make_report
