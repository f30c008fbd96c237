# -*- coding: utf-8 -*-
from tortoise import fields
from tortoise.exceptions import ValidationError
from tortoise.models import Model
from tortoise.signals import pre_save

from app.enums import ComplianceStatusEnum, NonComplianceReasonEnum


class ComplianceReport(Model):
    id = fields.UUIDField(primary_key=True)
    agent_id = fields.UUIDField(db_index=True)
    status = fields.CharEnumField(
        enum_type=ComplianceStatusEnum, default=ComplianceStatusEnum.COMPLIANT
    )
    scanned_data = fields.JSONField()
    product_search_result = fields.JSONField(null=True)
    non_compliance_reason = fields.CharEnumField(
        enum_type=NonComplianceReasonEnum, null=True
    )
    additional_notes = fields.TextField(null=True)
    ocr_blob_text = fields.TextField(null=True)
    front_image_url = fields.CharField(max_length=500)
    back_image_url = fields.CharField(max_length=500)
    latitude = fields.FloatField(null=True)
    longitude = fields.FloatField(null=True)
    address = fields.CharField(max_length=255, null=True)
    created_at = fields.DatetimeField(auto_now_add=True)

    class Meta:
        table = "compliance_report"


@pre_save(ComplianceReport)
async def validate_compliance_report(
    sender, instance: ComplianceReport, using_db, update_fields
):
    """
    This validator checks the following constraints:
    - Latitude and longitude are either both set or both empty
    - Latitude is within [-90, 90] and longitude within [-180, 180]
    - Additional notes have at most 500 characters
    """
    if (instance.latitude is None) != (instance.longitude is None):
        raise ValidationError("Latitude and longitude must be provided together")

    if instance.latitude is not None:
        if not -90 <= instance.latitude <= 90:
            raise ValidationError("Latitude must be between -90 and 90")
        if not -180 <= instance.longitude <= 180:
            raise ValidationError("Longitude must be between -180 and 180")

    if instance.additional_notes and len(instance.additional_notes) > 500:
        raise ValidationError("Additional notes must have at most 500 characters")
