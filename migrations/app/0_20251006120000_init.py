# -*- coding: utf-8 -*-
from tortoise import BaseDBAsyncClient


async def upgrade(db: BaseDBAsyncClient) -> str:
    return """
        CREATE TABLE IF NOT EXISTS "aerich" (
    "id" SERIAL NOT NULL PRIMARY KEY,
    "version" VARCHAR(255) NOT NULL,
    "app" VARCHAR(100) NOT NULL,
    "content" JSONB NOT NULL
);
CREATE TABLE IF NOT EXISTS "compliance_report" (
    "id" UUID NOT NULL  PRIMARY KEY,
    "agent_id" UUID NOT NULL,
    "status" VARCHAR(13) NOT NULL  DEFAULT 'COMPLIANT',
    "scanned_data" JSONB NOT NULL,
    "product_search_result" JSONB,
    "non_compliance_reason" VARCHAR(15),
    "additional_notes" TEXT,
    "ocr_blob_text" TEXT,
    "front_image_url" VARCHAR(500) NOT NULL,
    "back_image_url" VARCHAR(500) NOT NULL,
    "latitude" DOUBLE PRECISION,
    "longitude" DOUBLE PRECISION,
    "address" VARCHAR(255),
    "created_at" TIMESTAMPTZ NOT NULL  DEFAULT CURRENT_TIMESTAMP
);
CREATE INDEX IF NOT EXISTS "idx_compliance__agent_i_3c1f0e" ON "compliance_report" ("agent_id");
COMMENT ON COLUMN "compliance_report"."status" IS 'COMPLIANT: COMPLIANT\nNON_COMPLIANT: NON_COMPLIANT\nFRAUDULENT: FRAUDULENT';
COMMENT ON COLUMN "compliance_report"."non_compliance_reason" IS 'NO_LTO_NUMBER: NO_LTO_NUMBER\nNO_CFPR_NUMBER: NO_CFPR_NUMBER\nEXPIRED_PRODUCT: EXPIRED_PRODUCT\nCOUNTERFEIT: COUNTERFEIT\nMISLABELED: MISLABELED\nOTHERS: OTHERS';"""


async def downgrade(db: BaseDBAsyncClient) -> str:
    return """
        DROP TABLE IF EXISTS "compliance_report";"""
