# -*- coding: utf-8 -*-
from enum import Enum


class ComplianceStatusEnum(str, Enum):
    COMPLIANT = "COMPLIANT"
    NON_COMPLIANT = "NON_COMPLIANT"
    FRAUDULENT = "FRAUDULENT"


class NonComplianceReasonEnum(str, Enum):
    NO_LTO_NUMBER = "NO_LTO_NUMBER"
    NO_CFPR_NUMBER = "NO_CFPR_NUMBER"
    EXPIRED_PRODUCT = "EXPIRED_PRODUCT"
    COUNTERFEIT = "COUNTERFEIT"
    MISLABELED = "MISLABELED"
    OTHERS = "OTHERS"
