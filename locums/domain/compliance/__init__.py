"""Compliance domain - document requirements and completion tracking"""

from .catalog import RequirementCatalog, build_catalog, get_catalog, load_catalog
from .router import router
from .schemas import DocumentRequirement, SubmittedDocument
from .service import ComplianceResult, ComplianceSummary, compute_compliance, compute_compliance_overview

__all__ = [
    "ComplianceResult",
    "ComplianceSummary",
    "DocumentRequirement",
    "RequirementCatalog",
    "SubmittedDocument",
    "build_catalog",
    "compute_compliance",
    "compute_compliance_overview",
    "get_catalog",
    "load_catalog",
    "router",
]
