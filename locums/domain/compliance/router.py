"""Compliance router - FastAPI endpoints for requirement catalogs and completion"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from .catalog import RequirementCatalog, get_catalog
from .schemas import (
    CatalogResponse,
    CategoryComplianceResponse,
    ComplianceOverviewResponse,
    ComplianceSummaryRequest,
    DocumentRequirement,
    RequirementResponse,
    RequirementStatusResponse,
)
from .service import ComplianceResult, compute_compliance_overview

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/compliance", tags=["Compliance"])


def _requirement_response(requirement: DocumentRequirement) -> RequirementResponse:
    return RequirementResponse(
        type=requirement.type,
        label=requirement.label,
        description=requirement.description,
        category=requirement.category,
        group=requirement.group,
        validityMonths=requirement.validity_months,
    )


def _category_response(result: ComplianceResult) -> CategoryComplianceResponse:
    return CategoryComplianceResponse(
        completedCount=result.summary.completed_count,
        totalCount=result.summary.total_count,
        percentage=result.summary.percentage,
        missing=result.missing,
        outstanding=result.outstanding,
        items=[
            RequirementStatusResponse(
                type=item.requirement.type,
                label=item.requirement.label,
                group=item.requirement.group,
                status=item.status,
                expiry=item.expiry,
                expiresOn=item.expires_on,
            )
            for item in result.items
        ],
    )


def _check_role(catalog: RequirementCatalog, role: Optional[str]) -> None:
    if role is not None and role not in catalog.roles:
        raise HTTPException(status_code=404, detail=f"Unknown role: {role}")


@router.get("/requirements", response_model=CatalogResponse)
async def get_requirements(
    role: Optional[str] = Query(None),
    catalog: RequirementCatalog = Depends(get_catalog),
):
    """Requirement catalog, optionally narrowed to one clinical role"""
    _check_role(catalog, role)
    return CatalogResponse(
        version=catalog.version,
        role=role,
        mandatory=[_requirement_response(r) for r in catalog.requirements_for("mandatory", role)],
        supplementary=[_requirement_response(r) for r in catalog.requirements_for("supplementary", role)],
    )


@router.post("/summary", response_model=ComplianceOverviewResponse)
async def get_compliance_summary(
    data: ComplianceSummaryRequest,
    catalog: RequirementCatalog = Depends(get_catalog),
):
    """Mandatory and supplementary completion for a set of submitted documents"""
    _check_role(catalog, data.role)
    results = compute_compliance_overview(catalog, data.submissions, role=data.role)
    logger.info(
        f"Compliance for role={data.role}: mandatory {results['mandatory'].summary.percentage}%, "
        f"supplementary {results['supplementary'].summary.percentage}%"
    )
    return ComplianceOverviewResponse(
        catalogVersion=catalog.version,
        role=data.role,
        mandatory=_category_response(results["mandatory"]),
        supplementary=_category_response(results["supplementary"]),
    )
