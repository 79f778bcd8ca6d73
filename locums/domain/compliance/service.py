"""
Compliance aggregation.

Scores one requirement category at a time against the documents a locum has
submitted. Only approved documents count as complete. An empty requirement
list is vacuously complete (100%), which the UI shows as "nothing required".
"""

import logging
import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import date, timedelta
from fractions import Fraction
from typing import Optional

from dateutil.relativedelta import relativedelta

from ... import config
from .catalog import RequirementCatalog
from .schemas import DocumentRequirement, SubmittedDocument

logger = logging.getLogger(__name__)

# Lower wins when one document type was submitted more than once
STATUS_PRECEDENCE = {"approved": 0, "pending": 1, "rejected": 2}

EXPIRY_VALID = "valid"
EXPIRY_SOON = "expiring_soon"
EXPIRY_EXPIRED = "expired"
EXPIRY_NONE = "no_expiry"
EXPIRY_UNKNOWN = "unknown"


@dataclass(frozen=True)
class ComplianceSummary:
    completed_count: int
    total_count: int

    @property
    def fraction(self) -> Fraction:
        if self.total_count == 0:
            return Fraction(1)
        return Fraction(self.completed_count, self.total_count)

    @property
    def percentage(self) -> int:
        """Whole percent, rounded half up"""
        return math.floor(self.fraction * 100 + Fraction(1, 2))


@dataclass(frozen=True)
class RequirementStatus:
    requirement: DocumentRequirement
    status: str
    document: Optional[SubmittedDocument] = None
    expiry: Optional[str] = None
    expires_on: Optional[date] = None


@dataclass(frozen=True)
class ComplianceResult:
    category: Optional[str]
    summary: ComplianceSummary
    items: tuple[RequirementStatus, ...]

    @property
    def missing(self) -> list[str]:
        return [item.requirement.type for item in self.items if item.status == "missing"]

    @property
    def outstanding(self) -> list[str]:
        return [item.requirement.type for item in self.items if item.status != "approved"]


def document_expiry(
    requirement: DocumentRequirement,
    document: SubmittedDocument,
    today: date,
    warning_days: int,
) -> tuple[str, Optional[date]]:
    """
    Expiry state of a submitted document.

    An explicit expiry date wins; otherwise the upload date plus the
    requirement's validity period is used.
    """
    expires_on = document.expiry_date
    if expires_on is None and requirement.validity_months and document.uploaded_at:
        expires_on = document.uploaded_at + relativedelta(months=requirement.validity_months)

    if expires_on is None:
        return (EXPIRY_NONE if requirement.validity_months is None else EXPIRY_UNKNOWN), None
    if expires_on < today:
        return EXPIRY_EXPIRED, expires_on
    if expires_on <= today + timedelta(days=warning_days):
        return EXPIRY_SOON, expires_on
    return EXPIRY_VALID, expires_on


def _best_submissions(submissions: Iterable[SubmittedDocument]) -> dict[str, SubmittedDocument]:
    best: dict[str, SubmittedDocument] = {}
    for document in submissions:
        current = best.get(document.document_type)
        if current is None or STATUS_PRECEDENCE[document.status] < STATUS_PRECEDENCE[current.status]:
            best[document.document_type] = document
    return best


def compute_compliance(
    requirements: Sequence[DocumentRequirement],
    submissions: Iterable[SubmittedDocument],
    today: Optional[date] = None,
    warning_days: Optional[int] = None,
) -> ComplianceResult:
    """
    Completion for a single requirement category.

    Raises:
        ValueError: If the requirements span more than one category
    """
    categories = {r.category for r in requirements}
    if len(categories) > 1:
        raise ValueError("Compliance is computed per category; got " + ", ".join(sorted(categories)))

    today = today or date.today()
    warning_days = config.EXPIRY_WARNING_DAYS if warning_days is None else warning_days
    by_type = _best_submissions(submissions)

    items = []
    completed = 0
    for requirement in requirements:
        document = by_type.get(requirement.type)
        if document is None:
            items.append(RequirementStatus(requirement=requirement, status="missing"))
            continue

        if document.status == "approved":
            completed += 1
        expiry, expires_on = document_expiry(requirement, document, today, warning_days)
        items.append(
            RequirementStatus(
                requirement=requirement,
                status=document.status,
                document=document,
                expiry=expiry,
                expires_on=expires_on,
            )
        )

    summary = ComplianceSummary(completed_count=completed, total_count=len(requirements))
    category = next(iter(categories), None)
    logger.debug(f"Compliance ({category}): {completed}/{len(requirements)} = {summary.percentage}%")
    return ComplianceResult(category=category, summary=summary, items=tuple(items))


def compute_compliance_overview(
    catalog: RequirementCatalog,
    submissions: Iterable[SubmittedDocument],
    role: Optional[str] = None,
    today: Optional[date] = None,
) -> dict[str, ComplianceResult]:
    """Mandatory and supplementary results, scored separately"""
    submissions = list(submissions)
    return {
        category: compute_compliance(catalog.requirements_for(category, role), submissions, today=today)
        for category in ("mandatory", "supplementary")
    }
