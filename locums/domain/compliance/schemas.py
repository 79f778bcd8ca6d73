"""Compliance domain schemas - Pydantic models for validation"""

import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ...shared.validators import parse_iso_date

RequirementCategory = Literal["mandatory", "supplementary"]
DocumentStatus = Literal["pending", "approved", "rejected"]


class DocumentRequirement(BaseModel):
    """One entry of the requirement catalog"""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    type: str = Field(..., min_length=1)
    label: str
    description: str = ""
    category: RequirementCategory
    group: str = "General"
    validity_months: Optional[int] = Field(None, gt=0, alias="validityMonths")


class SubmittedDocument(BaseModel):
    """A document a locum has uploaded, as returned by the documents API"""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    document_type: str = Field(..., alias="documentType")
    status: DocumentStatus
    uploaded_at: Optional[datetime.date] = Field(None, alias="uploadedAt")
    expiry_date: Optional[datetime.date] = Field(None, alias="expiryDate")
    id: Optional[str] = None

    @field_validator("uploaded_at", "expiry_date", mode="before")
    @classmethod
    def truncate_timestamps(cls, v):
        """The documents API sends full ISO timestamps for these"""
        if v is None:
            return v
        return parse_iso_date(v)


class ComplianceSummaryRequest(BaseModel):
    """Schema for computing a locum's compliance"""

    role: Optional[str] = None
    submissions: list[SubmittedDocument] = []


class RequirementResponse(BaseModel):
    type: str
    label: str
    description: str
    category: str
    group: str
    validityMonths: Optional[int] = None


class RequirementStatusResponse(BaseModel):
    type: str
    label: str
    group: str
    status: str
    expiry: Optional[str] = None
    expiresOn: Optional[datetime.date] = None


class CategoryComplianceResponse(BaseModel):
    completedCount: int
    totalCount: int
    percentage: int
    missing: list[str]
    outstanding: list[str]
    items: list[RequirementStatusResponse]


class ComplianceOverviewResponse(BaseModel):
    catalogVersion: str
    role: Optional[str] = None
    mandatory: CategoryComplianceResponse
    supplementary: CategoryComplianceResponse


class CatalogResponse(BaseModel):
    version: str
    role: Optional[str] = None
    mandatory: list[RequirementResponse]
    supplementary: list[RequirementResponse]
