"""
Compliance requirement catalog.

Static, versioned table of the documents a locum must (mandatory) or may
(supplementary) hold, plus the subsets that apply to each clinical role.
A JSON file with the same shape can replace the built-in table through
COMPLIANCE_CATALOG_PATH.
"""

import json
import logging
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import ValidationError as SchemaValidationError

from ... import config
from .schemas import DocumentRequirement, RequirementCategory

logger = logging.getLogger(__name__)

CATALOG_VERSION = "2024.1"

DEFAULT_CATALOG = {
    "version": CATALOG_VERSION,
    "mandatory": [
        {
            "type": "dbs_check",
            "label": "DBS Enhanced Check",
            "description": "Enhanced DBS certificate required for all clinical roles",
            "group": "Legal & Safety",
            "validityMonths": 36,
        },
        {
            "type": "right_to_work",
            "label": "Right to Work",
            "description": "Valid passport, birth certificate, or work permit",
            "group": "Legal & Safety",
            "validityMonths": None,
        },
        {
            "type": "medical_indemnity",
            "label": "Medical Indemnity Insurance",
            "description": "Professional indemnity insurance cover (MDU/MPS/MDDUS)",
            "group": "Insurance & Protection",
            "validityMonths": 12,
        },
        {
            "type": "basic_life_support",
            "label": "Basic Life Support (BLS)",
            "description": "Current BLS certification from approved provider",
            "group": "Clinical Training",
            "validityMonths": 12,
        },
        {
            "type": "safeguarding_children",
            "label": "Safeguarding Children Training",
            "description": "Level 3 safeguarding children training certificate",
            "group": "Safeguarding",
            "validityMonths": 36,
        },
        {
            "type": "safeguarding_adults",
            "label": "Safeguarding Adults Training",
            "description": "Adult safeguarding awareness certificate",
            "group": "Safeguarding",
            "validityMonths": 36,
        },
        {
            "type": "infection_control",
            "label": "Infection Prevention & Control",
            "description": "IPC training for healthcare settings",
            "group": "Clinical Training",
            "validityMonths": 12,
        },
        {
            "type": "medical_degree",
            "label": "Medical Degree Certificate",
            "description": "MBBS/MBChB or equivalent medical qualification",
            "group": "Qualifications",
            "validityMonths": None,
        },
        {
            "type": "nursing_degree",
            "label": "Nursing Degree/Diploma",
            "description": "BSc Nursing, Diploma, or equivalent nursing qualification",
            "group": "Qualifications",
            "validityMonths": None,
        },
        {
            "type": "clinical_reference_1",
            "label": "Clinical Reference 1",
            "description": "First clinical reference from medical supervisor or consultant",
            "group": "References",
            "validityMonths": 24,
        },
        {
            "type": "clinical_reference_2",
            "label": "Clinical Reference 2",
            "description": "Second clinical reference from medical supervisor or consultant",
            "group": "References",
            "validityMonths": 24,
        },
        {
            "type": "medical_cv",
            "label": "Medical CV",
            "description": "Current medical curriculum vitae with clinical experience",
            "group": "Professional Documentation",
            "validityMonths": 12,
        },
        {
            "type": "occupational_health",
            "label": "Occupational Health Clearance",
            "description": "Occupational health clearance including immunization status",
            "group": "Health & Safety",
            "validityMonths": 12,
        },
    ],
    "supplementary": [
        {
            "type": "advanced_life_support",
            "label": "Advanced Life Support (ALS)",
            "description": "ALS certification (recommended for GPs)",
            "group": "Advanced Clinical Training",
            "validityMonths": 36,
        },
        {
            "type": "prescribing_qualification",
            "label": "Independent Prescribing Qualification",
            "description": "V300 or equivalent prescribing qualification (for Nurse Practitioners)",
            "group": "Specialist Qualifications",
            "validityMonths": None,
        },
        {
            "type": "specialist_training",
            "label": "Specialist Training Certificates",
            "description": "Additional specialist clinical training certificates",
            "group": "Specialist Training",
            "validityMonths": 24,
        },
        {
            "type": "mentorship_qualification",
            "label": "Clinical Mentorship Qualification",
            "description": "Qualification to supervise junior medical staff",
            "group": "Leadership & Teaching",
            "validityMonths": 36,
        },
    ],
    # "recommended" documents are scored as the supplementary category
    "roles": {
        "General Practitioner": {
            "mandatory": [
                "dbs_check",
                "right_to_work",
                "medical_indemnity",
                "basic_life_support",
                "safeguarding_children",
                "safeguarding_adults",
                "infection_control",
                "medical_degree",
                "clinical_reference_1",
                "clinical_reference_2",
                "medical_cv",
                "occupational_health",
            ],
            "recommended": ["advanced_life_support", "specialist_training"],
        },
        "Nurse Practitioner": {
            "mandatory": [
                "dbs_check",
                "right_to_work",
                "medical_indemnity",
                "basic_life_support",
                "safeguarding_children",
                "safeguarding_adults",
                "infection_control",
                "nursing_degree",
                "clinical_reference_1",
                "clinical_reference_2",
                "medical_cv",
                "occupational_health",
            ],
            "recommended": ["prescribing_qualification", "advanced_life_support", "specialist_training"],
        },
        "Advanced Nurse Practitioner": {
            "mandatory": [
                "dbs_check",
                "right_to_work",
                "medical_indemnity",
                "basic_life_support",
                "safeguarding_children",
                "safeguarding_adults",
                "infection_control",
                "nursing_degree",
                "prescribing_qualification",
                "clinical_reference_1",
                "clinical_reference_2",
                "medical_cv",
                "occupational_health",
            ],
            "recommended": ["advanced_life_support", "specialist_training", "mentorship_qualification"],
        },
    },
}

ROLE_LIST_FOR_CATEGORY = {"mandatory": "mandatory", "supplementary": "recommended"}


@dataclass(frozen=True)
class RequirementCatalog:
    version: str
    requirements: tuple[DocumentRequirement, ...]
    roles: dict[str, dict[str, tuple[str, ...]]]

    @property
    def role_names(self) -> list[str]:
        return list(self.roles)

    def get(self, document_type: str) -> Optional[DocumentRequirement]:
        for requirement in self.requirements:
            if requirement.type == document_type:
                return requirement
        return None

    def requirements_for(
        self, category: RequirementCategory, role: Optional[str] = None
    ) -> list[DocumentRequirement]:
        """
        Requirements in declaration order for one category.

        With a role, the role's own lists decide membership. A document can be
        mandatory for one role and supplementary in the base catalog (e.g.
        prescribing for Advanced Nurse Practitioners); it is returned tagged
        with the requested category so a category is never mixed.

        Raises:
            KeyError: If the role is unknown
        """
        if category not in ROLE_LIST_FOR_CATEGORY:
            raise ValueError(f"Unknown requirement category {category!r}")

        if role is None:
            return [r for r in self.requirements if r.category == category]

        if role not in self.roles:
            raise KeyError(role)
        wanted = set(self.roles[role][ROLE_LIST_FOR_CATEGORY[category]])
        return [
            r if r.category == category else r.model_copy(update={"category": category})
            for r in self.requirements
            if r.type in wanted
        ]


def build_catalog(data: dict) -> RequirementCatalog:
    """
    Validate raw catalog data.

    Raises:
        ValueError: On malformed entries, duplicate types, or roles that
            reference unknown document types
    """
    if not isinstance(data, dict):
        raise ValueError("Catalog must be a JSON object")

    requirements = []
    seen = set()
    for category in ("mandatory", "supplementary"):
        for entry in data.get(category) or []:
            if not isinstance(entry, dict):
                raise ValueError(f"Invalid {category} requirement: {entry!r}")
            try:
                requirement = DocumentRequirement.model_validate({**entry, "category": category})
            except SchemaValidationError as e:
                raise ValueError(f"Invalid {category} requirement {entry.get('type')!r}: {e}") from e
            if requirement.type in seen:
                raise ValueError(f"Duplicate requirement type {requirement.type!r}")
            seen.add(requirement.type)
            requirements.append(requirement)

    roles = {}
    for role, lists in (data.get("roles") or {}).items():
        if not isinstance(lists, dict):
            raise ValueError(f"Invalid requirement lists for role {role!r}")
        role_lists = {}
        for key in ("mandatory", "recommended"):
            types = tuple(lists.get(key) or [])
            unknown = [t for t in types if t not in seen]
            if unknown:
                raise ValueError(f"Role {role!r} references unknown requirements: {', '.join(unknown)}")
            role_lists[key] = types
        roles[role] = role_lists

    return RequirementCatalog(
        version=str(data.get("version") or "unversioned"),
        requirements=tuple(requirements),
        roles=roles,
    )


def load_catalog(path: Optional[str] = None) -> RequirementCatalog:
    """Load the catalog from a JSON file, or the built-in table when no path is configured"""
    path = path or config.COMPLIANCE_CATALOG_PATH
    if not path:
        return build_catalog(DEFAULT_CATALOG)

    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        logger.error(f"❌ Failed to read compliance catalog {path}: {e}")
        raise ValueError(f"Unable to read compliance catalog {path}") from e

    catalog = build_catalog(data)
    logger.info(f"📋 Loaded compliance catalog {catalog.version} from {path}")
    return catalog


@lru_cache(maxsize=1)
def get_catalog() -> RequirementCatalog:
    """Process-wide catalog, loaded once"""
    return load_catalog()
