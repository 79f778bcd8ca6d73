import json

import pytest

from locums import config
from locums.domain.compliance.catalog import (
    CATALOG_VERSION,
    DEFAULT_CATALOG,
    build_catalog,
    load_catalog,
)


def test_default_catalog():
    catalog = load_catalog()
    assert catalog.version == CATALOG_VERSION
    assert len(catalog.requirements_for("mandatory")) == 13
    assert len(catalog.requirements_for("supplementary")) == 4
    assert catalog.get("dbs_check").validity_months == 36
    assert catalog.get("right_to_work").validity_months is None
    assert catalog.get("unknown") is None


def test_role_subsets():
    catalog = build_catalog(DEFAULT_CATALOG)
    gp = catalog.requirements_for("mandatory", "General Practitioner")
    assert len(gp) == 12
    assert "nursing_degree" not in [r.type for r in gp]
    assert [r.type for r in catalog.requirements_for("supplementary", "General Practitioner")] == [
        "advanced_life_support",
        "specialist_training",
    ]


def test_role_lists_follow_catalog_order():
    catalog = build_catalog(DEFAULT_CATALOG)
    anp = [r.type for r in catalog.requirements_for("mandatory", "Advanced Nurse Practitioner")]
    assert anp[-1] == "prescribing_qualification"
    assert anp[0] == "dbs_check"


def test_unknown_role():
    catalog = build_catalog(DEFAULT_CATALOG)
    with pytest.raises(KeyError):
        catalog.requirements_for("mandatory", "Dentist")


def test_unknown_category():
    catalog = build_catalog(DEFAULT_CATALOG)
    with pytest.raises(ValueError):
        catalog.requirements_for("optional")


def test_load_from_file(tmp_path, monkeypatch):
    path = tmp_path / "catalog.json"
    path.write_text(
        json.dumps(
            {
                "version": "2025.2",
                "mandatory": [{"type": "dbs_check", "label": "DBS", "validityMonths": 36}],
                "supplementary": [],
                "roles": {"Clinical Pharmacist": {"mandatory": ["dbs_check"]}},
            }
        )
    )
    monkeypatch.setattr(config, "COMPLIANCE_CATALOG_PATH", str(path))

    catalog = load_catalog()
    assert catalog.version == "2025.2"
    assert [r.type for r in catalog.requirements_for("mandatory", "Clinical Pharmacist")] == ["dbs_check"]
    assert catalog.requirements_for("supplementary", "Clinical Pharmacist") == []


@pytest.mark.parametrize(
    "data",
    [
        [],
        {"mandatory": [{"type": "dbs_check", "label": "DBS"}, {"type": "dbs_check", "label": "DBS again"}]},
        {"mandatory": [{"type": "dbs_check", "label": "DBS", "validityMonths": 0}]},
        {"mandatory": [{"label": "No type"}]},
        {"mandatory": ["dbs_check"]},
        {"mandatory": [{"type": "dbs_check", "label": "DBS"}], "roles": {"GP": {"mandatory": ["nope"]}}},
    ],
)
def test_rejects_malformed_catalogs(data):
    with pytest.raises(ValueError):
        build_catalog(data)


def test_unreadable_file(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json")
    with pytest.raises(ValueError):
        load_catalog(str(path))
    with pytest.raises(ValueError):
        load_catalog(str(tmp_path / "missing.json"))
