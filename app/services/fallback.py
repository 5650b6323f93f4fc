"""Canned reports returned when no real model analysis is available.

Every report built here carries a non-AI ``source`` and a ``note`` so it can
never be mistaken for a genuine analysis of the photos.
"""
import logging
import re

from app.data.compliance_catalog import ComplianceItem, get_violation, match_violations
from app.schemas.analysis import AnalysisRequest, Jurisdiction
from app.schemas.report import ComplianceReport, ReportSource
from app.services.report_parser import finalize_payload

logger = logging.getLogger(__name__)

NO_CREDENTIAL_NOTE = "Demo mode: configure OPENAI_API_KEY for real AI analysis"
PARSE_ERROR_NOTE = (
    "The AI response could not be read, so a generic assessment is shown. "
    "Please retry the scan for a full analysis."
)

FALLBACK_RISK_SCORE = 5

# Violations shown by the demo report
DEMO_VIOLATIONS = ("Wood Mulch", "Dead Vegetation")

# (difficulty, cost estimate, insurance impact points) per catalog item
_REMEDIATION_DETAILS: dict[str, tuple[str, str, int]] = {
    "Wood Mulch": ("Easy", "$100-$400", 3),
    "Bark Mulch": ("Easy", "$100-$400", 3),
    "Wood Chips": ("Easy", "$100-$400", 3),
    "Firewood Stack": ("Easy", "$0", 1),
    "Combustible Patio Furniture": ("Easy", "$0-$300", 1),
    "Dead Vegetation": ("Easy", "$0-$150", 2),
    "Wooden Fencing": ("Difficult", "$800-$3,000", 2),
    "Storage Items": ("Easy", "$0", 1),
}

MANUAL_CHECK_ACTION = {
    "id": "fallback-manual-check",
    "priority": 1,
    "title": "Walk the 5-foot perimeter",
    "description": "Remove mulch, dead vegetation, firewood and stored items within 5ft of the structure.",
    "diy_feasible": True,
    "diy_difficulty": "Easy",
    "cost_estimate": "$0",
    "insurance_impact_score": 0,
}

_RESPONSIBILITY_AREAS = {
    Jurisdiction.SAN_DIEGO: "LRA",
    Jurisdiction.CALIFORNIA: "SRA",
}


def _slug(name: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", name.lower()).strip("-")


def remediation_for(item: ComplianceItem) -> dict:
    difficulty, cost, impact = _REMEDIATION_DETAILS.get(item.name, ("Moderate", "Varies", 1))
    return {
        "id": f"fallback-{_slug(item.name)}",
        "priority": 1 if item.severity == "high" else 2,
        "title": item.remediation or f"Address {item.name.lower()}",
        "description": item.description,
        "diy_feasible": difficulty != "Difficult",
        "diy_difficulty": difficulty,
        "cost_estimate": cost,
        "insurance_impact_score": impact,
    }


def _base_payload(request: AnalysisRequest, items: list[ComplianceItem]) -> dict:
    return {
        "hazards_detected": [item.description for item in items],
        "hazard_locations": [],
        "insurance_risk_score": FALLBACK_RISK_SCORE,
        "fire_hazard_data": {
            "responsibility_area": _RESPONSIBILITY_AREAS[request.resolved_jurisdiction],
        },
        "structure_hardening": {},
        "remediation_plan": [remediation_for(item) for item in items],
    }


def no_credential_report(request: AnalysisRequest) -> ComplianceReport:
    """Demo report used when no model credential is configured."""
    items = [get_violation(name) for name in DEMO_VIOLATIONS]
    payload = _base_payload(request, items)
    payload["zone_0_status"] = "VIOLATION"
    payload["summary"] = (
        "Demo report: these photos were not analyzed. The findings below are "
        "typical Zone 0 issues shown as an example of a real report."
    )
    data = finalize_payload(
        payload,
        jurisdiction_mode=request.jurisdiction_mode,
        address=request.address,
        source=ReportSource.FALLBACK_NO_CREDENTIAL,
        note=NO_CREDENTIAL_NOTE,
    )
    return ComplianceReport.model_validate(data)


def parse_error_report(request: AnalysisRequest, raw_text: str = "") -> ComplianceReport:
    """Generic partial-compliance report used when the model reply is unusable.

    Catalog items named in the raw reply are kept as detected hazards.
    """
    items = match_violations(raw_text)
    if items:
        logger.info("Fallback report kept %d catalog match(es) from the model reply", len(items))
    payload = _base_payload(request, items)
    payload["zone_0_status"] = "WARNING"
    if not items:
        payload["hazards_detected"] = ["Zone 0 (0-5 ft) could not be fully assessed from the photos"]
        payload["remediation_plan"] = [MANUAL_CHECK_ACTION]
    payload["summary"] = (
        "Partial compliance: the automated analysis could not be completed, so "
        "Zone 0 should be checked manually against the defensible space checklist."
    )
    data = finalize_payload(
        payload,
        jurisdiction_mode=request.jurisdiction_mode,
        address=request.address,
        source=ReportSource.FALLBACK_PARSE_ERROR,
        note=PARSE_ERROR_NOTE,
    )
    return ComplianceReport.model_validate(data)
