"""California defensible space reference data.

Zones: zone-0 is 0-5 ft from the structure, zone-1 is 5-30 ft, zone-2 is
30-100 ft.
"""
from typing import Literal

from pydantic import BaseModel


class ComplianceItem(BaseModel):
    name: str
    category: Literal["plant", "material", "storage", "structure"]
    status: Literal["compliant", "violation", "warning"]
    description: str
    zone: Literal["zone-0", "zone-1", "zone-2"]
    severity: Literal["high", "medium", "low"]
    remediation: str | None = None

    model_config = {"frozen": True}


# Items that are violations within 5ft of the structure
ZONE_0_VIOLATIONS: tuple[ComplianceItem, ...] = (
    ComplianceItem(
        name="Wood Mulch",
        category="material",
        status="violation",
        description="Combustible wood mulch within 5ft of structure",
        zone="zone-0",
        severity="high",
        remediation="Replace with non-combustible gravel or hardscape",
    ),
    ComplianceItem(
        name="Firewood Stack",
        category="storage",
        status="violation",
        description="Firewood stored against or within 5ft of structure",
        zone="zone-0",
        severity="high",
        remediation="Move firewood at least 30ft from structure",
    ),
    ComplianceItem(
        name="Combustible Patio Furniture",
        category="storage",
        status="violation",
        description="Wooden or plastic patio furniture within 5ft",
        zone="zone-0",
        severity="medium",
        remediation="Replace with non-combustible furniture or move 5ft+ away",
    ),
    ComplianceItem(
        name="Dead Vegetation",
        category="plant",
        status="violation",
        description="Dead plants, leaves, or debris within 5ft",
        zone="zone-0",
        severity="high",
        remediation="Remove all dead vegetation immediately",
    ),
    ComplianceItem(
        name="Wooden Fencing",
        category="structure",
        status="violation",
        description="Combustible fencing attached to structure within 5ft",
        zone="zone-0",
        severity="high",
        remediation="Replace with non-combustible fencing or maintain 5ft gap",
    ),
    ComplianceItem(
        name="Storage Items",
        category="storage",
        status="violation",
        description="Boxes, containers, or combustible storage within 5ft",
        zone="zone-0",
        severity="medium",
        remediation="Remove all storage from 5ft zone",
    ),
    ComplianceItem(
        name="Bark Mulch",
        category="material",
        status="violation",
        description="Bark or shredded wood mulch within 5ft",
        zone="zone-0",
        severity="high",
        remediation='Replace with 1/4" gravel or non-combustible material',
    ),
    ComplianceItem(
        name="Wood Chips",
        category="material",
        status="violation",
        description="Wood chips or playground mulch within 5ft",
        zone="zone-0",
        severity="high",
        remediation="Replace with non-combustible material",
    ),
)

# Fire-resistant plants (Green List)
COMPLIANT_PLANTS: tuple[str, ...] = (
    "Succulents",
    "Cacti",
    "Agave",
    "Aloe Vera",
    "Ice Plant",
    "Lantana",
    "Oleander (but maintainable)",
    "Rockrose",
    "Manzanita",
    "Ceanothus",
    "Native grasses",
    "Fruit trees (maintained)",
    "Herbs (rosemary, lavender)",
)

# Flammable species to keep out of the first 30ft (Red List)
HIGH_RISK_PLANTS: tuple[str, ...] = (
    "Juniper",
    "Cypress",
    "Pine trees",
    "Eucalyptus",
    "Acacia",
    "Bamboo",
    "Russian Olive",
    "English Ivy",
    "Pampas Grass",
    "Cedar",
)

COMPLIANCE_CHECKLIST: dict[str, tuple[str, ...]] = {
    "zone0": (
        "No combustible materials within 5ft of structure",
        "Gutters clear of debris",
        "No storage against exterior walls",
        "No dead vegetation or leaf litter",
        "Non-combustible walkway materials",
        'Clear vents with 1/8" mesh',
    ),
    "zone1": (
        "Fire-resistant plants only",
        "Spacing between plants per FPZ guidelines",
        "Dead vegetation removed",
        "Lawn maintained",
        "Chain link or non-combustible fencing",
    ),
    "zone2": (
        'Grass mowed to 4" max',
        "Dead trees removed",
        "Clear access for fire vehicles",
        "Address visible from street",
    ),
}


def get_violation(name: str) -> ComplianceItem:
    for item in ZONE_0_VIOLATIONS:
        if item.name == name:
            return item
    raise KeyError(name)


def match_violations(text: str) -> list[ComplianceItem]:
    """Return the Zone 0 violations whose name or description appears in text."""
    lowered = (text or "").lower()
    if not lowered:
        return []
    return [
        item
        for item in ZONE_0_VIOLATIONS
        if item.name.lower() in lowered or item.description.lower() in lowered
    ]
