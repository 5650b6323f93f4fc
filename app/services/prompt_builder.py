import os

from app.schemas.analysis import JURISDICTION_MODES, Jurisdiction
from app.schemas.report import TIER_BANDS

PROMPT_PATH = os.path.join(
    os.path.dirname(os.path.dirname(__file__)),
    "prompts",
    "compliance_analysis.txt",
)

# Risk score increments per hazard class, restated verbatim to the model
SCORING_TABLE: list[tuple[str, int]] = [
    ("Organic mulch (wood, bark or chips) in Zone 0", 3),
    ("Wood-shake or untreated wood roofing", 3),
    ("Combustible fencing attached to the structure", 2),
    ("Flammable species (Red List plant) in Zone 0", 2),
    ("Dead vegetation or leaf litter in Zone 0", 2),
    ("Combustible storage or firewood in Zone 0", 1),
    ("Non-compliant vent mesh (larger than 1/8 inch)", 1),
]

MAX_RISK_SCORE = 10

JURISDICTION_RULES: dict[Jurisdiction, tuple[str, str]] = {
    Jurisdiction.SAN_DIEGO: (
        "San Diego County (Local Responsibility Area)",
        "Apply the San Diego County Fire Code for a Local Responsibility Area (LRA). "
        "Zone 0 (0-5 ft) must be free of combustibles, Zone 1 (5-30 ft) must hold only "
        "well-spaced, irrigated fire-resistant plants, and Zone 2 (30-100 ft) must keep "
        "grass mowed to 4 inches with horizontal and vertical clearance between fuels. "
        "Report responsibility_area as LRA unless the photos clearly show otherwise.",
    ),
    Jurisdiction.CALIFORNIA: (
        "California State Responsibility Area",
        "Apply California Public Resources Code 4291 and the Board of Forestry Zone 0 "
        "ember-resistant zone regulations for a State Responsibility Area (SRA). "
        "Zone 0 (0-5 ft) must be free of combustibles, Zone 1 (5-30 ft) must be lean, clean "
        "and green, and Zone 2 (30-100 ft) must reduce fuel continuity. "
        "Report responsibility_area as SRA unless the photos clearly show otherwise.",
    ),
}


def _load_template() -> str:
    with open(PROMPT_PATH) as f:
        return f.read()


def format_scoring_table() -> str:
    return "\n".join(f"- {hazard}: +{points}" for hazard, points in SCORING_TABLE)


def format_tier_table() -> str:
    lines = []
    lower = 0
    for upper, tier in TIER_BANDS:
        lines.append(f"- {lower}-{upper}: {tier.value}")
        lower = upper + 1
    return "\n".join(lines)


def build_prompt(jurisdiction: Jurisdiction, photo_count: int, address: str | None = None) -> str:
    """Render the analysis prompt for one request."""
    label, rules = JURISDICTION_RULES[jurisdiction]
    address_clause = f" located at {address.strip()}" if address and address.strip() else ""
    return _load_template().format(
        photo_count=photo_count,
        address_clause=address_clause,
        jurisdiction_label=label,
        jurisdiction_rules=rules,
        jurisdiction_mode=JURISDICTION_MODES[jurisdiction].value,
        scoring_table=format_scoring_table(),
        tier_table=format_tier_table(),
    )
