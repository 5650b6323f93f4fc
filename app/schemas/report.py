"""Strict ComplianceReport contract.

Model replies are validated against these models before they are trusted.
Unknown enum values are mapped to each field's UNKNOWN member instead of
failing the whole report, and list entries that do not validate are dropped
one by one. "Unknown" or null in a typed scalar (distances, yes/no flags)
and a null sub-object fall back to the field default. Anything that breaks a required field (summary, zone status, a
risk score outside 0-10) fails validation.
"""
import logging
import re
import uuid
from enum import Enum
from typing import Any

from pydantic import AliasChoices, BaseModel, Field, ValidationError, field_validator, model_validator

logger = logging.getLogger(__name__)


class JurisdictionMode(str, Enum):
    SAN_DIEGO = "San Diego_LRA"
    CALIFORNIA_SRA = "California_SRA"


class ComplianceStatus(str, Enum):
    COMPLIANT = "COMPLIANT"
    VIOLATION = "VIOLATION"
    WARNING = "WARNING"
    UNKNOWN = "UNKNOWN"


class HazardSeverity(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    UNKNOWN = "unknown"


class InsurabilityTier(str, Enum):
    PREFERRED = "PREFERRED"
    STANDARD = "STANDARD"
    NON_STANDARD = "NON_STANDARD"
    HIGH_RISK = "HIGH_RISK"
    UNINSURABLE = "UNINSURABLE"
    UNKNOWN = "UNKNOWN"


class FhszClassification(str, Enum):
    VHFHSZ = "VHFHSZ"
    HFHSZ = "HFHSZ"
    MFHSZ = "MFHSZ"
    NON_WUI = "NON-WUI"
    UNKNOWN = "UNKNOWN"


class ResponsibilityArea(str, Enum):
    SRA = "SRA"
    LRA = "LRA"
    FRA = "FRA"
    UNKNOWN = "UNKNOWN"


class RoofCondition(str, Enum):
    GOOD = "Good"
    FAIR = "Fair"
    POOR = "Poor"
    UNKNOWN = "Unknown"


class RoofRating(str, Enum):
    A = "A"
    B = "B"
    C = "C"
    UNRATED = "Unrated"


class FireResistance(str, Enum):
    HIGH = "High"
    MODERATE = "Moderate"
    LOW = "Low"
    NONE = "None"
    UNKNOWN = "Unknown"


class EaveType(str, Enum):
    BOXED = "Boxed"
    OPEN = "Open"
    VENTED = "Vented"
    UNKNOWN = "Unknown"


class VentMeshSize(str, Enum):
    EIGHTH_INCH = "1/8 inch"
    SIXTEENTH_INCH = "1/16 inch"
    NON_COMPLIANT = 'Non-compliant (>1/8")'
    UNKNOWN = "Unknown"


class DiyDifficulty(str, Enum):
    EASY = "Easy"
    MODERATE = "Moderate"
    DIFFICULT = "Difficult"
    UNKNOWN = "Unknown"


class ReportSource(str, Enum):
    AI = "ai"
    FALLBACK_NO_CREDENTIAL = "fallback_no_credential"
    FALLBACK_PARSE_ERROR = "fallback_parse_error"


# Score bands (inclusive upper bound) for the five insurability tiers
TIER_BANDS: list[tuple[int, InsurabilityTier]] = [
    (2, InsurabilityTier.PREFERRED),
    (4, InsurabilityTier.STANDARD),
    (6, InsurabilityTier.NON_STANDARD),
    (8, InsurabilityTier.HIGH_RISK),
    (10, InsurabilityTier.UNINSURABLE),
]

FAIR_PLAN_TIERS = {InsurabilityTier.HIGH_RISK, InsurabilityTier.UNINSURABLE}


def insurability_tier(score: int) -> InsurabilityTier:
    """Map a 0-10 insurance risk score to its insurability tier."""
    if not 0 <= score <= 10:
        raise ValueError(f"risk score out of range: {score}")
    for upper, tier in TIER_BANDS:
        if score <= upper:
            return tier
    return InsurabilityTier.UNINSURABLE


def coerce_enum(value: Any, enum_cls: type[Enum], fallback: Enum, *, warn: bool = True) -> Enum:
    """Return the enum member matching value (case-insensitive), else fallback."""
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        wanted = value.strip().lower()
        for member in enum_cls:
            if member.value.lower() == wanted:
                return member
    if warn:
        logger.warning("Unknown %s value %r, using %s", enum_cls.__name__, value, fallback.value)
    return fallback


_TRUE_WORDS = {"true", "yes", "y", "1"}
_FALSE_WORDS = {"false", "no", "n", "0"}


def coerce_bool(value: Any, default: bool = False) -> bool:
    """Read a yes/no answer; "Unknown", null or anything else gives default."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        word = value.strip().lower()
        if word in _TRUE_WORDS:
            return True
        if word in _FALSE_WORDS:
            return False
    return default


def _stated_bool(value: Any) -> bool | None:
    # None when the answer is missing or not a recognisable yes/no
    if coerce_bool(value, default=True) == coerce_bool(value, default=False):
        return coerce_bool(value)
    return None


def coerce_float(value: Any) -> float | None:
    """Read a number, accepting numeric strings like "1.8" or "1.8 miles"."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        match = re.search(r"-?\d+(?:\.\d+)?", value)
        if match:
            return float(match.group())
    return None


def coerce_int(value: Any, default: int = 0) -> int:
    number = coerce_float(value)
    return default if number is None else int(number)


def coerce_text(value: Any, default: str = "Unknown") -> str:
    if isinstance(value, bool) or value is None:
        return default
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, str) and value.strip():
        return value
    return default


def _part_or_default(value: Any) -> Any:
    # null or a bare "Unknown" in place of a sub-object means "all defaults"
    if value is None or isinstance(value, (str, list)):
        return {}
    return value


def _keep_valid(value: Any, model_cls: type[BaseModel]) -> list:
    if value is None:
        return []
    if not isinstance(value, list):
        logger.warning("Expected a list of %s, got %s", model_cls.__name__, type(value).__name__)
        return []
    kept = []
    for entry in value:
        try:
            kept.append(model_cls.model_validate(entry))
        except ValidationError:
            logger.warning("Skipping invalid %s entry: %s", model_cls.__name__, entry)
    return kept


class _ReportPart(BaseModel):
    model_config = {"frozen": True, "coerce_numbers_to_str": True}


class HazardLocation(_ReportPart):
    box_2d: tuple[int, int, int, int]  # [ymin, xmin, ymax, xmax] normalised 0-1000
    label: str
    severity: HazardSeverity = HazardSeverity.UNKNOWN

    @field_validator("box_2d")
    @classmethod
    def _box_in_range(cls, value: tuple[int, int, int, int]) -> tuple[int, int, int, int]:
        if any(not 0 <= v <= 1000 for v in value):
            raise ValueError("box_2d coordinates must be within 0-1000")
        return value

    @field_validator("severity", mode="before")
    @classmethod
    def _severity(cls, value: Any) -> HazardSeverity:
        return coerce_enum(value, HazardSeverity, HazardSeverity.UNKNOWN)


class FireHazardData(_ReportPart):
    # wire name is fhsZ_classification; the all-lowercase spelling is also accepted
    fhsz_classification: FhszClassification = Field(
        default=FhszClassification.UNKNOWN,
        validation_alias=AliasChoices("fhsZ_classification", "fhsz_classification"),
        serialization_alias="fhsZ_classification",
    )
    responsibility_area: ResponsibilityArea = ResponsibilityArea.UNKNOWN
    insurance_tier: InsurabilityTier = InsurabilityTier.UNKNOWN
    fair_plan_eligible: bool = False
    fire_protection_class: str = "Unknown"  # ISO 1-10
    distance_to_fire_station_miles: float | None = None
    nearest_fire_station: str = "Unknown"

    @field_validator("fair_plan_eligible", mode="before")
    @classmethod
    def _fair_plan(cls, value: Any) -> bool:
        return coerce_bool(value)

    @field_validator("distance_to_fire_station_miles", mode="before")
    @classmethod
    def _distance(cls, value: Any) -> float | None:
        return coerce_float(value)

    @field_validator("fire_protection_class", "nearest_fire_station", mode="before")
    @classmethod
    def _text(cls, value: Any) -> str:
        return coerce_text(value)

    @field_validator("fhsz_classification", mode="before")
    @classmethod
    def _fhsz(cls, value: Any) -> FhszClassification:
        return coerce_enum(value, FhszClassification, FhszClassification.UNKNOWN)

    @field_validator("responsibility_area", mode="before")
    @classmethod
    def _area(cls, value: Any) -> ResponsibilityArea:
        return coerce_enum(value, ResponsibilityArea, ResponsibilityArea.UNKNOWN)

    @field_validator("insurance_tier", mode="before")
    @classmethod
    def _tier(cls, value: Any) -> InsurabilityTier:
        return coerce_enum(value, InsurabilityTier, InsurabilityTier.UNKNOWN)


class StructureHardeningReport(_ReportPart):
    roof_material: str = "Unknown"
    roof_condition: RoofCondition = RoofCondition.UNKNOWN
    roof_rating: RoofRating = RoofRating.UNRATED
    siding_material: str = "Unknown"
    siding_fire_resistance: FireResistance = FireResistance.UNKNOWN
    eave_type: EaveType = EaveType.UNKNOWN
    window_specs: str = "Unknown"
    vent_mesh_size: VentMeshSize = VentMeshSize.UNKNOWN
    chimney_spark_arrestor: bool = False

    @field_validator("roof_material", "siding_material", "window_specs", mode="before")
    @classmethod
    def _text(cls, value: Any) -> str:
        return coerce_text(value)

    @field_validator("chimney_spark_arrestor", mode="before")
    @classmethod
    def _arrestor(cls, value: Any) -> bool:
        return coerce_bool(value)

    @field_validator("roof_condition", mode="before")
    @classmethod
    def _roof_condition(cls, value: Any) -> RoofCondition:
        return coerce_enum(value, RoofCondition, RoofCondition.UNKNOWN)

    @field_validator("roof_rating", mode="before")
    @classmethod
    def _roof_rating(cls, value: Any) -> RoofRating:
        return coerce_enum(value, RoofRating, RoofRating.UNRATED)

    @field_validator("siding_fire_resistance", mode="before")
    @classmethod
    def _siding(cls, value: Any) -> FireResistance:
        return coerce_enum(value, FireResistance, FireResistance.UNKNOWN)

    @field_validator("eave_type", mode="before")
    @classmethod
    def _eave(cls, value: Any) -> EaveType:
        return coerce_enum(value, EaveType, EaveType.UNKNOWN)

    @field_validator("vent_mesh_size", mode="before")
    @classmethod
    def _vent(cls, value: Any) -> VentMeshSize:
        return coerce_enum(value, VentMeshSize, VentMeshSize.UNKNOWN)


class RemediationAction(_ReportPart):
    id: str = Field(default_factory=lambda: f"action-{uuid.uuid4().hex[:8]}")
    priority: int = 3
    title: str
    description: str = ""
    diy_feasible: bool = False
    diy_difficulty: DiyDifficulty = DiyDifficulty.UNKNOWN
    cost_estimate: str = "Unknown"
    insurance_impact_score: int = 0  # points removed from the risk score

    @field_validator("id", mode="before")
    @classmethod
    def _id(cls, value: Any) -> str:
        return coerce_text(value, default=f"action-{uuid.uuid4().hex[:8]}")

    @field_validator("description", mode="before")
    @classmethod
    def _description(cls, value: Any) -> str:
        return coerce_text(value, default="")

    @field_validator("cost_estimate", mode="before")
    @classmethod
    def _cost(cls, value: Any) -> str:
        return coerce_text(value)

    @field_validator("diy_feasible", mode="before")
    @classmethod
    def _diy(cls, value: Any) -> bool:
        return coerce_bool(value)

    @field_validator("insurance_impact_score", mode="before")
    @classmethod
    def _impact(cls, value: Any) -> int:
        return coerce_int(value)

    @field_validator("priority", mode="before")
    @classmethod
    def _priority(cls, value: Any) -> int:
        if not isinstance(value, bool):
            try:
                priority = int(value)
            except (TypeError, ValueError):
                priority = None
            if priority in (1, 2, 3):
                return priority
        logger.warning("Unknown remediation priority %r, using 3", value)
        return 3

    @field_validator("diy_difficulty", mode="before")
    @classmethod
    def _difficulty(cls, value: Any) -> DiyDifficulty:
        return coerce_enum(value, DiyDifficulty, DiyDifficulty.UNKNOWN)


class ComplianceReport(_ReportPart):
    scan_id: str = Field(min_length=1)
    jurisdiction_mode: JurisdictionMode
    zone_0_status: ComplianceStatus
    hazards_detected: list[str] = []
    hazard_locations: list[HazardLocation] = []
    insurance_risk_score: int = Field(ge=0, le=10)
    fire_hazard_data: FireHazardData = FireHazardData()
    fair_plan_eligible: bool = False
    structure_hardening: StructureHardeningReport = StructureHardeningReport()
    summary: str
    remediation_plan: list[RemediationAction] = []
    timestamp: str
    address: str | None = None
    source: ReportSource
    note: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _derive_tier(cls, data: Any) -> Any:
        """Fill an unknown insurance tier and FAIR Plan flag from the score."""
        if not isinstance(data, dict):
            return data
        score = data.get("insurance_risk_score")
        if isinstance(score, str) and score.strip().isdigit():
            score = int(score.strip())
        if isinstance(score, bool) or not isinstance(score, int) or not 0 <= score <= 10:
            return data

        hazard = data.get("fire_hazard_data")
        if isinstance(hazard, BaseModel):
            hazard = hazard.model_dump()
        hazard = dict(hazard) if isinstance(hazard, dict) else {}

        tier = coerce_enum(hazard.get("insurance_tier"), InsurabilityTier, InsurabilityTier.UNKNOWN, warn=False)
        if tier is InsurabilityTier.UNKNOWN:
            tier = insurability_tier(score)
            hazard["insurance_tier"] = tier.value
        eligible = _stated_bool(hazard.get("fair_plan_eligible"))
        hazard["fair_plan_eligible"] = tier in FAIR_PLAN_TIERS if eligible is None else eligible

        data = {**data, "fire_hazard_data": hazard}
        if _stated_bool(data.get("fair_plan_eligible")) is None:
            data["fair_plan_eligible"] = hazard["fair_plan_eligible"]
        return data

    @field_validator("fire_hazard_data", "structure_hardening", mode="before")
    @classmethod
    def _part(cls, value: Any) -> Any:
        return _part_or_default(value)

    @field_validator("fair_plan_eligible", mode="before")
    @classmethod
    def _fair_plan(cls, value: Any) -> bool:
        return coerce_bool(value)

    @field_validator("zone_0_status", mode="before")
    @classmethod
    def _zone_status(cls, value: Any) -> ComplianceStatus:
        return coerce_enum(value, ComplianceStatus, ComplianceStatus.UNKNOWN)

    @field_validator("hazards_detected", mode="before")
    @classmethod
    def _hazards(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator("hazard_locations", mode="before")
    @classmethod
    def _locations(cls, value: Any) -> list:
        return _keep_valid(value, HazardLocation)

    @field_validator("remediation_plan", mode="before")
    @classmethod
    def _plan(cls, value: Any) -> list:
        return _keep_valid(value, RemediationAction)

    @field_validator("remediation_plan")
    @classmethod
    def _plan_by_priority(cls, value: list[RemediationAction]) -> list[RemediationAction]:
        return sorted(value, key=lambda action: action.priority)
