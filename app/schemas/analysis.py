import logging
from enum import Enum

from pydantic import BaseModel

from app.schemas.report import JurisdictionMode

logger = logging.getLogger(__name__)


class Jurisdiction(str, Enum):
    SAN_DIEGO = "san_diego"
    CALIFORNIA = "california"


JURISDICTION_MODES: dict[Jurisdiction, JurisdictionMode] = {
    Jurisdiction.SAN_DIEGO: JurisdictionMode.SAN_DIEGO,
    Jurisdiction.CALIFORNIA: JurisdictionMode.CALIFORNIA_SRA,
}


def resolve_jurisdiction(value: str | None) -> Jurisdiction:
    """Map the request's jurisdiction string to a rule set, California by default."""
    if not value:
        return Jurisdiction.CALIFORNIA
    try:
        return Jurisdiction(value.strip().lower())
    except ValueError:
        logger.warning("Unknown jurisdiction %r, using california rules", value)
        return Jurisdiction.CALIFORNIA


class AnalysisRequest(BaseModel):
    # photos stays optional here so a missing list is reported as
    # "No photos provided" by the gateway rather than as a schema error
    photos: list[str] | None = None
    address: str | None = None
    jurisdiction: str | None = None

    model_config = {"frozen": True}

    @property
    def resolved_jurisdiction(self) -> Jurisdiction:
        return resolve_jurisdiction(self.jurisdiction)

    @property
    def jurisdiction_mode(self) -> JurisdictionMode:
        return JURISDICTION_MODES[self.resolved_jurisdiction]
