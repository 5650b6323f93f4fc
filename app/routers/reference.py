from fastapi import APIRouter

from app.data.compliance_catalog import (
    COMPLIANCE_CHECKLIST,
    COMPLIANT_PLANTS,
    HIGH_RISK_PLANTS,
    ZONE_0_VIOLATIONS,
)

router = APIRouter(prefix="/reference", tags=["reference"])


@router.get("/violations")
async def list_violations():
    return [item.model_dump() for item in ZONE_0_VIOLATIONS]


@router.get("/plants")
async def list_plants():
    return {
        "green_list": list(COMPLIANT_PLANTS),
        "red_list": list(HIGH_RISK_PLANTS),
    }


@router.get("/checklist")
async def get_checklist():
    return {zone: list(items) for zone, items in COMPLIANCE_CHECKLIST.items()}
