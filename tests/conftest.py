import copy

import pytest


MODEL_REPORT = {
    "scan_id": "scan-model-001",
    "jurisdiction_mode": "San Diego_LRA",
    "zone_0_status": "VIOLATION",
    "hazards_detected": [
        "Bark mulch against the north wall",
        "Juniper shrub within 3ft of the garage",
    ],
    "hazard_locations": [
        {"box_2d": [610, 120, 880, 540], "label": "Bark mulch", "severity": "high"},
        {"box_2d": [300, 700, 720, 960], "label": "Juniper", "severity": "medium"},
    ],
    "insurance_risk_score": 5,
    "fire_hazard_data": {
        "fhsZ_classification": "VHFHSZ",
        "responsibility_area": "LRA",
        "insurance_tier": "NON_STANDARD",
        "fair_plan_eligible": False,
        "fire_protection_class": "3",
        "distance_to_fire_station_miles": 1.8,
        "nearest_fire_station": "San Diego Fire Station 40",
    },
    "fair_plan_eligible": False,
    "structure_hardening": {
        "roof_material": "Concrete tile",
        "roof_condition": "Good",
        "roof_rating": "A",
        "siding_material": "Stucco",
        "siding_fire_resistance": "High",
        "eave_type": "Boxed",
        "window_specs": "Dual-pane tempered",
        "vent_mesh_size": "1/8 inch",
        "chimney_spark_arrestor": True,
    },
    "summary": "Mulch and a juniper inside Zone 0 put this home in the non-standard tier.",
    "remediation_plan": [
        {
            "id": "a2",
            "priority": 2,
            "title": "Remove the juniper",
            "description": "Replace with a Green List succulent.",
            "diy_feasible": True,
            "diy_difficulty": "Moderate",
            "cost_estimate": "$150-$400",
            "insurance_impact_score": 2,
        },
        {
            "id": "a1",
            "priority": 1,
            "title": "Replace bark mulch with gravel",
            "description": "Clear 5ft around the structure.",
            "diy_feasible": True,
            "diy_difficulty": "Easy",
            "cost_estimate": "$100-$300",
            "insurance_impact_score": 3,
        },
    ],
}


@pytest.fixture(autouse=True, scope="session")
def disable_credentials():
    # Disable API key auth and the model credential for tests
    from app.config import settings
    settings.api_key = ""
    settings.openai_api_key = ""


@pytest.fixture
def model_report() -> dict:
    return copy.deepcopy(MODEL_REPORT)
