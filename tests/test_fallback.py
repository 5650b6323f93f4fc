from app.schemas.analysis import AnalysisRequest
from app.schemas.report import ComplianceStatus, JurisdictionMode, ReportSource
from app.services.fallback import (
    NO_CREDENTIAL_NOTE,
    PARSE_ERROR_NOTE,
    no_credential_report,
    parse_error_report,
)

SAMPLE_PHOTO = "data:image/jpeg;base64,AAAA"


def test_no_credential_report_is_marked():
    report = no_credential_report(AnalysisRequest(photos=[SAMPLE_PHOTO], address="1 Main St"))

    assert report.source is ReportSource.FALLBACK_NO_CREDENTIAL
    assert report.note == NO_CREDENTIAL_NOTE
    assert report.address == "1 Main St"
    assert report.zone_0_status is ComplianceStatus.VIOLATION
    assert report.fire_hazard_data.responsibility_area.value == "SRA"


def test_no_credential_report_is_deterministic():
    request = AnalysisRequest(photos=[SAMPLE_PHOTO], jurisdiction="san_diego")

    first = no_credential_report(request)
    second = no_credential_report(request)

    assert first.insurance_risk_score == second.insurance_risk_score
    assert first.hazards_detected == second.hazards_detected
    assert first.scan_id != second.scan_id
    assert first.jurisdiction_mode is JurisdictionMode.SAN_DIEGO
    assert first.fire_hazard_data.responsibility_area.value == "LRA"


def test_no_credential_remediation_from_catalog():
    report = no_credential_report(AnalysisRequest(photos=[SAMPLE_PHOTO]))

    titles = [action.title for action in report.remediation_plan]
    assert "Replace with non-combustible gravel or hardscape" in titles
    assert all(action.priority == 1 for action in report.remediation_plan)


def test_parse_error_report_without_matches():
    report = parse_error_report(AnalysisRequest(photos=[SAMPLE_PHOTO]), "garbled")

    assert report.source is ReportSource.FALLBACK_PARSE_ERROR
    assert report.note == PARSE_ERROR_NOTE
    assert report.zone_0_status is ComplianceStatus.WARNING
    assert len(report.hazards_detected) == 1
    assert report.remediation_plan[0].id == "fallback-manual-check"


def test_parse_error_report_with_matches():
    report = parse_error_report(
        AnalysisRequest(photos=[SAMPLE_PHOTO]),
        "Storage items and wooden fencing touch the house",
    )

    assert report.hazards_detected == [
        "Combustible fencing attached to structure within 5ft",
        "Boxes, containers, or combustible storage within 5ft",
    ]
    assert [a.id for a in report.remediation_plan] == ["fallback-wooden-fencing", "fallback-storage-items"]
