from typing import Any


def error_response(message: str, details: Any = None) -> dict:
    body: dict = {"error": message}
    if details is not None:
        body["details"] = details
    return body


def report_response(report) -> dict:
    """Serialize a ComplianceReport to the JSON body returned by /analyze."""
    return report.model_dump(mode="json", by_alias=True)
