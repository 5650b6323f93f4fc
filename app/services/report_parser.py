"""Turn the model's free-text reply into a validated ComplianceReport."""
import json
import logging
import uuid
from datetime import datetime, timezone
from typing import Any

from pydantic import ValidationError

from app.schemas.report import ComplianceReport, JurisdictionMode, ReportSource
from app.utils.exceptions import FallbackSubstitution

logger = logging.getLogger(__name__)


def new_scan_id(now: datetime | None = None) -> str:
    now = now or datetime.now(timezone.utc)
    return f"scan-{now.strftime('%Y%m%d%H%M%S')}-{uuid.uuid4().hex[:8]}"


def extract_json(raw_text: str) -> dict:
    """Parse the span from the first '{' to the last '}' of the reply.

    Prose and markdown fences around the object are ignored.
    """
    text = (raw_text or "").strip()
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end <= start:
        raise FallbackSubstitution("No JSON object in model reply", raw_text=raw_text)

    try:
        parsed = json.loads(text[start : end + 1])
    except json.JSONDecodeError as e:
        raise FallbackSubstitution(f"Model reply is not valid JSON: {e}", raw_text=raw_text)

    if not isinstance(parsed, dict):
        raise FallbackSubstitution("Model reply is not a JSON object", raw_text=raw_text)
    return parsed


def finalize_payload(
    payload: dict[str, Any],
    *,
    jurisdiction_mode: JurisdictionMode,
    address: str | None,
    source: ReportSource,
    note: str | None = None,
) -> dict[str, Any]:
    """Apply the fields the gateway owns, whatever path produced the payload."""
    data = dict(payload)

    scan_id = data.get("scan_id")
    if not isinstance(scan_id, str) or not scan_id.strip():
        data["scan_id"] = new_scan_id()
        logger.info("Synthesized scan_id %s", data["scan_id"])

    reported_mode = data.get("jurisdiction_mode")
    if reported_mode not in (None, jurisdiction_mode.value):
        logger.warning(
            "Model reported jurisdiction %r, keeping requested %s", reported_mode, jurisdiction_mode.value
        )
    data["jurisdiction_mode"] = jurisdiction_mode.value

    timestamp = data.get("timestamp")
    if not isinstance(timestamp, str) or not timestamp.strip():
        data["timestamp"] = datetime.now(timezone.utc).isoformat()

    if address:
        data["address"] = address
    elif not isinstance(data.get("address"), str):
        data["address"] = None

    data["source"] = source.value
    data["note"] = note
    return data


def parse_report(
    raw_text: str,
    *,
    jurisdiction_mode: JurisdictionMode,
    address: str | None,
) -> ComplianceReport:
    """Build a report from a model reply, raising FallbackSubstitution on failure."""
    payload = extract_json(raw_text)
    data = finalize_payload(
        payload,
        jurisdiction_mode=jurisdiction_mode,
        address=address,
        source=ReportSource.AI,
    )
    try:
        return ComplianceReport.model_validate(data)
    except ValidationError as e:
        fields = sorted({".".join(str(p) for p in err["loc"]) for err in e.errors()})
        raise FallbackSubstitution(
            f"Model reply does not match the report schema: {', '.join(fields)}",
            raw_text=raw_text,
        )
