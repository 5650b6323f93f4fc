import logging

import openai
from openai import AsyncOpenAI

from app.config import settings
from app.schemas.analysis import AnalysisRequest
from app.schemas.report import ComplianceReport
from app.services.fallback import no_credential_report, parse_error_report
from app.services.photos import EncodedPhoto, decode_photos
from app.services.prompt_builder import build_prompt
from app.services.report_parser import parse_report
from app.utils.exceptions import FallbackSubstitution, UpstreamError

logger = logging.getLogger(__name__)


def _build_api_kwargs(model: str, content: list[dict]) -> dict:
    """Build OpenAI API kwargs based on model type."""
    api_kwargs: dict = {
        "model": model,
        "messages": [{"role": "user", "content": content}],
    }

    if model.startswith("o"):
        # o-series reasoning models: no temperature, max_completion_tokens
        api_kwargs["max_completion_tokens"] = settings.openai_max_tokens * 2
    else:
        api_kwargs["max_tokens"] = settings.openai_max_tokens
        api_kwargs["temperature"] = settings.openai_temperature

    return api_kwargs


def _build_content(prompt: str, photos: list[EncodedPhoto]) -> list[dict]:
    content: list[dict] = [{"type": "text", "text": prompt}]
    for photo in photos:
        content.append({
            "type": "image_url",
            "image_url": {
                "url": photo.data_url,
                "detail": "high",
            },
        })
    return content


async def _call_model(prompt: str, photos: list[EncodedPhoto]) -> str:
    """Send the prompt and photos to the model and return its raw reply text.

    No retries: any transport failure, timeout or non-2xx reply is an
    UpstreamError.
    """
    model = settings.openai_model
    client_kwargs: dict = {
        "api_key": settings.openai_api_key,
        "timeout": settings.upstream_timeout_seconds,
        "max_retries": 0,
    }
    if settings.openai_base_url:
        client_kwargs["base_url"] = settings.openai_base_url

    api_kwargs = _build_api_kwargs(model, _build_content(prompt, photos))
    logger.info("OpenAI request: model=%s, photos=%d", model, len(photos))

    try:
        async with AsyncOpenAI(**client_kwargs) as client:
            response = await client.chat.completions.create(**api_kwargs)
    except openai.APIStatusError as e:
        logger.error("OpenAI returned HTTP %s: %s", e.status_code, e.message)
        raise UpstreamError(details={"status_code": e.status_code, "provider_error": e.body or e.message})
    except openai.APITimeoutError:
        logger.error("OpenAI request timed out after %ss", settings.upstream_timeout_seconds)
        raise UpstreamError(details={"provider_error": "Request to the model provider timed out"})
    except openai.APIConnectionError as e:
        logger.error("OpenAI connection failed: %s", e)
        raise UpstreamError(details={"provider_error": str(e)})

    raw_text = ""
    if response.choices:
        raw_text = response.choices[0].message.content or ""
    logger.info("OpenAI raw response (%d chars): %s", len(raw_text), raw_text[:500])
    return raw_text


async def analyze(request: AnalysisRequest) -> ComplianceReport:
    """Analyze the request's photos and return a compliance report.

    Raises InvalidRequest for bad input and UpstreamError when the model call
    fails. Without a credential, or when the reply cannot be parsed, a
    fallback report is returned with its ``source`` set accordingly.
    """
    photos = decode_photos(request.photos)
    jurisdiction = request.resolved_jurisdiction

    if not settings.openai_api_key:
        logger.warning("OPENAI_API_KEY not configured, returning demo report")
        return no_credential_report(request)

    prompt = build_prompt(jurisdiction, len(photos), request.address)
    raw_text = await _call_model(prompt, photos)

    try:
        report = parse_report(
            raw_text,
            jurisdiction_mode=request.jurisdiction_mode,
            address=request.address,
        )
    except FallbackSubstitution as e:
        logger.warning("Substituting fallback report: %s", e.message)
        return parse_error_report(request, e.raw_text)

    logger.info(
        "Analysis %s completed: status=%s score=%d hazards=%d",
        report.scan_id,
        report.zone_0_status.value,
        report.insurance_risk_score,
        len(report.hazards_detected),
    )
    return report
