import logging

import httpx

from app.client.scan import ScanResult, ScanSession
from app.schemas.report import ComplianceReport
from app.utils.exceptions import AppException

logger = logging.getLogger(__name__)

RETRY_MESSAGE = "Analysis failed. Please try again."


class ScanInProgress(AppException):
    def __init__(self):
        super().__init__("An analysis is already running for this session", status_code=409)


class AnalysisClient:
    """Submits a session's draft to the analysis gateway, one request at a time."""

    def __init__(
        self,
        base_url: str,
        api_key: str = "",
        timeout: float = 90.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url
        self.api_key = api_key
        self.timeout = timeout
        self.transport = transport

    def _headers(self) -> dict:
        return {"X-API-Key": self.api_key} if self.api_key else {}

    async def submit(self, session: ScanSession) -> ScanResult | None:
        """Send the draft; returns the stored result, or None after a failure.

        Raises InvalidRequest (nothing is sent) when no photos are attached.
        """
        if session.in_flight:
            raise ScanInProgress()

        request = session.draft.build_request()
        session.begin()

        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self.transport,
                headers=self._headers(),
            ) as client:
                response = await client.post("/analyze", json=request.model_dump(exclude_none=True))

            if response.status_code != 200:
                try:
                    body = response.json()
                except ValueError:
                    body = None
                detail = body.get("error", "") if isinstance(body, dict) else ""
                logger.warning("Analysis request failed: HTTP %d %s", response.status_code, detail)
                session.fail(f"{RETRY_MESSAGE} ({detail})" if detail else RETRY_MESSAGE)
                return None

            report = ComplianceReport.model_validate(response.json())
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("Analysis request failed: %s", e)
            session.fail(RETRY_MESSAGE)
            return None
        except Exception:
            # release the session so the user can retry, then let the error surface
            logger.exception("Unexpected error while submitting analysis")
            session.fail(RETRY_MESSAGE)
            raise

        result = ScanResult(
            report=report,
            address=session.draft.address,
            photos=tuple(request.photos or ()),
        )
        session.complete(result)
        logger.info("Stored report %s (source=%s)", report.scan_id, report.source.value)
        return result
