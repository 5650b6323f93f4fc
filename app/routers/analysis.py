from fastapi import APIRouter

from app.schemas.analysis import AnalysisRequest
from app.services.analysis_gateway import analyze
from app.utils.response import report_response

router = APIRouter(tags=["analysis"])


@router.post("/analyze")
async def analyze_photos(payload: AnalysisRequest):
    report = await analyze(payload)
    return report_response(report)
