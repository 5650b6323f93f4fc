import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Depends
from fastapi.middleware.cors import CORSMiddleware

from app.config import settings
from app.dependencies import verify_api_key
from app.routers.analysis import router as analysis_router
from app.routers.reference import router as reference_router
from app.utils.exceptions import register_exception_handlers

SERVICE_NAME = "zone-zero-navigator"
VERSION = "0.1.0"

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.openai_api_key:
        logger.info("Analysis gateway ready: model=%s", settings.openai_model)
    else:
        logger.warning("OPENAI_API_KEY not set, /analyze will return demo reports")
    yield


app = FastAPI(
    title="Zone Zero Navigator API",
    description="Wildfire defensible space analysis from property photos",
    version=VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

_api_key_dep = [Depends(verify_api_key)]

app.include_router(analysis_router, dependencies=_api_key_dep)
app.include_router(reference_router, dependencies=_api_key_dep)


@app.get("/health")
async def health_check():
    return {
        "status": "ok",
        "service": SERVICE_NAME,
        "version": VERSION,
        "analysis_mode": "ai" if settings.openai_api_key else "demo",
    }
