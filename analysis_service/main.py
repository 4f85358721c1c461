import logging
from contextlib import asynccontextmanager
from datetime import datetime

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware

from analysis_service.config import get_settings
from analysis_service.core.dream_analyzer import DreamAnalyzer, build_analyzer
from analysis_service.core.errors import AnalysisError, ModelUnavailable, ServiceNotConfigured
from analysis_service.core.insights import AnalysisResult, DreamInput
from analysis_service.core.logging import setup_logging

logger = logging.getLogger(__name__)

ERROR_STATUS = {
    ServiceNotConfigured: 503,
    ModelUnavailable: 502,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    setup_logging(settings.LOG_LEVEL, settings.LOG_FORMAT)
    app.state.settings = settings
    app.state.analyzer = build_analyzer(settings)
    yield
    app.state.analyzer = None


app = FastAPI(
    title="Lunarly Dream Analysis API",
    description="Stateless dream interpretation engine backed by Gemini",
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def get_analyzer(request: Request) -> DreamAnalyzer:
    analyzer = getattr(request.app.state, "analyzer", None)
    if analyzer is None:
        raise HTTPException(
            status_code=503,
            detail={"kind": "service-not-configured", "message": "Service not initialized"},
        )
    return analyzer


@app.get("/")
def root():
    return {"message": "Lunarly Dream Analysis API", "version": "1.0.0"}


@app.post("/analyze", response_model=AnalysisResult, response_model_by_alias=True)
def analyze_dream(
    dream: DreamInput,
    analyzer: DreamAnalyzer = Depends(get_analyzer)
):
    """Interpret a single dream and return the prompt, raw reply and insights."""
    try:
        return analyzer.analyze(dream)
    except AnalysisError as e:
        raise HTTPException(
            status_code=ERROR_STATUS.get(type(e), 500),
            detail={"kind": e.kind, "message": e.message},
        )
    except Exception:
        logger.exception("Unexpected error analyzing dream")
        raise HTTPException(
            status_code=500,
            detail={"kind": "internal", "message": "Failed to analyze dream"},
        )


@app.get("/models")
def get_models(analyzer: DreamAnalyzer = Depends(get_analyzer)):
    """Ranked model candidates, most economical first."""
    if analyzer.offline:
        return {"engine": "offline", "models": []}
    return {"engine": "gemini", "models": analyzer.invoker.models}


@app.get("/health")
def health_check():
    return {"status": "healthy", "timestamp": datetime.now().isoformat()}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "analysis_service.main:app",
        host="0.0.0.0",
        port=8001,
        reload=True,
        log_level="info"
    )
