"""
FastAPI application for the Unity log reader.

Features:
- Splits raw Unity Editor/Player log text into typed entries
- Collapses repeated log statements
- Short call stack summaries and optional parsed frames
- HTML report rendering
- Stateless: every request parses its own text, nothing is stored
"""
from fastapi import FastAPI, HTTPException
from fastapi.responses import HTMLResponse
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field
from typing import List, Optional, Dict, Any
import logging

from unitylog import (
    LogSegmenter, SegmenterOptions, UnrecognizedInputError,
    filter_entries, compute_statistics, parse_severities, get_settings
)
from unitylog.config import configure_logging
from unitylog.report_generator import ReportGenerator

logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="Unity Log Reader",
    description="Reads Unity3D Player and Editor logs from development and release builds",
    version="1.0.0"
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Request/Response Models
class ParseRequest(BaseModel):
    text: Any = None
    count: Optional[int] = Field(default=None, description="Lines in each short callstack")
    no_collapse: bool = False
    collapse_order: Optional[str] = None
    severities: Optional[List[str]] = None
    search: Optional[str] = None
    include_frames: bool = False


class ParseResponse(BaseModel):
    records: List[Optional[Dict[str, Any]]]
    statistics: Dict[str, Any]
    fallback: bool


def build_options(request: ParseRequest) -> SegmenterOptions:
    """Merge request overrides with configured defaults."""
    settings = get_settings()
    try:
        return settings.segmenter.to_options(
            count=request.count,
            collapse=False if request.no_collapse else None,
            collapse_order=request.collapse_order,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


def parse_request(request: ParseRequest):
    """Run the segmenter for a request and apply its filters."""
    options = build_options(request)
    try:
        severities = parse_severities(request.severities)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    segmenter = LogSegmenter(options)
    try:
        entries = segmenter.segment(request.text, source="body.text")
    except UnrecognizedInputError as e:
        raise HTTPException(status_code=422, detail=e.to_dict())

    fallback = compute_statistics(entries)["fallback"]
    entries = filter_entries(entries, severities=severities, search=request.search)
    return segmenter, entries, fallback


# API Endpoints

@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "Unity Log Reader API",
        "version": "1.0.0",
        "usage": "POST the contents of Player.log or Editor.log to /api/parse"
    }


@app.get("/api/health")
async def health_check():
    """Health check endpoint."""
    settings = get_settings()
    return {
        "status": "healthy",
        "defaults": {
            "count": settings.segmenter.count,
            "collapse": settings.segmenter.collapse,
            "collapse_order": settings.segmenter.collapse_order
        }
    }


@app.post("/api/parse", response_model=ParseResponse)
def parse_log_text(request: ParseRequest):
    """
    Parse raw log text into records with ``type``, ``message`` and ``short``.
    Set ``include_frames`` to also get the parsed call stack of each entry.
    """
    segmenter, entries, fallback = parse_request(request)
    statistics = compute_statistics(entries)
    logger.info("Parsed %d entries", statistics["total_entries"])

    return ParseResponse(
        records=segmenter.to_records(entries, include_frames=request.include_frames),
        statistics=statistics,
        fallback=fallback
    )


@app.post("/api/report", response_class=HTMLResponse)
def render_report(request: ParseRequest):
    """Render the parsed log as an HTML report."""
    segmenter, entries, _ = parse_request(request)
    settings = get_settings()

    generator = ReportGenerator(title=settings.report.title)
    return HTMLResponse(content=generator.render(entries, segmenter.options.summary_lines))


if __name__ == "__main__":
    import uvicorn
    settings = get_settings()
    configure_logging(settings)

    uvicorn.run(
        "app:app",
        host=settings.app.host,
        port=settings.app.port,
        reload=settings.app.debug
    )
