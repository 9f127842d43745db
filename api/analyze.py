"""
API Endpoints for AI Reputation Analysis

FastAPI app that:
1. Receives analysis requests (research brief + selected AI engines)
2. Runs the reputation analysis in the background, one task at a time
3. Exposes live progress and the finished report per job
4. Renders the PDF report and emails it on request
"""

import logging
import os
import sys
import uuid
from datetime import datetime
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, BackgroundTasks, HTTPException
from pydantic import BaseModel, EmailStr, Field

from reputation import __version__
from reputation.analyzer import ClaudeAnalysisGateway
from reputation.collector import SemrushBacklinkGateway, create_client
from reputation.delivery import DeliveryRequest, EmailDelivery
from reputation.orchestration import (
    CancellationToken,
    InvalidBriefError,
    ProgressState,
    Report,
    ReputationAnalysisRunner,
    ResearchBrief,
    RunCancelled,
    TaskPlanner,
    get_all_engines,
)
from reputation.utils import get_settings

# Configure logging to stdout
logging.basicConfig(
    level=getattr(logging, get_settings().LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    stream=sys.stdout,
    force=True,
)
logger = logging.getLogger(__name__)

# Quiet down chatty loggers
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)

# Create FastAPI app
app = FastAPI(
    title="AI Reputation Report",
    description="Simulated AI search visibility and reputation analysis powered by Claude and SEMrush",
    version=__version__,
)


# ============================================================================
# REQUEST/RESPONSE MODELS
# ============================================================================

class LeaderInput(BaseModel):
    name: str = ""
    title: str = ""


class CompetitorInput(BaseModel):
    name: str = ""
    website: Optional[str] = None
    leader: Optional[LeaderInput] = None


class BriefInput(BaseModel):
    """Research brief as entered by the operator."""
    company_name: str = Field(..., description="Company to analyze")
    website: Optional[str] = None
    industry: Optional[str] = None
    keywords: Optional[str] = Field(
        default=None,
        description="Free-text focus areas, added to the company query"
    )
    leaders: List[LeaderInput] = Field(default_factory=list)
    competitors: List[CompetitorInput] = Field(default_factory=list)

    def to_brief(self) -> ResearchBrief:
        return ResearchBrief.from_dict(self.model_dump())


class AnalysisRequest(BaseModel):
    """Request to trigger a reputation analysis."""
    brief: BriefInput
    engines: Optional[List[str]] = Field(
        default=None,
        description="AI engine ids to simulate (defaults to DEFAULT_ENGINES)"
    )


class AnalysisResponse(BaseModel):
    """Response after triggering analysis."""
    job_id: str
    company_name: str
    engines: List[str]
    total_tasks: int
    status: str
    message: str


class JobStatus(BaseModel):
    """Status of an analysis job."""
    job_id: str
    company_name: str
    status: str  # pending, running, completed, failed, cancelled
    progress: Dict[str, Any] = Field(default_factory=lambda: ProgressState().to_dict())
    total_tasks: int = 0
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    error: Optional[str] = None
    report: Optional[Dict[str, Any]] = None


class SendReportRequest(BaseModel):
    """Request to email the PDF report."""
    recipient_name: str = Field(..., min_length=1)
    recipient_company: str = Field(..., min_length=1)
    recipient_email: EmailStr
    report: Dict[str, Any]


class SendReportResponse(BaseModel):
    success: bool
    message: str
    email_id: Optional[str] = None


# ============================================================================
# IN-MEMORY JOB TRACKING
# ============================================================================

jobs: Dict[str, JobStatus] = {}
cancellation_tokens: Dict[str, CancellationToken] = {}


# ============================================================================
# API ENDPOINTS
# ============================================================================

@app.get("/")
async def root():
    """Health check endpoint."""
    return {"status": "ok", "service": "AI Reputation Report"}


@app.get("/api/health")
async def health():
    """Detailed health check."""
    return {
        "status": "healthy",
        "timestamp": datetime.now().isoformat(),
        "version": __version__,
        "jobs_in_queue": len([j for j in jobs.values() if j.status == "running"]),
    }


@app.get("/api/diagnostics")
async def diagnostics():
    """Report which provider keys are configured (values are never returned)."""
    settings = get_settings()

    def check(key: Optional[str], required: bool) -> Dict[str, Any]:
        if not key:
            return {"status": "FAIL" if required else "NOT_SET", "configured": False}
        return {"status": "PASS", "configured": True, "length": len(key)}

    anthropic_check = check(settings.ANTHROPIC_API_KEY, required=True)
    if settings.ANTHROPIC_API_KEY:
        anthropic_check["format"] = (
            "Valid" if settings.ANTHROPIC_API_KEY.startswith("sk-ant-") else "Warning: unexpected format"
        )

    return {
        "timestamp": datetime.now().isoformat(),
        "environment": settings.ENVIRONMENT,
        "checks": {
            "anthropic": anthropic_check,
            "semrush": check(settings.SEMRUSH_API_KEY, required=False),
            "resend": check(settings.RESEND_API_KEY, required=False),
        },
    }


@app.get("/api/engines")
async def list_engines():
    """Available AI search engines and the default selection."""
    return {
        "engines": [
            {"id": engine.id, "name": engine.name, "color": engine.color}
            for engine in get_all_engines()
        ],
        "defaults": get_settings().default_engine_ids,
    }


@app.post("/api/analyze", response_model=AnalysisResponse)
async def trigger_analysis(
    request: AnalysisRequest,
    background_tasks: BackgroundTasks
):
    """
    Trigger a reputation analysis.

    This endpoint:
    1. Validates the brief and engine selection
    2. Creates a job
    3. Starts background processing
    4. Returns immediately with job ID
    """
    settings = get_settings()

    if len(request.brief.leaders) > settings.MAX_LEADERS:
        raise HTTPException(status_code=400, detail=f"At most {settings.MAX_LEADERS} leaders allowed")
    if len(request.brief.competitors) > settings.MAX_COMPETITORS:
        raise HTTPException(status_code=400, detail=f"At most {settings.MAX_COMPETITORS} competitors allowed")

    brief = request.brief.to_brief()
    engine_ids = request.engines if request.engines is not None else settings.default_engine_ids

    # Plan up front so validation errors surface as 400 instead of a failed job
    try:
        plan = TaskPlanner().plan(brief, engine_ids)
    except InvalidBriefError as e:
        raise HTTPException(status_code=400, detail=str(e))

    if not settings.ANTHROPIC_API_KEY:
        raise HTTPException(status_code=500, detail="ANTHROPIC_API_KEY not configured")

    # Generate job ID
    job_id = str(uuid.uuid4())[:8]

    jobs[job_id] = JobStatus(
        job_id=job_id,
        company_name=brief.company_name,
        status="pending",
        total_tasks=plan.total,
    )
    cancellation_tokens[job_id] = CancellationToken()

    logger.info(
        f"Analysis requested: {brief.company_name} (job: {job_id}), "
        f"engines={','.join(engine_ids)}, tasks={plan.total}"
    )

    background_tasks.add_task(
        run_analysis,
        job_id=job_id,
        brief=brief,
        engine_ids=list(engine_ids),
    )

    return AnalysisResponse(
        job_id=job_id,
        company_name=brief.company_name,
        engines=list(engine_ids),
        total_tasks=plan.total,
        status="pending",
        message=f"Analysis started ({plan.total} analyses). Poll /api/jobs/{job_id} for progress.",
    )


@app.get("/api/jobs/{job_id}", response_model=JobStatus)
async def get_job_status(job_id: str):
    """Get status, live progress and (when complete) the report of a job."""
    if job_id not in jobs:
        raise HTTPException(status_code=404, detail="Job not found")

    return jobs[job_id]


@app.post("/api/jobs/{job_id}/cancel")
async def cancel_job(job_id: str):
    """Request cancellation; the run stops before its next provider call."""
    if job_id not in jobs:
        raise HTTPException(status_code=404, detail="Job not found")

    job = jobs[job_id]
    if job.status not in ("pending", "running"):
        raise HTTPException(status_code=409, detail=f"Job is already {job.status}")

    cancellation_tokens[job_id].cancel()
    logger.info(f"[{job_id}] Cancellation requested")
    return {"job_id": job_id, "status": "cancelling"}


@app.post("/api/send-report", response_model=SendReportResponse)
async def send_report(request: SendReportRequest):
    """Render the PDF report and email it to the recipient."""
    settings = get_settings()
    if not settings.RESEND_API_KEY:
        raise HTTPException(status_code=500, detail="Email service not configured (RESEND_API_KEY)")

    try:
        report = Report.from_dict(request.report)
    except (AttributeError, TypeError, ValueError) as e:
        raise HTTPException(status_code=400, detail=f"Invalid report data: {e}")

    if not report.company_name:
        raise HTTPException(status_code=400, detail="Report data is required")

    delivery = EmailDelivery(api_key=settings.RESEND_API_KEY, from_email=settings.FROM_EMAIL)
    result = await delivery.send_report(DeliveryRequest(
        recipient_name=request.recipient_name,
        recipient_company=request.recipient_company,
        recipient_email=str(request.recipient_email),
        report=report,
    ))

    if not result.success:
        raise HTTPException(status_code=502, detail=f"Failed to send email: {result.error}")

    return SendReportResponse(
        success=True,
        message=f"Report sent to {request.recipient_email}",
        email_id=result.message_id,
    )


# ============================================================================
# BACKGROUND PROCESSING
# ============================================================================

async def run_analysis(
    job_id: str,
    brief: ResearchBrief,
    engine_ids: List[str],
):
    """
    Run the full analysis in background.

    Steps:
    1. Update job status to running
    2. Build the Claude and (optional) SEMrush gateways
    3. Run the analysis, mirroring progress into the job
    4. Store the report and mark the job completed
    """
    settings = get_settings()
    job = jobs[job_id]

    job.status = "running"
    job.started_at = datetime.now()

    logger.info(f"[{job_id}] Starting analysis for {brief.company_name}")

    def on_progress(state: ProgressState):
        job.progress = state.to_dict()

    semrush_client = None
    claude = None

    try:
        claude = ClaudeAnalysisGateway.from_settings(settings)

        semrush_client = create_client(settings)
        backlink_gateway = (
            SemrushBacklinkGateway(semrush_client, settings.TOP_BACKLINKS_LIMIT)
            if semrush_client else None
        )

        runner = ReputationAnalysisRunner(
            analysis_gateway=claude,
            backlink_gateway=backlink_gateway,
            on_progress=on_progress,
            timeout=settings.analysis_timeout,
        )
        report = await runner.run(brief, engine_ids, cancellation_token=cancellation_tokens.get(job_id))

        job.report = report.to_dict()
        job.status = "completed"
        job.completed_at = datetime.now()

        usage = claude.get_usage_summary()
        logger.info(
            f"[{job_id}] Job completed: {report.result_count} results, "
            f"{usage['total_calls']} Claude calls, ${usage['estimated_cost']:.2f}"
        )

    except RunCancelled:
        logger.info(f"[{job_id}] Analysis cancelled")
        job.status = "cancelled"
        job.completed_at = datetime.now()

    except Exception as e:
        logger.exception(f"[{job_id}] Analysis failed: {e}")
        job.status = "failed"
        job.completed_at = datetime.now()
        job.error = str(e)

    finally:
        cancellation_tokens.pop(job_id, None)
        if semrush_client:
            await semrush_client.close()
        if claude:
            await claude.close()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=int(os.getenv("PORT", "8000")))
