"""
Calendar Voice Skill - Main FastAPI Application
Receives voice platform request envelopes and answers with spoken responses.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse

from .agent.envelope import SkillRequest
from .agent.graph import run_skill
from .agent.services import SkillServices
from .utils.config import settings
from .utils.logger import logger


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Log configuration on startup and shutdown."""
    logger.info("Starting Calendar Voice Skill")
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"Default timezone: {settings.default_timezone}")
    yield
    logger.info("Shutting down Calendar Voice Skill")

# Initialize FastAPI app
app = FastAPI(
    title="Calendar Voice Skill",
    description="Voice skill backend for checking availability and scheduling Google Calendar events",
    version="1.0.0",
    lifespan=lifespan
)

services = SkillServices()

@app.get("/")
async def root():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "service": "Calendar Voice Skill",
        "version": "1.0.0"
    }

@app.get("/health")
async def health_check():
    """Detailed health check."""
    return {
        "status": "healthy",
        "components": {
            "api": "operational",
            "preferences": str(services.preference_store.directory),
            "default_timezone": settings.default_timezone
        }
    }

@app.post("/alexa")
async def handle_skill_request(request: Request):
    """
    Skill endpoint.

    Request body: the voice platform's request envelope.
    Response body: the response envelope with speech and session attributes.
    """
    try:
        envelope = await request.json()
    except ValueError:
        raise HTTPException(status_code=400, detail="Request body must be JSON")

    if not isinstance(envelope, dict):
        raise HTTPException(status_code=400, detail="Request body must be a JSON object")

    if settings.skill_id:
        try:
            application_id = SkillRequest.from_envelope(envelope).application_id
        except ValueError:
            raise HTTPException(status_code=400, detail="Malformed request envelope")

        if application_id != settings.skill_id:
            logger.warning(f"Rejected request for application: {application_id}")
            raise HTTPException(status_code=403, detail="Unknown application id")

    response = await run_skill(envelope, services)
    return JSONResponse(content=response)

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "calendar_skill.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.environment == "development",
        log_level="info"
    )
