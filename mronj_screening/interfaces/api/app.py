"""FastAPI web service for MRONJ Screening."""

import logging
from datetime import date
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from mronj_screening.config.settings import (
    API_HOST,
    API_PORT,
    CORS_ORIGINS,
    LOG_FORMAT,
    LOG_LEVEL,
    OUTPUT_LANGUAGE,
    SUPPORTED_LANGUAGES,
)
from mronj_screening.core.errors import ScreeningError
from mronj_screening.models.assessment import PROCEDURES
from mronj_screening.services.screening_service import ScreeningService

# Setup logging
logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)
logger = logging.getLogger(__name__)

# FastAPI app
app = FastAPI(title="MRONJ Screening API", version="1.0.0")

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class AssessRequest(BaseModel):
    """Request model for a screening."""
    intake: Dict[str, Any] = Field(..., description="Intake form payload (camelCase or snake_case keys)")
    today: Optional[date] = Field(None, description="Assessment date, defaults to the server date")
    language: Optional[str] = Field(None, description="zh-TW or en")


class AssessmentResponse(BaseModel):
    """Single procedure assessment."""
    procedure: str
    procedure_label: str
    risk_level: str
    risk_label: str
    recommendation: str
    rule_id: str


class AssessResponse(BaseModel):
    """Complete screening response."""
    assessed_on: date
    language: str
    exposure_months: int
    highest_risk: str
    summary: Dict[str, int]
    assessments: List[AssessmentResponse]


class ProcedureResponse(BaseModel):
    """Screened procedure in canonical order."""
    procedure: str
    label: str
    invasive: bool


service = ScreeningService()


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "language": service.language}


@app.get("/api/procedures", response_model=List[ProcedureResponse])
async def list_procedures(language: str = OUTPUT_LANGUAGE):
    """List screened procedures in report order."""
    if language not in SUPPORTED_LANGUAGES:
        raise HTTPException(status_code=400, detail=f"Unsupported language: {language}")

    return [
        ProcedureResponse(procedure=p.value, label=p.label(language), invasive=p.invasive)
        for p in PROCEDURES
    ]


@app.post("/api/assess", response_model=AssessResponse)
async def assess_patient(request: AssessRequest):
    """Screen one patient intake."""
    language = request.language or service.language
    if language not in SUPPORTED_LANGUAGES:
        raise HTTPException(status_code=400, detail=f"Unsupported language: {language}")

    try:
        result = service.screen(request.intake, today=request.today, language=language)
    except ScreeningError as e:
        logger.warning(f"Rejected intake: {e}")
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        logger.exception("Error screening intake")
        raise HTTPException(status_code=500, detail=f"Error screening intake: {str(e)}")

    return AssessResponse(
        assessed_on=result.assessed_on,
        language=result.language,
        exposure_months=result.exposure_months,
        highest_risk=result.highest_risk.value,
        summary=result.summary(),
        assessments=[
            AssessmentResponse(
                procedure=a.procedure.value,
                procedure_label=a.procedure.label(language),
                risk_level=a.risk_level.value,
                risk_label=a.risk_level.label(language),
                recommendation=a.recommendation,
                rule_id=a.rule_id,
            )
            for a in result.assessments
        ],
    )


def main():
    """Run the API with uvicorn."""
    import uvicorn
    uvicorn.run(app, host=API_HOST, port=API_PORT)


if __name__ == "__main__":
    main()
