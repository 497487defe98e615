"""
FastAPI interface for the Database Agent System

POST /design, /build, /sample-data, /analyze and /workflow expose the agents
and the full workflow over JSON.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field
from starlette.exceptions import HTTPException as StarletteHTTPException

from database_agents.agents.agent_planner import WorkflowPlanner
from database_agents.config.config import Config
from database_agents.config.state import (
    AnalysisResult,
    BuildResult,
    SampleDataResult,
    WorkflowResult,
)

logger = logging.getLogger(__name__)

API_KEY_ERROR = "OpenAI API key not configured. Please set your API key in the .env file."

# Global planner instance, created on first use
planner: Optional[WorkflowPlanner] = None


def get_planner() -> WorkflowPlanner:
    """Return the shared workflow planner"""
    global planner
    if planner is None:
        planner = WorkflowPlanner()
    return planner


@asynccontextmanager
async def lifespan(app: FastAPI):
    Config.configure_logging()
    logger.info("Database Agent System API starting")
    logger.info("Available endpoints: POST /design, /build, /sample-data, /analyze, /workflow")
    if not Config.is_api_key_configured():
        logger.warning(API_KEY_ERROR)
    yield
    if planner is not None:
        planner.close()


app = FastAPI(
    title="Database Agent System",
    description="LLM agents that design, build and analyze SQLite databases",
    lifespan=lifespan
)


class DesignRequest(BaseModel):
    requirements: Optional[str] = None


class DesignResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool
    schema_text: str = Field(alias="schema")


class BuildRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    schema_text: Optional[str] = Field(default=None, alias="schema")


class AnalyzeRequest(BaseModel):
    request: Optional[str] = None


class WorkflowRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    requirements: Optional[str] = None
    request: Optional[str] = None
    include_sample_data: bool = Field(default=False, alias="includeSampleData")


def _require(value: Optional[str], message: str) -> str:
    if not value or not value.strip():
        raise HTTPException(status_code=400, detail=message)
    return value


@app.middleware("http")
async def require_api_key(request: Request, call_next):
    """Refuse every request while no OpenAI key is configured"""
    if not Config.is_api_key_configured():
        return JSONResponse(status_code=500, content={"error": API_KEY_ERROR})
    return await call_next(request)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"success": False, "error": exc.detail})


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = "; ".join(
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}" for error in exc.errors()
    )
    return JSONResponse(status_code=400, content={"success": False, "error": errors})


@app.get("/health")
def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "database_path": Config.DATABASE_PATH,
        "model": Config.OPENAI_MODEL
    }


@app.post("/design", response_model=DesignResponse)
def design(body: Optional[DesignRequest] = None, agent_planner: WorkflowPlanner = Depends(get_planner)):
    """Design a database schema"""
    requirements = _require(body.requirements if body else None, "Requirements are required")
    try:
        schema = agent_planner.design_schema(requirements)
    except Exception as e:
        logger.error(f"Error designing schema: {e}")
        raise HTTPException(status_code=500, detail=str(e))
    return DesignResponse(success=True, schema_text=schema)


@app.post("/build", response_model=BuildResult, response_model_exclude_none=True)
def build(body: Optional[BuildRequest] = None, agent_planner: WorkflowPlanner = Depends(get_planner)):
    """Build a database from a schema"""
    schema = _require(body.schema_text if body else None, "Schema is required")
    try:
        return agent_planner.build_database(schema)
    except Exception as e:
        logger.error(f"Error building database: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@app.post("/sample-data", response_model=SampleDataResult)
def sample_data(agent_planner: WorkflowPlanner = Depends(get_planner)):
    """Add sample data to the database"""
    try:
        return agent_planner.add_sample_data()
    except Exception as e:
        logger.error(f"Error adding sample data: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@app.post("/analyze", response_model=AnalysisResult, response_model_exclude_none=True)
def analyze(body: Optional[AnalyzeRequest] = None, agent_planner: WorkflowPlanner = Depends(get_planner)):
    """Analyze data based on a request"""
    request = _require(body.request if body else None, "Request is required")
    try:
        return agent_planner.analyze(request)
    except Exception as e:
        logger.error(f"Error analyzing data: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@app.post("/workflow", response_model=WorkflowResult, response_model_exclude_none=True)
def workflow(body: Optional[WorkflowRequest] = None, agent_planner: WorkflowPlanner = Depends(get_planner)):
    """Run the entire workflow"""
    requirements = _require(body.requirements if body else None, "Requirements are required")
    request = _require(body.request, "Request is required")
    try:
        return agent_planner.run_workflow(requirements, request, body.include_sample_data)
    except Exception as e:
        logger.error(f"Error in workflow: {e}")
        raise HTTPException(status_code=500, detail=str(e))


if __name__ == "__main__":
    uvicorn.run(app, host=Config.HOST, port=Config.PORT)
