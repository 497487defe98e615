from typing import Dict, List, Any, Optional
from pydantic import BaseModel, ConfigDict, Field


class ExecResult(BaseModel):
    """Outcome of a single mutating statement"""
    last_insert_id: Optional[int] = None
    rows_changed: int = 0


class BuildResult(BaseModel):
    """Result of building a database from a schema"""
    success: bool
    message: str
    statements: Optional[List[str]] = None


class SampleDataResult(BaseModel):
    """Result of loading the sample data"""
    success: bool
    message: str


class AnalysisResult(BaseModel):
    """Result of answering a data request"""
    success: bool
    query: Optional[str] = None
    results: Optional[List[Dict[str, Any]]] = None
    insights: Optional[str] = None
    message: Optional[str] = None
    agent_response: Optional[str] = Field(default=None, description="Raw reply that contained the SQL query")


class WorkflowResult(BaseModel):
    """Outcome of the full design, build, sample data and analysis workflow"""
    model_config = ConfigDict(populate_by_name=True)

    success: bool
    step: Optional[str] = Field(default=None, description="Name of the step that failed")
    error: Optional[str] = None
    schema_text: Optional[str] = Field(default=None, alias="schema")
    build_result: Optional[BuildResult] = None
    sample_data_result: Optional[SampleDataResult] = None
    analysis_result: Optional[AnalysisResult] = None


class WorkflowState(BaseModel):
    """State maintained throughout the agent workflow"""

    # User input
    requirements: str = Field(description="Natural-language database requirements")
    request: str = Field(description="Natural-language analysis request")
    include_sample_data: bool = Field(default=False, description="Load the sample data before analysis")
    current_step: str = Field(default="start", description="Current step in the workflow")

    # Step outputs
    schema_text: Optional[str] = Field(default=None, description="Schema produced by the designer")
    build_result: Optional[BuildResult] = None
    sample_data_result: Optional[SampleDataResult] = None
    schema_info: Optional[str] = Field(default=None, description="Schema summary of the built database")
    analysis_result: Optional[AnalysisResult] = None

    # Error handling
    failed_step: Optional[str] = Field(default=None, description="Name of the step that failed")
    error: Optional[str] = None

    def has_failed(self) -> bool:
        return self.failed_step is not None

    def to_result(self) -> WorkflowResult:
        """Build the public workflow result; steps after a failure are left out"""
        return WorkflowResult(
            success=not self.has_failed(),
            step=self.failed_step,
            error=self.error,
            schema_text=self.schema_text,
            build_result=self.build_result,
            sample_data_result=self.sample_data_result,
            analysis_result=self.analysis_result,
        )
