from typing import Dict, Any, Optional
from langgraph.graph import StateGraph, END
from database_agents.agents.analyst import DatabaseAnalystAgent
from database_agents.agents.designer import DatabaseDesignerAgent
from database_agents.agents.engineer import DataEngineerAgent
from database_agents.config.state import (
    AnalysisResult,
    BuildResult,
    SampleDataResult,
    WorkflowResult,
    WorkflowState,
)
from database_agents.tools.database_manager import DatabaseManager
from database_agents.tools.llm_manager import LLMManager
from database_agents.tools.sample_data import add_sample_data
import logging

logger = logging.getLogger(__name__)

SAMPLE_DATA_SKIPPED = "Sample data not included"


class WorkflowPlanner:
    """Main planner that wires the agents together and runs the workflow using LangGraph"""

    def __init__(self, llm_manager: Optional[LLMManager] = None,
                 db_manager: Optional[DatabaseManager] = None):
        """Initialize the planner; missing collaborators are built from Config"""
        self.llm_manager = llm_manager or LLMManager()
        self.db_manager = db_manager or DatabaseManager()

        self.designer = DatabaseDesignerAgent(self.llm_manager)
        self.engineer = DataEngineerAgent(self.llm_manager, self.db_manager)
        self.analyst = DatabaseAnalystAgent(self.llm_manager, self.db_manager)

        self.workflow = self._build_workflow()

        logger.info("Workflow planner initialized successfully")

    # Single-step operations

    def design_schema(self, requirements: str) -> str:
        return self.designer.design_schema(requirements)

    def build_database(self, schema: str) -> BuildResult:
        return self.engineer.build_database(schema)

    def add_sample_data(self) -> SampleDataResult:
        return add_sample_data(self.db_manager)

    def get_schema_info(self) -> str:
        return self.analyst.get_schema_info()

    def get_table_row_counts(self) -> Dict[str, int]:
        """Row count of every user table"""
        return {
            table: self.db_manager.get_table_row_count(table)
            for table in self.db_manager.get_table_names()
        }

    def analyze(self, request: str) -> AnalysisResult:
        """Describe the live database and answer the request against it"""
        schema_info = self.analyst.get_schema_info()
        return self.analyst.analyze_data(request, schema_info)

    # Workflow graph

    def _build_workflow(self):
        """Build the LangGraph workflow"""
        workflow = StateGraph(WorkflowState)

        # Add nodes for each step
        workflow.add_node("design_schema", self._design_schema_node)
        workflow.add_node("build_database", self._build_database_node)
        workflow.add_node("add_sample_data", self._add_sample_data_node)
        workflow.add_node("analyze_data", self._analyze_data_node)

        workflow.set_entry_point("design_schema")

        # Stop at the first failing step
        workflow.add_conditional_edges(
            "design_schema",
            self._should_continue,
            {
                "continue": "build_database",
                "error": END
            }
        )

        workflow.add_conditional_edges(
            "build_database",
            self._route_after_build,
            {
                "sample_data": "add_sample_data",
                "analyze": "analyze_data",
                "error": END
            }
        )

        workflow.add_conditional_edges(
            "add_sample_data",
            self._should_continue,
            {
                "continue": "analyze_data",
                "error": END
            }
        )

        workflow.add_edge("analyze_data", END)

        return workflow.compile()

    def _should_continue(self, state: WorkflowState) -> str:
        return "error" if state.has_failed() else "continue"

    def _route_after_build(self, state: WorkflowState) -> str:
        if state.has_failed():
            return "error"
        return "sample_data" if state.include_sample_data else "analyze"

    @staticmethod
    def _fail(step: str, error: str) -> Dict[str, Any]:
        logger.error(f"Workflow failed at step '{step}': {error}")
        return {"failed_step": step, "error": error}

    def _design_schema_node(self, state: WorkflowState) -> Dict[str, Any]:
        """Step 1: design the schema"""
        logger.info("Step 1: Designing schema...")
        try:
            schema = self.designer.design_schema(state.requirements)
        except Exception as e:
            return self._fail("design", str(e))
        return {"current_step": "design", "schema_text": schema}

    def _build_database_node(self, state: WorkflowState) -> Dict[str, Any]:
        """Step 2: build the database"""
        logger.info("Step 2: Building database...")
        build_result = self.engineer.build_database(state.schema_text)
        update = {"current_step": "build", "build_result": build_result}

        if not build_result.success:
            update.update(self._fail("build", build_result.message))
        elif not state.include_sample_data:
            update["sample_data_result"] = SampleDataResult(success=True, message=SAMPLE_DATA_SKIPPED)
        return update

    def _add_sample_data_node(self, state: WorkflowState) -> Dict[str, Any]:
        """Step 3 (optional): load the sample data"""
        logger.info("Step 3: Adding sample data...")
        sample_data_result = add_sample_data(self.db_manager)
        update = {"current_step": "sample-data", "sample_data_result": sample_data_result}

        if not sample_data_result.success:
            update.update(self._fail("sample-data", sample_data_result.message))
        return update

    def _analyze_data_node(self, state: WorkflowState) -> Dict[str, Any]:
        """Step 4: analyze the data"""
        logger.info("Step 4: Analyzing data...")
        try:
            schema_info = self.analyst.get_schema_info()
        except Exception as e:
            return self._fail("analyze", str(e))

        analysis_result = self.analyst.analyze_data(state.request, schema_info)
        update = {
            "current_step": "analyze",
            "schema_info": schema_info,
            "analysis_result": analysis_result
        }

        if not analysis_result.success:
            update.update(self._fail("analyze", analysis_result.message))
        return update

    def run_workflow(self, requirements: str, request: str,
                     include_sample_data: bool = False) -> WorkflowResult:
        """Run design, build, optional sample data and analysis in order"""
        initial_state = WorkflowState(
            requirements=requirements,
            request=request,
            include_sample_data=include_sample_data
        )

        workflow_result = self.workflow.invoke(initial_state)

        # LangGraph returns a dictionary, convert it back to WorkflowState
        if isinstance(workflow_result, dict):
            final_state = WorkflowState(**workflow_result)
        else:
            final_state = workflow_result

        if final_state.has_failed():
            logger.info(f"Workflow stopped at step '{final_state.failed_step}'")
        else:
            logger.info("Workflow completed successfully")

        return final_state.to_result()

    def close(self):
        """Clean up resources"""
        self.db_manager.close()
        logger.info("Workflow planner closed")
