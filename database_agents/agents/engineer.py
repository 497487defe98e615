import logging
from database_agents.config.state import BuildResult
from database_agents.tools.database_manager import DatabaseManager
from database_agents.tools.llm_manager import LLMManager
from database_agents.tools.sql_extraction import extract_sql_statements

logger = logging.getLogger(__name__)

ENGINEER_SYSTEM_PROMPT = """You are a Data Engineer Agent who implements database schemas.
For every schema you receive:
1. Check that each SQL statement is valid and executable on SQLite
2. Check that it follows best practices
3. Fix any problems you find
4. Make sure tables are related correctly and constraints and indexes are well defined

Reply with the final SQL statements to execute, in execution order, including any corrections or improvements."""


class DataEngineerAgent:
    """Builds the database from a schema produced by the designer"""

    def __init__(self, llm_manager: LLMManager, db_manager: DatabaseManager):
        self.llm_manager = llm_manager
        self.db_manager = db_manager
        self.system_prompt = ENGINEER_SYSTEM_PROMPT

    def build_database(self, schema: str) -> BuildResult:
        """Have the model finalize the schema, then execute it as one transaction"""
        user_prompt = f"""Please review and implement the following database schema:

{schema}

If anything needs fixing or improving, make the changes and provide the final SQL statements to execute."""

        try:
            logger.info("Finalizing schema...")
            validated_schema = self.llm_manager.get_completion(self.system_prompt, user_prompt)

            statements = extract_sql_statements(validated_schema)
            if not statements:
                raise ValueError("no SQL statements found in the finalized schema")

            logger.info(f"Executing {len(statements)} schema statements...")
            self.db_manager.execute_transaction(statements)

            return BuildResult(
                success=True,
                message="Database built successfully",
                statements=statements
            )
        except Exception as e:
            logger.error(f"Error building database: {e}")
            return BuildResult(success=False, message=f"Error building database: {e}")
