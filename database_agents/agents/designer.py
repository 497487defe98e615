import logging
from database_agents.tools.llm_manager import LLMManager

logger = logging.getLogger(__name__)

DESIGNER_SYSTEM_PROMPT = """You are a Database Designer Agent who creates well-structured relational database schemas.
Given a set of requirements, design a schema with:
- Tables and the relationships between them
- Primary and foreign keys
- Appropriate data types
- Constraints that protect data integrity
- Indexes that support the expected queries
- Normalization (usually third normal form) to avoid redundancy

Follow consistent naming conventions and keep the schema compatible with SQLite.
Your output must be a complete SQL schema definition that can be executed directly."""


class DatabaseDesignerAgent:
    """Designs database schemas from stakeholder requirements"""

    def __init__(self, llm_manager: LLMManager):
        self.llm_manager = llm_manager
        self.system_prompt = DESIGNER_SYSTEM_PROMPT

    def design_schema(self, requirements: str) -> str:
        """Ask the model for a schema; the reply is returned exactly as received"""
        user_prompt = f"""Please design a database schema for the following requirements:

{requirements}

Provide the complete SQL schema as CREATE TABLE statements, including every constraint, index and relationship."""

        try:
            logger.info("Designing schema from requirements...")
            return self.llm_manager.get_completion(self.system_prompt, user_prompt)
        except Exception as e:
            logger.error(f"Error designing schema: {e}")
            raise
