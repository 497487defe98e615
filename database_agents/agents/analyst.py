import json
import logging
from database_agents.config.state import AnalysisResult
from database_agents.tools.database_manager import DatabaseManager
from database_agents.tools.llm_manager import LLMManager
from database_agents.tools.sql_extraction import extract_sql_query, first_statement

logger = logging.getLogger(__name__)

ANALYST_SYSTEM_PROMPT = """You are a Database Analyst Agent who answers stakeholder questions with data.
For each request:
1. Work out what data the stakeholder is asking for
2. Write an efficient SQLite query that retrieves it
3. Analyze the query results and explain what they show
4. Present the findings clearly, explaining complex data in simple terms

Your answer should include:
1. The SQL query, in a ```sql code block
2. What the results contain
3. Actionable insights based on the data"""

NO_QUERY_MESSAGE = "Could not extract a valid SQL query from the agent response"


class DatabaseAnalystAgent:
    """Queries the database and provides insights based on stakeholder requests"""

    def __init__(self, llm_manager: LLMManager, db_manager: DatabaseManager):
        self.llm_manager = llm_manager
        self.db_manager = db_manager
        self.system_prompt = ANALYST_SYSTEM_PROMPT

    def get_schema_info(self) -> str:
        """Describe every table and its columns as plain text for the model"""
        try:
            schema_info = ""
            for table_name, schema in self.db_manager.get_all_schemas().items():
                schema_info += f"Table: {table_name}\n"
                schema_info += "Columns:\n"
                for column in schema['columns']:
                    schema_info += f"  - {column['name']} ({column['type']})"
                    if column['primary_key']:
                        schema_info += " PRIMARY KEY"
                    if not column['nullable']:
                        schema_info += " NOT NULL"
                    schema_info += "\n"
                schema_info += "\n"
            return schema_info
        except Exception as e:
            logger.error(f"Error getting schema info: {e}")
            raise

    def analyze_data(self, request: str, schema_info: str) -> AnalysisResult:
        """Generate and run a query for the request, then explain the rows"""
        user_prompt = f"""Please analyze the following request using the database schema below:

Request: {request}

Database Schema:
{schema_info}

Write an SQL query that retrieves the requested data, and explain what insights the results will provide."""

        try:
            logger.info("Generating analysis query...")
            analysis_response = self.llm_manager.get_completion(self.system_prompt, user_prompt)

            sql_query = extract_sql_query(analysis_response)
            if not sql_query:
                logger.warning(NO_QUERY_MESSAGE)
                return AnalysisResult(
                    success=False,
                    message=NO_QUERY_MESSAGE,
                    agent_response=analysis_response
                )

            # Only one query is run per request
            sql_query = first_statement(sql_query)
            logger.info(f"Executing analysis query: {sql_query}")
            query_results = self.db_manager.query(sql_query)

            insights_prompt = f"""I executed the SQL query and got the following results:

{json.dumps(query_results, indent=2, default=str)}

Based on these results, please provide insights and analysis."""

            logger.info(f"Generating insights for {len(query_results)} rows...")
            insights = self.llm_manager.get_completion(self.system_prompt, insights_prompt)

            return AnalysisResult(
                success=True,
                query=sql_query,
                results=query_results,
                insights=insights,
                agent_response=analysis_response
            )
        except Exception as e:
            logger.error(f"Error analyzing data: {e}")
            return AnalysisResult(success=False, message=f"Error analyzing data: {e}")
