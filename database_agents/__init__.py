"""
Database Agent System

Three prompt-driven agents around an OpenAI chat model and a local SQLite database:
a schema designer, a data engineer that builds the designed schema, and a database
analyst that turns natural-language requests into SQL queries and insights.
"""

__version__ = "1.0.0"
__description__ = "LLM agents that design, build and analyze SQLite databases"
