"""
Tools package for the Database Agent System

This package contains the building blocks the agents use:
- llm_manager: chat completions against the OpenAI API
- database_manager: SQLite queries, statements and transactions
- sql_extraction: pull SQL statements and queries out of model replies
- sample_data: fixed e-commerce demo rows
"""
