"""
Agents package for the Database Agent System

- designer: turn natural-language requirements into a CREATE TABLE schema
- engineer: review a schema and execute it as one transaction
- analyst: answer natural-language data requests with SQL and insights
- agent_planner: chain the agents into the full design/build/analyze workflow
"""
