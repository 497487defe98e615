#!/usr/bin/env python3
"""
Database Agent System CLI

Usage: python -m database_agents.main [interactive|demo|serve|setup]

  interactive: numbered menu for the individual agents and the full workflow
  demo: run the full workflow on the built-in e-commerce example
  serve: start the HTTP API
  setup: create or check the .env configuration
"""

import logging
import sys
from typing import List, Dict, Any

import pandas as pd

from database_agents.agents.agent_planner import WorkflowPlanner
from database_agents.config.config import Config
from database_agents.config.state import AnalysisResult, WorkflowResult

logger = logging.getLogger(__name__)

EXAMPLE_REQUIREMENTS = """
Create a database for an e-commerce platform with the following requirements:

1. Store information about users, including:
   - User ID, name, email, password, address, phone number, registration date

2. Store information about products, including:
   - Product ID, name, description, price, stock quantity, category

3. Store information about orders, including:
   - Order ID, user ID, order date, total amount, status

4. Store information about order items, including:
   - Order item ID, order ID, product ID, quantity, price

5. Store information about product categories, including:
   - Category ID, name, description

6. Store information about product reviews, including:
   - Review ID, product ID, user ID, rating, comment, date

7. Ensure proper relationships between tables
8. Include appropriate indexes for performance
9. Ensure data integrity with constraints
"""

EXAMPLE_REQUEST = "Show me the top 5 products by sales volume, including their category and average rating."

MENU = """
1. Design a database schema
2. Build a database from a schema
3. Add sample data
4. Analyze data
5. Run the entire workflow
6. Exit"""


def print_separator(title: str):
    """Print a formatted separator with title"""
    print("\n" + "=" * 80)
    print(f" {title} ")
    print("=" * 80)


def format_rows(rows: List[Dict[str, Any]]) -> str:
    """Render query result rows as a plain-text table"""
    if not rows:
        return "(no rows)"
    return pd.DataFrame(rows).to_string(index=False)


def print_analysis_result(result: AnalysisResult):
    """Print the query, rows and insights of an analysis"""
    if not result.success:
        print(f"❌ Error analyzing data: {result.message}")
        return

    print("\n💻 Query:")
    print(result.query)
    print(f"\n📊 Results ({len(result.results)} rows):")
    print(format_rows(result.results))
    print("\n💬 Insights:")
    print(result.insights)


def print_workflow_result(result: WorkflowResult):
    """Print every step of a workflow run"""
    if result.schema_text:
        print("\n📝 Schema:")
        print(result.schema_text)

    if result.build_result:
        print(f"\n🔨 Build result: {'Success' if result.build_result.success else 'Failed'}")

    if result.sample_data_result:
        print(f"📦 Sample data result: {result.sample_data_result.message}")

    if result.analysis_result:
        print_analysis_result(result.analysis_result)

    if result.success:
        print("\n🎉 Workflow completed successfully!")
    else:
        print(f"\n❌ Workflow failed at step '{result.step}': {result.error}")


def ask_yes_no(prompt: str) -> bool:
    return input(prompt).strip().lower() in ['y', 'yes']


def run_menu_option(planner: WorkflowPlanner, option: str) -> bool:
    """Run one menu option; returns False when the user chose to exit"""
    if option in ['6', 'quit', 'exit', 'q']:
        return False

    if option == '1':
        requirements = input("Enter requirements: ")
        print("🔄 Designing schema...")
        schema = planner.design_schema(requirements)
        print("\n📝 Schema:")
        print(schema)

    elif option == '2':
        schema = input("Enter schema: ")
        print("🔄 Building database...")
        result = planner.build_database(schema)
        status = "✅" if result.success else "❌"
        print(f"{status} {result.message}")
        for statement in result.statements or []:
            print(f"   {statement}")

    elif option == '3':
        print("🔄 Adding sample data...")
        result = planner.add_sample_data()
        status = "✅" if result.success else "❌"
        print(f"{status} {result.message}")
        if result.success:
            for table, count in planner.get_table_row_counts().items():
                print(f"   {table}: {count} rows")

    elif option == '4':
        request = input("Enter request: ")
        print("🔄 Analyzing data...")
        print_analysis_result(planner.analyze(request))

    elif option == '5':
        requirements = input("Enter requirements: ")
        request = input("Enter request: ")
        include_sample_data = ask_yes_no("Include sample data? (y/n): ")
        print("🔄 Running workflow...")
        print_workflow_result(planner.run_workflow(requirements, request, include_sample_data))

    else:
        print("Invalid option")

    return True


def interactive_mode():
    """Run the system in interactive mode"""
    print_separator("DATABASE AGENT SYSTEM")

    try:
        planner = WorkflowPlanner()
    except Exception as e:
        print(f"❌ Error initializing workflow planner: {e}")
        logger.error(f"Error initializing workflow planner: {e}")
        return

    while True:
        try:
            print(MENU)
            option = input("\nSelect an option: ").strip()
            if not run_menu_option(planner, option):
                print("Exiting...")
                break
        except (KeyboardInterrupt, EOFError):
            print("\n\n👋 Goodbye!")
            break
        except Exception as e:
            print(f"❌ Error: {e}")
            logger.error(f"Error in interactive mode: {e}")

    planner.close()


def run_demo():
    """Run the full workflow on the e-commerce example"""
    print_separator("E-COMMERCE DEMO WORKFLOW")
    print(f"Requirements: {EXAMPLE_REQUIREMENTS}")
    print(f"Request: {EXAMPLE_REQUEST}")

    planner = WorkflowPlanner()
    try:
        result = planner.run_workflow(EXAMPLE_REQUIREMENTS, EXAMPLE_REQUEST, include_sample_data=True)
        print_workflow_result(result)
    finally:
        planner.close()


def run_server():
    """Start the HTTP API"""
    import uvicorn

    print(f"🚀 Database Agent System running on port {Config.PORT}")
    uvicorn.run("database_agents.api.main:app", host=Config.HOST, port=Config.PORT)


def main():
    """Main entry point"""
    mode = sys.argv[1] if len(sys.argv) > 1 else "interactive"

    if mode == "setup":
        from database_agents.setup_env import main as setup_main
        setup_main()
        return

    Config.configure_logging()

    try:
        # Validate configuration
        Config.validate()

        if mode == "interactive":
            interactive_mode()
        elif mode == "demo":
            run_demo()
        elif mode == "serve":
            run_server()
        else:
            print(__doc__)
            sys.exit(2)

    except Exception as e:
        print(f"❌ Fatal error: {e}")
        logger.error(f"Fatal error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
