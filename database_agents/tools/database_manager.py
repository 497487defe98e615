from contextlib import contextmanager
from typing import Dict, Iterator, List, Any, Optional, Sequence, Union
import logging

from sqlalchemy import create_engine, event, inspect
from sqlalchemy.engine import Connection
from sqlalchemy.pool import NullPool, StaticPool

from database_agents.config.config import Config
from database_agents.config.state import ExecResult

logger = logging.getLogger(__name__)

Params = Optional[Union[Sequence[Any], Dict[str, Any]]]

MEMORY_DATABASE = ":memory:"


class DatabaseManager:
    """Database manager for SQLite operations.

    Every call opens its own connection and closes it when the call is done; the
    database file is shared, unguarded state between managers and processes.
    Pass ``":memory:"`` to keep everything on one in-process connection instead.
    """

    def __init__(self, database_path: Optional[str] = None):
        self.database_path = database_path or Config.DATABASE_PATH
        self.engine = None
        self.connect()

    def connect(self):
        """Create the SQLAlchemy engine for the configured database file"""
        try:
            if self.database_path == MEMORY_DATABASE:
                self.engine = create_engine(
                    "sqlite://",
                    poolclass=StaticPool,
                    connect_args={"check_same_thread": False},
                )
            else:
                self.engine = create_engine(Config.get_database_url(self.database_path), poolclass=NullPool)

            # Take transaction control away from pysqlite so DDL runs inside BEGIN/COMMIT too
            @event.listens_for(self.engine, "connect")
            def _disable_pysqlite_begin(dbapi_connection, connection_record):
                dbapi_connection.isolation_level = None

            @event.listens_for(self.engine, "begin")
            def _emit_begin(conn):
                conn.exec_driver_sql("BEGIN")

            logger.info(f"Using SQLite database at {self.database_path}")
        except Exception as e:
            logger.error(f"Error creating database engine: {e}")
            raise

    @contextmanager
    def _connection(self) -> Iterator[Connection]:
        conn = self.engine.connect()
        try:
            yield conn
        finally:
            try:
                conn.close()
            except Exception as e:
                logger.error(f"Error closing database: {e}")

    @staticmethod
    def _driver_params(params: Params):
        if params is None or isinstance(params, dict):
            return params
        return tuple(params)

    def query(self, sql: str, params: Params = None) -> List[Dict[str, Any]]:
        """Execute a SQL query and return all rows as dictionaries"""
        with self._connection() as conn:
            try:
                result = conn.exec_driver_sql(sql, self._driver_params(params))
                return [dict(row) for row in result.mappings()]
            except Exception as e:
                logger.error(f"Error executing query: {e}")
                raise

    def execute(self, sql: str, params: Params = None) -> ExecResult:
        """Execute a single statement that doesn't return rows and commit it"""
        with self._connection() as conn:
            try:
                with conn.begin():
                    result = conn.exec_driver_sql(sql, self._driver_params(params))
                    outcome = ExecResult(last_insert_id=result.lastrowid, rows_changed=result.rowcount)
                return outcome
            except Exception as e:
                logger.error(f"Error executing statement: {e}")
                raise

    def execute_transaction(self, statements: List[str]) -> None:
        """Execute statements in order inside one transaction.

        The first failing statement rolls the whole transaction back and its error
        is re-raised; the remaining statements are never run.
        """
        with self._connection() as conn:
            transaction = conn.begin()
            for index, statement in enumerate(statements, 1):
                try:
                    conn.exec_driver_sql(statement)
                except Exception as e:
                    logger.error(f"Error in transaction at statement {index}/{len(statements)}: {e}")
                    transaction.rollback()
                    raise
            try:
                transaction.commit()
            except Exception as e:
                logger.error(f"Error committing transaction: {e}")
                raise
            logger.info(f"Committed transaction with {len(statements)} statements")

    def get_table_names(self) -> List[str]:
        """Names of all user tables, excluding SQLite's internal tables"""
        inspector = inspect(self.engine)
        return inspector.get_table_names()

    def get_table_schema(self, table_name: str) -> Dict[str, Any]:
        """Get column information for a specific table"""
        quoted = table_name.replace('"', '""')
        columns = self.query(f'PRAGMA table_info("{quoted}")')

        return {
            'table_name': table_name,
            'columns': [
                {
                    'name': column['name'],
                    'type': column['type'],
                    'nullable': not column['notnull'],
                    'primary_key': bool(column['pk'])
                }
                for column in columns
            ]
        }

    def get_all_schemas(self) -> Dict[str, Dict[str, Any]]:
        """Get schema information for all tables"""
        schemas = {}
        for table in self.get_table_names():
            schemas[table] = self.get_table_schema(table)
        return schemas

    def get_table_row_count(self, table_name: str) -> int:
        """Get the number of rows in a table"""
        quoted = table_name.replace('"', '""')
        rows = self.query(f'SELECT COUNT(*) AS row_count FROM "{quoted}"')
        return rows[0]['row_count']

    def close(self):
        """Dispose of the database engine"""
        if self.engine:
            self.engine.dispose()
        logger.info("Database connections closed")
