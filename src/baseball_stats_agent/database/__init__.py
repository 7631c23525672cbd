from baseball_stats_agent.database.connection import Database, SqlServerDatabase
from baseball_stats_agent.database.executor import (
    MAX_ROWS,
    QueryError,
    QueryExecutor,
    QueryOk,
    QueryTable,
    render_outcome,
)
from baseball_stats_agent.database.safety import is_query_safe
from baseball_stats_agent.database.schema import ALLOWED_TABLES, SchemaReporter

__all__ = [
    "ALLOWED_TABLES",
    "Database",
    "MAX_ROWS",
    "QueryError",
    "QueryExecutor",
    "QueryOk",
    "QueryTable",
    "SchemaReporter",
    "SqlServerDatabase",
    "is_query_safe",
    "render_outcome",
]
