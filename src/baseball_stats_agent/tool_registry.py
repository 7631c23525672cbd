from __future__ import annotations

from baseball_stats_agent.database import Database, QueryExecutor, SchemaReporter
from baseball_stats_agent.tool import Tool
from baseball_stats_agent.tools.get_schema_tool import GetSchemaTool
from baseball_stats_agent.tools.query_database_tool import QueryDatabaseTool


def get_all(database: Database) -> list[Tool]:
    return [
        GetSchemaTool(SchemaReporter(database)),
        QueryDatabaseTool(QueryExecutor(database)),
    ]
