import asyncio
from typing import Any

from loguru import logger

from baseball_stats_agent.database.executor import MAX_ROWS, QueryExecutor


class QueryDatabaseTool:
    def __init__(self, executor: QueryExecutor):
        self._executor = executor

    @property
    def name(self) -> str:
        return "query_database"

    @property
    def description(self) -> str:
        return (
            "Executes a SQL SELECT query against the baseball database and returns results. "
            f"Only SELECT queries are allowed for safety. Returns up to {MAX_ROWS} rows."
        )

    @property
    def input_schema(self) -> dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                "sql": {
                    "type": "string",
                    "description": "A single T-SQL SELECT statement (use TOP N, not LIMIT)",
                },
            },
            "required": ["sql"],
        }

    async def execute(self, tool_input: dict[str, Any]) -> str:
        sql = tool_input.get("sql")
        if not isinstance(sql, str):
            return 'Error: "sql" must be a string containing a SELECT statement.'
        logger.info(f"Executing SQL: {sql}")
        return await asyncio.to_thread(self._executor.execute, sql)
