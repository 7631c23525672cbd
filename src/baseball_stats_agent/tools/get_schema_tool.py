import asyncio
from typing import Any

from loguru import logger

from baseball_stats_agent.database.schema import SchemaReporter


class GetSchemaTool:
    def __init__(self, reporter: SchemaReporter):
        self._reporter = reporter

    @property
    def name(self) -> str:
        return "get_schema"

    @property
    def description(self) -> str:
        return (
            "Gets the database schema including all tables, columns, primary keys, and relationship "
            "documentation. Use this first to understand what data is available before writing queries."
        )

    @property
    def input_schema(self) -> dict[str, Any]:
        return {"type": "object", "properties": {}}

    async def execute(self, tool_input: dict[str, Any]) -> str:
        try:
            return await asyncio.to_thread(self._reporter.describe_schema)
        except Exception as ex:
            logger.warning(f"Schema retrieval failed: {ex}")
            return f"Error retrieving schema: {ex}"
