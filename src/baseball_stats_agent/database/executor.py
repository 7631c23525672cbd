from __future__ import annotations

from dataclasses import dataclass, field

from loguru import logger

from baseball_stats_agent.database.connection import Database
from baseball_stats_agent.database.safety import is_query_safe

MAX_ROWS = 50
NULL_MARKER = "NULL"
_COLUMN_RULE_WIDTH = 15

REJECTED_MESSAGE = "Error: Only SELECT queries are allowed."


@dataclass
class QueryTable:
    columns: list[str]
    rows: list[list[str]] = field(default_factory=list)
    truncated: bool = False

    @property
    def row_count(self) -> int:
        return len(self.rows)


@dataclass(frozen=True)
class QueryOk:
    table: QueryTable


@dataclass(frozen=True)
class QueryError:
    reason: str


QueryOutcome = QueryOk | QueryError


def render_table(table: QueryTable) -> str:
    lines = [" | ".join(table.columns), "-" * (len(table.columns) * _COLUMN_RULE_WIDTH)]
    lines.extend(" | ".join(row) for row in table.rows)
    lines.append("")
    if table.truncated:
        lines.append(f"[Results limited to {MAX_ROWS} rows]")
    lines.append(f"({table.row_count} rows returned)")
    return "\n".join(lines)


def render_outcome(outcome: QueryOutcome) -> str:
    if isinstance(outcome, QueryError):
        return outcome.reason
    return render_table(outcome.table)


def _cell(value: object) -> str:
    if value is None:
        return NULL_MARKER
    return str(value)


class QueryExecutor:
    def __init__(self, database: Database, max_rows: int = MAX_ROWS):
        self._database = database
        self._max_rows = min(max_rows, MAX_ROWS)

    def run(self, sql: str) -> QueryOutcome:
        if not is_query_safe(sql):
            logger.warning(f"Rejected non-SELECT statement: {sql!r}")
            return QueryError(REJECTED_MESSAGE)

        try:
            with self._database.connect() as conn:
                cursor = conn.cursor()
                try:
                    cursor.execute(sql)
                    columns = [d[0] for d in cursor.description or ()]
                    raw_rows = cursor.fetchmany(self._max_rows) if columns else []
                    truncated = bool(columns) and cursor.fetchone() is not None
                finally:
                    cursor.close()
        except Exception as ex:
            logger.warning(f"Query failed: {ex}")
            return QueryError(f"Error executing query: {ex}")

        rows = [[_cell(v) for v in row] for row in raw_rows]
        logger.info(f"Query returned {len(rows)} row(s){' (truncated)' if truncated else ''}")
        return QueryOk(QueryTable(columns=columns, rows=rows, truncated=truncated))

    def execute(self, sql: str) -> str:
        return render_outcome(self.run(sql))
