from __future__ import annotations

from loguru import logger

from baseball_stats_agent.database.connection import Database

# Subset exposed to the model; the rest of the Lahman schema costs tokens without
# helping most questions.
ALLOWED_TABLES: tuple[str, ...] = (
    "People",
    "Batting",
    "Pitching",
    "Fielding",
    "Teams",
    "TeamsFranchises",
    "AwardsPlayers",
    "AllstarFull",
    "Appearances",
    "BattingPost",
    "PitchingPost",
)

_PRIMARY_KEY_SQL = """
SELECT kcu.TABLE_NAME, kcu.COLUMN_NAME
FROM INFORMATION_SCHEMA.TABLE_CONSTRAINTS tc
JOIN INFORMATION_SCHEMA.KEY_COLUMN_USAGE kcu
  ON tc.CONSTRAINT_NAME = kcu.CONSTRAINT_NAME
 AND tc.TABLE_SCHEMA = kcu.TABLE_SCHEMA
 AND tc.TABLE_NAME = kcu.TABLE_NAME
WHERE tc.CONSTRAINT_TYPE = 'PRIMARY KEY'
ORDER BY kcu.TABLE_NAME, kcu.ORDINAL_POSITION
"""

_COLUMNS_SQL = """
SELECT TABLE_NAME, COLUMN_NAME
FROM INFORMATION_SCHEMA.COLUMNS
ORDER BY TABLE_NAME, ORDINAL_POSITION
"""

_HEADER = "=== LAHMAN BASEBALL DATABASE - KEY TABLES ==="
_JOIN_KEYS = "Join keys: playerID→People, teamID+yearID+lgID→Teams, franchID→TeamsFranchises"
_FOOTER = "Note: Other tables exist in the database but are not listed here - ask if needed."


class SchemaReporter:
    """Condensed description of the allow-listed Lahman tables for the model's context."""

    def __init__(self, database: Database, tables: tuple[str, ...] = ALLOWED_TABLES):
        self._database = database
        self._tables = tables
        self._canonical = {t.casefold(): t for t in tables}

    def describe_schema(self) -> str:
        with self._database.connect() as conn:
            primary_keys = self._collect(conn, _PRIMARY_KEY_SQL)
            columns = self._collect(conn, _COLUMNS_SQL)

        lines = [_HEADER, _JOIN_KEYS, ""]
        for table in sorted(self._tables, key=str.casefold):
            pk = primary_keys.get(table, [])
            pk_info = f" (PK: {'+'.join(pk)})" if pk else ""
            lines.append(f"\n{table}{pk_info}")
            pk_set = {c.casefold() for c in pk}
            listed = [f"{c}*" if c.casefold() in pk_set else c for c in columns.get(table, [])]
            lines.append(f"  {', '.join(listed)}")

        lines.append(f"\n{_FOOTER}")
        text = "\n".join(lines)
        logger.debug(f"Schema description built: {len(self._tables)} tables, {len(text):,} chars")
        return text

    def _collect(self, conn, sql: str) -> dict[str, list[str]]:
        """Group (table, column) catalog rows by allow-listed table, preserving order."""
        grouped: dict[str, list[str]] = {}
        cursor = conn.cursor()
        try:
            cursor.execute(sql)
            for table_name, column_name in cursor.fetchall():
                table = self._canonical.get(str(table_name).casefold())
                if table is None:
                    continue
                grouped.setdefault(table, []).append(str(column_name))
        finally:
            cursor.close()
        return grouped
