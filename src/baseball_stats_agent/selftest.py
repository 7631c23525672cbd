"""Offline checks of the database tools; no API key or model calls involved."""

from __future__ import annotations

from loguru import logger

from baseball_stats_agent.database import Database, QueryError, QueryExecutor, SchemaReporter, render_outcome

SAMPLE_QUERY = (
    "SELECT TOP 5 p.nameFirst, p.nameLast, b.HR FROM Batting b "
    "JOIN People p ON b.playerID = p.playerID WHERE b.yearID = 1998 ORDER BY b.HR DESC"
)
UNSAFE_QUERY = "DELETE FROM People WHERE 1=1"

_SCHEMA_PREVIEW_CHARS = 2000
_RULE = "-" * 50


def _check_schema(reporter: SchemaReporter) -> bool:
    print("TEST 1: get_schema")
    print(_RULE)
    try:
        schema = reporter.describe_schema()
    except Exception as ex:
        logger.error(f"Schema self-test failed: {ex}")
        print(f"[FAIL] {ex}\n")
        return False
    if len(schema) > _SCHEMA_PREVIEW_CHARS:
        print(schema[:_SCHEMA_PREVIEW_CHARS] + "\n... [truncated]")
    else:
        print(schema)
    if not schema.strip():
        print("\n[FAIL] Schema was empty\n")
        return False
    print("\n[PASS] Schema retrieved successfully\n")
    return True


def _check_query(executor: QueryExecutor) -> bool:
    print("TEST 2: query_database - Top 5 home run hitters in 1998")
    print(_RULE)
    outcome = executor.run(SAMPLE_QUERY)
    print(render_outcome(outcome))
    if isinstance(outcome, QueryError):
        print("[FAIL] Query failed\n")
        return False
    if outcome.table.row_count == 0:
        print("[FAIL] Query returned no rows\n")
        return False
    print("[PASS] Query executed successfully\n")
    return True


def _check_rejects_delete(executor: QueryExecutor) -> bool:
    print("TEST 3: query_database - Safety check (should reject DELETE)")
    print(_RULE)
    result = executor.execute(UNSAFE_QUERY)
    print(result)
    if "Error" in result:
        print("[PASS] Correctly rejected\n")
        return True
    print("[FAIL] Should have rejected\n")
    return False


def run_self_test(database: Database) -> bool:
    print("=== LOCAL DATABASE TOOLS TEST ===\n")
    executor = QueryExecutor(database)
    results = [
        _check_schema(SchemaReporter(database)),
        _check_query(executor),
        _check_rejects_delete(executor),
    ]
    passed = sum(results)
    print(f"=== TESTS COMPLETE ({passed}/{len(results)} passed) ===")
    return all(results)
