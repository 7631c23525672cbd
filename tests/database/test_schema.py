import re
import unittest

from baseball_stats_agent.database.schema import ALLOWED_TABLES, SchemaReporter
from tests.database.base import FakeCatalogDatabase, catalog_responses


def _table_lines(schema: str) -> dict[str, str]:
    """Map each table heading line to the column line that follows it."""
    lines = schema.split("\n")
    result: dict[str, str] = {}
    for i, line in enumerate(lines):
        match = re.match(r"^(\w+)( \(PK: [\w+]+\))?$", line)
        if match and i + 1 < len(lines) and lines[i + 1].startswith("  "):
            result[match.group(1)] = line
    return result


class SchemaReporterTests(unittest.TestCase):
    def setUp(self) -> None:
        self._database = FakeCatalogDatabase(catalog_responses())
        self._schema = SchemaReporter(self._database).describe_schema()

    def test_lists_exactly_the_allowed_tables(self) -> None:
        headings = _table_lines(self._schema)
        self.assertEqual(sorted(ALLOWED_TABLES), sorted(headings))
        self.assertEqual(11, len(headings))

    def test_excludes_tables_outside_the_allow_list(self) -> None:
        self.assertNotIn("Salaries", self._schema)
        self.assertNotIn("Managers", self._schema)

    def test_primary_keys_annotated_in_catalog_order(self) -> None:
        headings = _table_lines(self._schema)
        self.assertEqual("Batting (PK: playerID+yearID+stint)", headings["Batting"])
        self.assertEqual("People (PK: playerID)", headings["People"])
        self.assertEqual("Pitching", headings["Pitching"])

    def test_catalog_names_match_case_insensitively(self) -> None:
        headings = _table_lines(self._schema)
        self.assertEqual("Teams (PK: yearID+lgID+teamID)", headings["Teams"])
        self.assertIn("  yearID*, lgID*, teamID*, W", self._schema)

    def test_columns_marked_with_primary_key_star(self) -> None:
        self.assertIn("  playerID*, yearID*, stint*, HR", self._schema)
        self.assertIn("  playerID*, nameFirst, nameLast", self._schema)
        self.assertIn("  playerID\n", self._schema)  # AllstarFull has no key in this catalog

    def test_tables_sorted_case_insensitively(self) -> None:
        order = list(_table_lines(self._schema))
        self.assertEqual(sorted(ALLOWED_TABLES, key=str.casefold), order)

    def test_header_and_join_hints(self) -> None:
        self.assertTrue(self._schema.startswith("=== LAHMAN BASEBALL DATABASE - KEY TABLES ==="))
        self.assertIn("playerID→People", self._schema)
        self.assertIn("teamID+yearID+lgID→Teams", self._schema)

    def test_single_scoped_connection(self) -> None:
        self.assertEqual(2, len(self._database.executed))
        self.assertEqual(0, self._database.open_connections)

    def test_connection_failure_propagates(self) -> None:
        database = FakeCatalogDatabase([], fail_connect=ConnectionError("login failed"))
        with self.assertRaises(ConnectionError):
            SchemaReporter(database).describe_schema()


if __name__ == "__main__":
    unittest.main()
