import unittest

from baseball_stats_agent.database.safety import is_query_safe


class IsQuerySafeTests(unittest.TestCase):
    def test_allows_select_any_case(self) -> None:
        for sql in (
            "SELECT * FROM People",
            "select nameFirst from People",
            "Select TOP 5 HR FROM Batting",
        ):
            self.assertTrue(is_query_safe(sql), sql)

    def test_ignores_leading_whitespace(self) -> None:
        self.assertTrue(is_query_safe("   \n\tSELECT 1"))

    def test_rejects_mutations(self) -> None:
        for sql in (
            "INSERT INTO People VALUES ('x')",
            "UPDATE Batting SET HR = 99",
            "DELETE FROM People WHERE 1=1",
            "DROP TABLE Batting",
            "TRUNCATE TABLE Teams",
            "EXEC sp_who",
        ):
            self.assertFalse(is_query_safe(sql), sql)

    def test_rejects_cte_and_leading_comment(self) -> None:
        self.assertFalse(is_query_safe("WITH x AS (SELECT 1 AS a) SELECT a FROM x"))
        self.assertFalse(is_query_safe("-- top hitters\nSELECT * FROM Batting"))
        self.assertFalse(is_query_safe("/* c */ SELECT 1"))

    def test_rejects_empty_input(self) -> None:
        self.assertFalse(is_query_safe(""))
        self.assertFalse(is_query_safe("   "))
        self.assertFalse(is_query_safe(None))

    def test_prefix_check_does_not_catch_stacked_statements(self) -> None:
        # Known limitation of the prefix check.
        self.assertTrue(is_query_safe("SELECT 1; DROP TABLE People"))


if __name__ == "__main__":
    unittest.main()
