import shutil
import sqlite3
import unittest
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator
from uuid import uuid4

PROJECT_ROOT = Path(__file__).resolve().parents[2]

HOME_RUNS_1998 = [
    ("mcgwima01", "Mark", "McGwire", "SLN", 70),
    ("sosasa01", "Sammy", "Sosa", "CHN", 66),
    ("griffke02", "Ken", "Griffey", "SEA", 56),
    ("vaughgr01", "Greg", "Vaughn", "SDN", 50),
    ("galaran01", "Andres", "Galarraga", "ATL", 44),
    ("gonzaju03", "Juan", "Gonzalez", "TEX", 45),
]


class SqliteDatabase:
    """File-backed sqlite stand-in for SQL Server; counts open/close to check scoped release."""

    def __init__(self, path: Path):
        self._path = path
        self.opened = 0
        self.closed = 0

    @contextmanager
    def connect(self) -> Iterator[sqlite3.Connection]:
        conn = sqlite3.connect(self._path)
        self.opened += 1
        try:
            yield conn
        finally:
            conn.close()
            self.closed += 1

    def seed(self, script: str, rows: dict[str, list[tuple]] | None = None) -> None:
        conn = sqlite3.connect(self._path)
        try:
            conn.executescript(script)
            for table, values in (rows or {}).items():
                if not values:
                    continue
                placeholders = ", ".join("?" for _ in values[0])
                conn.executemany(f"INSERT INTO {table} VALUES ({placeholders})", values)
            conn.commit()
        finally:
            conn.close()


class SqliteDatabaseTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp_dir = PROJECT_ROOT / ".test-artifacts" / f"{self.__class__.__name__.lower()}-{uuid4().hex}"
        self._tmp_dir.mkdir(parents=True, exist_ok=True)
        self._database = SqliteDatabase(self._tmp_dir / "lahman.db")

    def tearDown(self) -> None:
        shutil.rmtree(self._tmp_dir, ignore_errors=True)

    def seed_lahman_sample(self) -> None:
        self._database.seed(
            """
            CREATE TABLE People (playerID TEXT PRIMARY KEY, nameFirst TEXT, nameLast TEXT, birthCity TEXT);
            CREATE TABLE Batting (
                playerID TEXT, yearID INTEGER, stint INTEGER, teamID TEXT, lgID TEXT, HR INTEGER, RBI INTEGER,
                PRIMARY KEY (playerID, yearID, stint)
            );
            """,
            {
                "People": [(pid, first, last, None) for pid, first, last, _, _ in HOME_RUNS_1998],
                "Batting": [
                    (pid, 1998, 1, team, "NL" if team.endswith("N") else "AL", hr, None)
                    for pid, _, _, team, hr in HOME_RUNS_1998
                ],
            },
        )


class FakeCursor:
    def __init__(self, responses: list[tuple[str, list[str], list[tuple]]], executed: list[str]):
        self._responses = responses
        self._executed = executed
        self.description: list[tuple] | None = None
        self._rows: list[tuple] = []

    def execute(self, sql: str, *params: Any) -> "FakeCursor":
        self._executed.append(sql)
        for marker, columns, rows in self._responses:
            if marker in sql:
                self.description = [(c, None, None, None, None, None, None) for c in columns]
                self._rows = list(rows)
                return self
        raise RuntimeError(f"Invalid object name in: {sql[:40]}")

    def fetchall(self) -> list[tuple]:
        rows, self._rows = self._rows, []
        return rows

    def fetchmany(self, size: int) -> list[tuple]:
        rows, self._rows = self._rows[:size], self._rows[size:]
        return rows

    def fetchone(self) -> tuple | None:
        if not self._rows:
            return None
        return self._rows.pop(0)

    def close(self) -> None:
        return


class FakeConnection:
    def __init__(self, responses: list[tuple[str, list[str], list[tuple]]], executed: list[str]):
        self._responses = responses
        self._executed = executed

    def cursor(self) -> FakeCursor:
        return FakeCursor(self._responses, self._executed)


class FakeCatalogDatabase:
    """Answers SQL by substring match against canned (marker, columns, rows) responses."""

    def __init__(self, responses: list[tuple[str, list[str], list[tuple]]], *, fail_connect: Exception | None = None):
        self._responses = responses
        self._fail_connect = fail_connect
        self.executed: list[str] = []
        self.open_connections = 0

    @contextmanager
    def connect(self) -> Iterator[FakeConnection]:
        if self._fail_connect is not None:
            raise self._fail_connect
        self.open_connections += 1
        try:
            yield FakeConnection(self._responses, self.executed)
        finally:
            self.open_connections -= 1


PRIMARY_KEY_ROWS = [
    ("Batting", "playerID"),
    ("Batting", "yearID"),
    ("Batting", "stint"),
    ("People", "playerID"),
    ("Salaries", "playerID"),
    ("teams", "yearID"),
    ("teams", "lgID"),
    ("teams", "teamID"),
]

COLUMN_ROWS = [
    ("Batting", "playerID"),
    ("Batting", "yearID"),
    ("Batting", "stint"),
    ("Batting", "HR"),
    ("People", "playerID"),
    ("People", "nameFirst"),
    ("People", "nameLast"),
    ("Salaries", "salary"),
    ("Managers", "playerID"),
    ("teams", "yearID"),
    ("teams", "lgID"),
    ("teams", "teamID"),
    ("teams", "W"),
    ("AllstarFull", "playerID"),
]


def catalog_responses() -> list[tuple[str, list[str], list[tuple]]]:
    return [
        ("KEY_COLUMN_USAGE", ["TABLE_NAME", "COLUMN_NAME"], PRIMARY_KEY_ROWS),
        ("INFORMATION_SCHEMA.COLUMNS", ["TABLE_NAME", "COLUMN_NAME"], COLUMN_ROWS),
    ]
