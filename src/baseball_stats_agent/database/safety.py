from __future__ import annotations

_READ_ONLY_PREFIX = "SELECT"


def is_query_safe(sql: str | None) -> bool:
    """Return True when ``sql`` starts with SELECT (case-insensitive, leading whitespace ignored).

    This is a prefix heuristic, not a parser: a SELECT that calls a mutating
    function, or ``SELECT 1; DROP TABLE x``, still passes.
    """
    if not sql:
        return False
    return sql.lstrip().upper().startswith(_READ_ONLY_PREFIX)
