"""
Small query-building helpers shared by the read-side services.
"""
LIKE_ESCAPE = "\\"


def contains_pattern(term: str) -> str:
    """
    LIKE pattern matching `term` as a literal substring.

    Backslash, % and _ in the term are escaped; pair the result with
    escape=LIKE_ESCAPE on the like/ilike call.
    """
    escaped = (
        term.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )
    return f"%{escaped}%"
