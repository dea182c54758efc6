"""Search filter builder for list views."""
from sqlalchemy import or_


def apply_search(query, columns, term):
    """
    Filter ``query`` to rows where any of ``columns`` contains ``term``.

    The match is a case-insensitive substring test. All column tests sit in
    one parenthesised OR group, so predicates already on the query (joins,
    equality filters) keep narrowing the result.

    Args:
        query: SQLAlchemy query to narrow
        columns: column attributes to test
        term: raw search text; blank means no filter

    Returns:
        The filtered query, or ``query`` itself when there is nothing to match.
    """
    term = (term or '').strip()
    if not term or not columns:
        return query
    # Escape LIKE wildcards so they match literally
    escaped = term.replace('\\', '\\\\').replace('%', '\\%').replace('_', '\\_')
    pattern = f"%{escaped}%"
    return query.filter(or_(*[column.ilike(pattern, escape='\\') for column in columns]))
