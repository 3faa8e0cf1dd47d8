"""
SQL identifier handling utilities.

Provides functions for quoting identifiers (table names, column names) so
that reserved words, non-ASCII names and embedded quote characters are safe
to splice into SQL.
"""

from typing import Dict, Optional, Tuple

# dialect name -> (opening quote, closing quote)
IDENTIFIER_QUOTES: Dict[str, Tuple[str, str]] = {
    "mysql": ("`", "`"),
    "postgresql": ('"', '"'),
}


def quote_segment(name: str, dialect: str = "mysql") -> str:
    """
    Quote a single identifier segment, doubling any embedded quote character.

    Examples:
        >>> quote_segment("order")
        '`order`'
        >>> quote_segment("weird`name")
        '`weird``name`'
        >>> quote_segment("年金计划号", dialect="postgresql")
        '"年金计划号"'
    """
    try:
        opening, closing = IDENTIFIER_QUOTES[dialect]
    except KeyError:
        raise ValueError(f"Unknown SQL dialect: {dialect!r}") from None
    escaped = name.replace(closing, closing * 2)
    return f"{opening}{escaped}{closing}"


def quote_identifier(name: str, dialect: str = "mysql", strict: bool = False) -> str:
    """
    Quote a SQL identifier, optionally schema-qualified.

    Args:
        name: The identifier to quote, e.g. ``"users"`` or ``"app.users"``
        dialect: Database dialect ("mysql", "postgresql")
        strict: If True, dots are part of the name and the whole string is
            quoted as one unit. If False, the name is split on ``.`` and each
            segment is quoted separately.

    Returns:
        Properly quoted identifier

    Examples:
        >>> quote_identifier("app.users")
        '`app`.`users`'
        >>> quote_identifier("app.users", strict=True)
        '`app.users`'
        >>> quote_identifier("public.users", dialect="postgresql")
        '"public"."users"'
    """
    if strict:
        return quote_segment(name, dialect)
    return ".".join(quote_segment(part, dialect) for part in name.split("."))


def qualify_table(
    table: str, schema: Optional[str] = None, dialect: str = "mysql"
) -> str:
    """
    Create a fully qualified table name with optional schema prefix.

    Both parts are quoted; the table name is taken as a single unit, so a dot
    inside ``table`` does not introduce another level of qualification.

    Examples:
        >>> qualify_table("users", schema="app")
        '`app`.`users`'
        >>> qualify_table("users")
        '`users`'
    """
    quoted_table = quote_segment(table, dialect)
    if schema:
        return f"{quote_segment(schema, dialect)}.{quoted_table}"
    return quoted_table
