"""
SQL parameter placeholder utilities.

Column names are not always valid placeholder names (spaces, dashes, leading
digits), so prepared INSERT/UPDATE statements bind through indexed names
(``:col_0``, ``:col_1``...) and records are remapped before execution.
"""

from typing import Any, Dict, List, Mapping, Sequence, Tuple


def build_indexed_params(columns: Sequence[str]) -> Tuple[Dict[str, str], List[str]]:
    """
    Build indexed parameter mapping for SQL templates.

    Args:
        columns: List of column names

    Returns:
        Tuple of (column_to_param mapping, list of placeholder strings)

    Examples:
        >>> col_map, placeholders = build_indexed_params(["user id", "e-mail"])
        >>> col_map
        {'user id': 'col_0', 'e-mail': 'col_1'}
        >>> placeholders
        [':col_0', ':col_1']
    """
    col_param_map = {col: f"col_{i}" for i, col in enumerate(columns)}
    placeholders = [f":{col_param_map[col]}" for col in columns]
    return col_param_map, placeholders


def remap_records(
    records: Sequence[Mapping[str, Any]], param_map: Mapping[str, str]
) -> List[Dict[str, Any]]:
    """
    Remap record keys to indexed parameter names.

    Columns missing from a record are bound as NULL; keys absent from
    ``param_map`` are dropped.

    Examples:
        >>> remap_records([{"user id": 7}], {"user id": "col_0", "e-mail": "col_1"})
        [{'col_0': 7, 'col_1': None}]
    """
    return [
        {param: record.get(column) for column, param in param_map.items()}
        for record in records
    ]


def positional_group(count: int) -> str:
    """
    Build one parenthesized group of positional placeholders.

    Examples:
        >>> positional_group(3)
        '(?, ?, ?)'
    """
    if count <= 0:
        raise ValueError("Placeholder group needs at least one column")
    return "(" + ", ".join(["?"] * count) + ")"


def flatten_rows(
    rows: Sequence[Mapping[str, Any]], columns: Sequence[str]
) -> List[Any]:
    """
    Flatten rows into a row-major parameter list in ``columns`` order.

    Examples:
        >>> flatten_rows([{"a": 1, "b": 2}, {"a": 3}], ["a", "b"])
        [1, 2, 3, None]
    """
    params: List[Any] = []
    for row in rows:
        for col in columns:
            params.append(row.get(col))  # None if key missing
    return params
