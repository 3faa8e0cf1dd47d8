"""Core SQL utilities package.

Only dependency-free modules are re-exported here; ``escaper`` depends on the
dialects package and is exported from ``sql_plus.infrastructure.sql``.
"""

from .exceptions import (
    MissingNamedParamError,
    MixedParamsError,
    NotEnoughParamsError,
    SqlPlusError,
    TemplateError,
    UnsupportedConnectionKindError,
    UnsupportedKindError,
    UnsupportedValueKindError,
    UnsupportedWhereKindError,
)
from .identifier import qualify_table, quote_identifier
from .parameters import build_indexed_params, flatten_rows, positional_group, remap_records
from .raw import RawSql, binary, raw
from .template import format_template

__all__ = [
    "MissingNamedParamError",
    "MixedParamsError",
    "NotEnoughParamsError",
    "RawSql",
    "SqlPlusError",
    "TemplateError",
    "UnsupportedConnectionKindError",
    "UnsupportedKindError",
    "UnsupportedValueKindError",
    "UnsupportedWhereKindError",
    "binary",
    "build_indexed_params",
    "flatten_rows",
    "format_template",
    "positional_group",
    "qualify_table",
    "quote_identifier",
    "raw",
    "remap_records",
]
