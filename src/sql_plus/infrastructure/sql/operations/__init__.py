"""Statement-level SQL builders."""

from .statements import InsertOption, StatementBuilder
from .where import WhereCompiler

__all__ = [
    "InsertOption",
    "StatementBuilder",
    "WhereCompiler",
]
