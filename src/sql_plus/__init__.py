"""
sql-plus - SQL templating, escaping and helpers for PyMySQL.

Client-side placeholder formatting (``?``, ``??``, ``:name``, ``::name``),
value and identifier escaping, a WHERE clause compiler, statement builders,
a batched bulk inserter and typed translation of server errors.
"""

__version__ = "0.1.0"
