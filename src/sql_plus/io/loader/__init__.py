"""
Bulk loading into MySQL.

Buffers rows and writes them as multi-row INSERT statements sized to the
server's packet limit.
"""

from .bulk_insert import BulkInsert, row_byte_size

__all__ = [
    "BulkInsert",
    "row_byte_size",
]
