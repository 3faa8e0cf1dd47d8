"""
MySQL server error codes and their categories.

Only the codes that map to a dedicated exception are listed; every other
code is translated to the generic ``DatabaseError``. The table can be
replaced per call (see ``translate_error``) to cover other servers.
"""

from enum import Enum
from typing import Dict


class ErrorCategory(str, Enum):
    """Failure categories with a dedicated exception type."""

    DUPLICATE_ENTRY = "duplicate_entry"
    NO_SUCH_TABLE = "no_such_table"
    CANNOT_ADD_FOREIGN_KEY = "cannot_add_foreign_key"
    ACCESS_DENIED = "access_denied"
    TOO_MANY_CONNECTIONS = "too_many_connections"


ER_CON_COUNT_ERROR = 1040
ER_DBACCESS_DENIED_ERROR = 1044
ER_ACCESS_DENIED_ERROR = 1045
ER_DUP_ENTRY = 1062
ER_NO_SUCH_TABLE = 1146
ER_CANNOT_ADD_FOREIGN = 1215
ER_DUP_ENTRY_WITH_KEY_NAME = 1586
ER_ACCESS_DENIED_NO_PASSWORD_ERROR = 1698

DEFAULT_CATEGORIES: Dict[int, ErrorCategory] = {
    ER_CON_COUNT_ERROR: ErrorCategory.TOO_MANY_CONNECTIONS,
    ER_DBACCESS_DENIED_ERROR: ErrorCategory.ACCESS_DENIED,
    ER_ACCESS_DENIED_ERROR: ErrorCategory.ACCESS_DENIED,
    ER_ACCESS_DENIED_NO_PASSWORD_ERROR: ErrorCategory.ACCESS_DENIED,
    ER_DUP_ENTRY: ErrorCategory.DUPLICATE_ENTRY,
    ER_DUP_ENTRY_WITH_KEY_NAME: ErrorCategory.DUPLICATE_ENTRY,
    ER_NO_SUCH_TABLE: ErrorCategory.NO_SUCH_TABLE,
    ER_CANNOT_ADD_FOREIGN: ErrorCategory.CANNOT_ADD_FOREIGN_KEY,
}
