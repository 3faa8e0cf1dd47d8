"""
MySQL connector.

Opens PyMySQL connections from ``Settings`` with retry and exponential
backoff, wraps each one in a ``Database`` and keeps count of the connections
it has opened that are still alive.
"""

from __future__ import annotations

import time
from contextlib import contextmanager
from typing import Generator, Optional

import pymysql
from pymysql.cursors import DictCursor

from sql_plus.config.settings import Settings, get_settings
from sql_plus.infrastructure.sql.core.escaper import Escaper
from sql_plus.infrastructure.sql.dialects import SQLDialect, get_dialect
from sql_plus.utils.logging import get_logger

from .database import Database
from .error_codes import DEFAULT_CATEGORIES, ErrorCategory
from .error_translator import driver_error_parts
from .exceptions import AccessDeniedError, DatabaseError, TooManyConnectionsError

logger = get_logger(__name__)


class MySQLConnector:
    """
    Connector for a MySQL server.

    Uses SQLPLUS_MYSQL_* environment variables (through ``Settings``) for
    connection configuration.

    Example:
        >>> connector = MySQLConnector()
        >>> with connector.get_connection() as db:
        ...     db.count("users")
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        dialect: Optional[SQLDialect] = None,
    ):
        """
        Initialize the MySQL connector.

        Args:
            settings: Connection settings; ``get_settings()`` if omitted
            dialect: Dialect handed to every ``Database``; defaults to
                ``Settings.dialect``
        """
        self.settings = settings if settings is not None else get_settings()
        self.dialect = dialect if dialect is not None else get_dialect(self.settings.dialect)
        self.open_connections = 0

        logger.info(
            "mysql_connector.initialized",
            host=self.settings.mysql_host,
            port=self.settings.mysql_port,
            database=self.settings.mysql_database,
            user=self.settings.mysql_user,
            connect_timeout=self.settings.connect_timeout,
            read_timeout=self.settings.read_timeout,
            max_retries=self.settings.max_retries,
        )

    def connect(self) -> Database:
        """
        Open a new connection.

        Returns:
            Database wrapping the connection; close it to release it

        Raises:
            AccessDeniedError: Credentials rejected (never retried)
            TooManyConnectionsError: Server connection limit reached
            DatabaseError: Connection failed after all retries
        """
        settings = self.settings
        last_error: Optional[pymysql.MySQLError] = None

        for attempt in range(1, settings.max_retries + 1):
            try:
                logger.debug(
                    "mysql_connector.attempt",
                    attempt=attempt,
                    max_retries=settings.max_retries,
                )
                conn = pymysql.connect(
                    host=settings.mysql_host,
                    port=settings.mysql_port,
                    user=settings.mysql_user,
                    password=settings.mysql_password,
                    database=settings.mysql_database,
                    charset=settings.mysql_charset,
                    cursorclass=DictCursor,
                    connect_timeout=settings.connect_timeout,
                    read_timeout=settings.read_timeout,
                    init_command=self._init_command(),
                    autocommit=True,
                )
            except pymysql.MySQLError as exc:
                code, message = driver_error_parts(exc)
                category = DEFAULT_CATEGORIES.get(code) if code is not None else None
                if category is ErrorCategory.ACCESS_DENIED:
                    logger.error("mysql_connector.access_denied", code=code)
                    raise self._access_denied(code) from exc
                if category is ErrorCategory.TOO_MANY_CONNECTIONS:
                    logger.error(
                        "mysql_connector.too_many_connections",
                        open_connections=self.open_connections,
                    )
                    raise TooManyConnectionsError(
                        f"Too many connections: {self.open_connections}", code=code
                    ) from exc

                last_error = exc
                logger.warning(
                    "mysql_connector.attempt_failed",
                    attempt=attempt,
                    max_retries=settings.max_retries,
                    error_type=type(exc).__name__,
                    error=message,
                )
                if attempt < settings.max_retries:
                    backoff_time = settings.retry_backoff_base**attempt
                    logger.info("mysql_connector.retry", backoff_seconds=backoff_time)
                    time.sleep(backoff_time)
                continue

            self.open_connections += 1
            logger.info(
                "mysql_connector.connected",
                attempt=attempt,
                open_connections=self.open_connections,
            )
            return Database(conn, self.dialect, on_close=self._release)

        logger.error(
            "mysql_connector.exhausted",
            max_retries=settings.max_retries,
            error=str(last_error),
        )
        raise DatabaseError(
            f"Failed to connect to MySQL after {settings.max_retries} attempts. "
            f"Last error: {last_error}"
        ) from last_error

    @contextmanager
    def get_connection(self) -> Generator[Database, None, None]:
        """
        Get a connection with proper cleanup.

        Yields:
            Database, closed when the block exits
        """
        db = self.connect()
        try:
            yield db
        finally:
            db.close()

    def _release(self, database: Database) -> None:
        self.open_connections -= 1
        logger.debug("mysql_connector.released", open_connections=self.open_connections)

    def _init_command(self) -> Optional[str]:
        if not self.settings.mysql_time_zone:
            return None
        return Escaper().format(
            "SET SESSION time_zone=?", [self.settings.mysql_time_zone]
        )

    def _access_denied(self, code: Optional[int]) -> AccessDeniedError:
        settings = self.settings
        using_password = "YES" if settings.mysql_password else "NO"
        return AccessDeniedError(
            f"Access denied for user '{settings.mysql_user}' "
            f"(using password: {using_password}). "
            f"host={settings.mysql_host}:{settings.mysql_port}",
            code=code,
        )
