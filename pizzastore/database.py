import logging
from contextlib import closing
from typing import Sequence

import psycopg
from termcolor import cprint

logger = logging.getLogger(__name__)

DEFAULT_HOST = "localhost"
DEFAULT_PASSWORD = ""


class DataAccessError(Exception):
    """a statement failed or the connection is gone"""


# database layer
class DatabaseManager:
    """own the single connection to the pizza store database

    every statement runs synchronously on that one connection; the caller
    blocks until postgres answers. values come back as text (or none for
    NULL) so callers never depend on driver specific types.
    """
    def __init__(self, conn, driver_error: type[Exception] = psycopg.Error):
        self.conn = conn
        self.driver_error = driver_error

    @classmethod
    def connect(cls, dbname: str, port: str, user: str,
                password: str = DEFAULT_PASSWORD, host: str = DEFAULT_HOST) -> "DatabaseManager":
        """open an autocommit connection to postgres"""
        logger.info("connecting to postgresql://%s@%s:%s/%s", user, host, port, dbname)
        try:
            conn = psycopg.connect(
                host=host, port=port, dbname=dbname, user=user, password=password,
                autocommit=True,
            )
        except psycopg.Error as e:
            raise DataAccessError(str(e)) from e
        return cls(conn)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
        return False

    def close(self):
        """close the connection if it is still open"""
        if self.conn is None:
            return
        try:
            self.conn.close()
        except self.driver_error:
            logger.debug("error while closing connection", exc_info=True)
        self.conn = None

    def _execute(self, sql: str, params: Sequence, fetch: bool):
        """run one statement; return (column names, rows) when fetching"""
        logger.debug("sql: %s params: %r", sql, params)
        try:
            with closing(self.conn.cursor()) as cur:
                if params:
                    cur.execute(sql, params)
                else:
                    cur.execute(sql)
                if not fetch:
                    return None, []
                columns = [d[0] for d in cur.description or ()]
                return columns, cur.fetchall()
        except self.driver_error as e:
            raise DataAccessError(str(e).strip()) from e

    def execute_update(self, sql: str, params: Sequence = ()):
        """run a statement that returns no rows (insert / update / delete / ddl)"""
        self._execute(sql, params, fetch=False)

    def execute_query_rows(self, sql: str, params: Sequence = ()) -> list[list[str | None]]:
        """run a query and return every row as a list of text values"""
        _, rows = self._execute(sql, params, fetch=True)
        return [[None if v is None else str(v) for v in row] for row in rows]

    def execute_query_count(self, sql: str, params: Sequence = ()) -> int:
        """run a query and return how many rows matched"""
        _, rows = self._execute(sql, params, fetch=True)
        return len(rows)

    def execute_query_and_print(self, sql: str, params: Sequence = ()) -> int:
        """dump query results tab separated with a header line; return row count"""
        columns, rows = self._execute(sql, params, fetch=True)
        if rows:
            cprint("\t".join(columns), attrs=["bold"])
        for row in rows:
            print("\t".join("null" if v is None else str(v) for v in row))
        return len(rows)

    def current_sequence_value(self, sequence: str) -> int:
        """current value of a postgres sequence, -1 if there is none"""
        rows = self.execute_query_rows("SELECT currval(CAST(%s AS regclass));", (sequence,))
        if not rows or rows[0][0] is None:
            return -1
        return int(rows[0][0])
