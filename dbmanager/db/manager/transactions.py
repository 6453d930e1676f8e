# =============================================================================
# File:        dbmanager/db/manager/transactions.py
# Purpose:     Transactions (nested levels become savepoints)
# =============================================================================
from __future__ import annotations

from dbmanager.db.query import DBConnectionError


class DBTransactionsMixin:
    def transaction(self):
        """
        ``with db.transaction(): ...`` commits on success and rolls back
        (re-raising) on error. Unlike the data operations this raises when
        no connection can be established.

        The block holds the connection lock: ``*_async`` work submitted
        inside it only runs once the block ends, so calling ``.result()``
        on such a Future inside the block deadlocks.
        """
        if not self.ensure_connection():
            raise DBConnectionError(f"cannot open a transaction on {self.config.database}")
        return self.driver.transaction()
