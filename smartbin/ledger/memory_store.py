"""
In-process account store guarded by a single re-entrant lock.
"""

import copy
import datetime
import threading
from contextlib import contextmanager

from ..errors import DuplicateAccount
from ..utils.clock import utcnow
from ..utils.validation import to_money
from .store import MONEY_FIELDS, AccountStore

SCALAR_FIELDS = ('email', 'name', 'role', 'passwordHash', 'walletBalance', 'ecoPoints', 'createdAt')


def _serialize(value):
    if isinstance(value, datetime.datetime):
        return value.isoformat()
    if isinstance(value, dict):
        return {key: _serialize(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_serialize(item) for item in value]
    return value


class MemoryAccountStore(AccountStore):

    def __init__(self):
        self._records = {}
        self._lock = threading.RLock()

    def get(self, account_id):
        with self._lock:
            record = self._records.get(account_id)
            return _serialize(copy.deepcopy(record)) if record is not None else None

    def set(self, account_id, record, overwrite=True):
        with self._lock:
            existing = self._records.get(account_id)
            if existing is not None and not overwrite:
                raise DuplicateAccount()
            if existing is None:
                existing = {
                    'email': account_id,
                    'walletBalance': to_money(0),
                    'ecoPoints': 0,
                    'createdAt': utcnow(),
                    'logs': [],
                    'redemptions': [],
                }
                self._records[account_id] = existing
            for key in SCALAR_FIELDS:
                if key in record:
                    existing[key] = to_money(record[key]) if key in MONEY_FIELDS else record[key]
            existing['id'] = account_id
            existing['email'] = account_id

    def atomic_increment(self, account_id, field, delta, floor=None):
        self._check_balance_field(field)
        with self._lock:
            record = self._records.get(account_id)
            if record is None:
                return False
            if field in MONEY_FIELDS:
                delta = to_money(delta)
            updated = record[field] + delta
            if floor is not None and updated < floor:
                return False
            record[field] = updated
            return True

    def append_to_list(self, account_id, field, item):
        self._check_list_field(field)
        with self._lock:
            record = self._records.get(account_id)
            if record is None:
                return False
            record[field].append(copy.deepcopy(item))
            return True

    def list_all(self):
        with self._lock:
            return [_serialize(copy.deepcopy(record)) for record in self._records.values()]

    @contextmanager
    def atomic(self):
        with self._lock:
            snapshot = copy.deepcopy(self._records)
            try:
                yield
            except BaseException:
                self._records = snapshot
                raise
