"""
Account store on Flask-SQLAlchemy.

Balance changes are single ``UPDATE ... SET col = col + :delta`` statements,
optionally guarded by ``WHERE col + :delta >= :floor``, so concurrent requests
on the same account never lose an update and a debit cannot overdraw.
Wallet arithmetic is rounded to cents in SQL, since SQLite keeps NUMERIC
values as binary floats.
"""

from contextlib import contextmanager

from sqlalchemy import func, update
from sqlalchemy.exc import IntegrityError

from ..errors import DuplicateAccount
from ..models import Account, EarnEvent, RedeemEvent
from ..utils.validation import to_money
from .store import MONEY_FIELDS, AccountStore


BALANCE_COLUMNS = {
    'walletBalance': Account.wallet_balance,
    'ecoPoints': Account.eco_points,
}

MONEY_SCALE = 2

LIST_MODELS = {
    'logs': EarnEvent,
    'redemptions': RedeemEvent,
}

SCALAR_COLUMNS = {
    'name': 'name',
    'role': 'role',
    'passwordHash': 'password_hash',
    'walletBalance': 'wallet_balance',
    'ecoPoints': 'eco_points',
}


class SQLAlchemyAccountStore(AccountStore):

    def __init__(self, db):
        self.db = db

    @property
    def session(self):
        return self.db.session

    def get(self, account_id):
        account = self.session.get(Account, account_id)
        if account is None:
            return None
        # Other sessions may have moved the balances since this one loaded them
        self.session.refresh(account)
        return account.to_document(include_secret=True)

    def set(self, account_id, record, overwrite=True):
        account = self.session.get(Account, account_id)
        if account is not None and not overwrite:
            raise DuplicateAccount()
        if account is None:
            account = Account(email=account_id, wallet_balance=0, eco_points=0)
            self.session.add(account)
        for key, attribute in SCALAR_COLUMNS.items():
            if key in record:
                setattr(account, attribute, record[key])
        try:
            self.session.flush()
        except IntegrityError:
            # Another request registered the same email first
            self.session.rollback()
            raise DuplicateAccount()

    def atomic_increment(self, account_id, field, delta, floor=None):
        self._check_balance_field(field)
        column = BALANCE_COLUMNS[field]

        if field in MONEY_FIELDS:
            updated = func.round(column + to_money(delta), MONEY_SCALE, type_=column.type)
        else:
            updated = column + delta

        stmt = (
            update(Account)
            .where(Account.email == account_id)
            .values({column.key: updated})
        )
        if floor is not None:
            stmt = stmt.where(updated >= floor)

        result = self.session.execute(stmt.execution_options(synchronize_session=False))
        return result.rowcount == 1

    def append_to_list(self, account_id, field, item):
        self._check_list_field(field)
        account = self.session.get(Account, account_id)
        if account is None:
            return False
        getattr(account, field).append(LIST_MODELS[field].from_document(item))
        self.session.flush()
        return True

    def list_all(self):
        accounts = Account.query.order_by(Account.created_at, Account.email).populate_existing().all()
        return [account.to_document(include_secret=True) for account in accounts]

    @contextmanager
    def atomic(self):
        try:
            yield
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise

