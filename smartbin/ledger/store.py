"""
Storage interface the ledger is written against.

Accounts are handled as documents keyed by email:

    {'email', 'name', 'role', 'passwordHash', 'walletBalance', 'ecoPoints',
     'createdAt', 'logs': [...], 'redemptions': [...]}

Balance fields change only through ``atomic_increment`` and history lists only
grow through ``append_to_list``. ``walletBalance`` holds a Decimal in whole
cents; ``ecoPoints`` is an integer. Every mutating call made inside one
``atomic()`` block commits or rolls back as a unit.
"""

import abc

BALANCE_FIELDS = ('walletBalance', 'ecoPoints')
MONEY_FIELDS = ('walletBalance',)
LIST_FIELDS = ('logs', 'redemptions')


class AccountStore(abc.ABC):

    @abc.abstractmethod
    def get(self, account_id):
        """Account document with ``passwordHash``, or None."""

    @abc.abstractmethod
    def set(self, account_id, record, overwrite=True):
        """
        Write the scalar fields of ``record``.

        With ``overwrite=False`` an existing account raises DuplicateAccount.
        Histories in ``record`` are ignored.
        """

    @abc.abstractmethod
    def atomic_increment(self, account_id, field, delta, floor=None):
        """
        Add ``delta`` to a balance field in one step.

        When ``floor`` is given the update only applies if the result stays
        at or above it. Returns False if nothing was updated (unknown account
        or floor violated).
        """

    @abc.abstractmethod
    def append_to_list(self, account_id, field, item):
        """Append an event document to ``logs`` or ``redemptions``."""

    @abc.abstractmethod
    def list_all(self):
        """Every account document, oldest first."""

    @abc.abstractmethod
    def atomic(self):
        """Context manager making the enclosed calls one unit of work."""

    def _check_balance_field(self, field):
        if field not in BALANCE_FIELDS:
            raise ValueError(f"Unknown balance field: {field}")

    def _check_list_field(self, field):
        if field not in LIST_FIELDS:
            raise ValueError(f"Unknown history field: {field}")
