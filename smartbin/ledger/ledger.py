"""
Wallet and eco-point ledger.

Owns every balance change: credits from recycled items and debits from
redemptions. Each call is one unit of work on the store; a rejected debit
changes nothing and records nothing.
"""

import logging

from ..errors import AccountNotFound, InsufficientFunds, InsufficientPoints, InvalidRequest
from ..models.role import CostType
from ..utils.clock import utcnow
from ..utils.validation import to_money

logger = logging.getLogger(__name__)

DEBIT_FIELDS = {
    CostType.MONEY.value: ('walletBalance', InsufficientFunds),
    CostType.POINTS.value: ('ecoPoints', InsufficientPoints),
}


def public_view(document):
    """Account document without credentials"""
    document = dict(document)
    document.pop('passwordHash', None)
    return document


class Ledger:

    def __init__(self, store, clock=None):
        self.store = store
        self.clock = clock or utcnow

    def credit(self, account_id, reward_amount, points_amount, waste_category,
               weight_kg=None, location=None):
        """
        Add a reward to the wallet and points to the eco balance, and record
        the EarnEvent. Returns the recorded event.
        """
        reward_amount = to_money(reward_amount)
        event = {
            'date': self.clock(),
            'wasteCategory': waste_category,
            'amount': reward_amount,
            'points': points_amount,
            'weight': weight_kg,
            'location': location,
        }

        with self.store.atomic():
            if not self.store.atomic_increment(account_id, 'walletBalance', reward_amount):
                raise AccountNotFound()
            self.store.atomic_increment(account_id, 'ecoPoints', points_amount)
            self.store.append_to_list(account_id, 'logs', event)

        logger.info(f"Credited {account_id}: +{reward_amount} wallet, +{points_amount} points ({waste_category})")
        return event

    def debit(self, account_id, cost, cost_type, item_name):
        """
        Spend ``cost`` from the wallet (money) or eco points (points) and
        record the RedeemEvent. The balance check and the decrement are one
        conditional update.
        """
        if cost_type not in DEBIT_FIELDS:
            raise InvalidRequest(f"Unknown cost type: {cost_type}")
        field, shortfall = DEBIT_FIELDS[cost_type]
        if cost_type == CostType.MONEY.value:
            cost = to_money(cost)

        event = {
            'date': self.clock(),
            'item': item_name,
            'cost': cost,
            'type': cost_type,
        }

        with self.store.atomic():
            if not self.store.atomic_increment(account_id, field, -cost, floor=0):
                if self.store.get(account_id) is None:
                    raise AccountNotFound()
                logger.warning(f"Redemption of {item_name!r} by {account_id} rejected: {shortfall.message}")
                raise shortfall()
            self.store.append_to_list(account_id, 'redemptions', event)

        logger.info(f"Debited {account_id}: -{cost} {cost_type} for {item_name!r}")
        return event

    def snapshot(self, account_id):
        """Current state of one account"""
        document = self.store.get(account_id)
        if document is None:
            raise AccountNotFound()
        return public_view(document)

    def list_all(self):
        return [public_view(document) for document in self.store.list_all()]
