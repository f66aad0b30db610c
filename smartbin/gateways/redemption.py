"""
Redemption gateway.

By default the item cost and type are taken from the caller. With
``enforce_catalog`` the server-held catalog decides both and unknown items
are refused.
"""

from ..errors import InvalidRequest
from ..utils.validation import sanitize_text, validate_cost


class RedemptionGateway:

    def __init__(self, ledger, catalog=None, enforce_catalog=False):
        self.ledger = ledger
        self.catalog = dict(catalog or {})
        self.enforce_catalog = enforce_catalog

    def catalog_items(self):
        return [
            {'item': name, 'cost': cost, 'type': cost_type}
            for name, (cost, cost_type) in self.catalog.items()
        ]

    def redeem(self, identity, item_name, cost, cost_type):
        """
        Spend balance or points on an item.

        Raises InsufficientFunds / InsufficientPoints without touching the
        account when the balance does not cover the cost.
        """
        item_name = sanitize_text(item_name)
        if not item_name:
            raise InvalidRequest("Item is required")

        if self.enforce_catalog:
            if item_name not in self.catalog:
                raise InvalidRequest(f"Unknown reward: {item_name}")
            cost, cost_type = self.catalog[item_name]

        is_valid, message, cost = validate_cost(cost, cost_type)
        if not is_valid:
            raise InvalidRequest(message)

        event = self.ledger.debit(identity.email, cost, cost_type, item_name)
        return {
            'message': f"Redeemed {item_name}",
            'redemption': event,
        }
