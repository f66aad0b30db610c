"""
Waste-classification gateway.

The category arrives as decided by the classifier on the caller's device and
is trusted as supplied: anything not in the reward schedule is paid at the
default (non-plastic) tier.
"""

import logging

logger = logging.getLogger(__name__)


class WasteGateway:

    def __init__(self, ledger, schedule, default_reward, item_weight_kg=None):
        self.ledger = ledger
        self.schedule = dict(schedule)
        self.default_reward = tuple(default_reward)
        self.item_weight_kg = item_weight_kg

    def reward_for(self, waste_category):
        """(wallet reward, eco points) for a category"""
        return tuple(self.schedule.get(waste_category, self.default_reward))

    def submit_waste(self, identity, waste_category, location=None):
        """Credit the caller for one deposited item. Returns the reward applied."""
        reward, points = self.reward_for(waste_category)
        if waste_category not in self.schedule:
            logger.debug(f"Category {waste_category!r} paid at the default tier")

        self.ledger.credit(
            identity.email,
            reward,
            points,
            waste_category,
            weight_kg=self.item_weight_kg,
            location=location,
        )
        return reward
