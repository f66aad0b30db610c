"""
Account roles.
"""

import enum


class AccountRole(enum.Enum):
    """Account role enumeration"""
    USER = "user"
    ADMIN = "admin"


class CostType(enum.Enum):
    """Balance a redemption is paid from"""
    MONEY = "money"
    POINTS = "points"
