"""
Database models for the SmartBin rewards backend.
"""

from .account import Account
from .events import EarnEvent, RedeemEvent
from .role import AccountRole, CostType

__all__ = ['Account', 'EarnEvent', 'RedeemEvent', 'AccountRole', 'CostType']
