from .ledger import Ledger, public_view
from .store import AccountStore
from .memory_store import MemoryAccountStore
from .sql_store import SQLAlchemyAccountStore

__all__ = ['Ledger', 'public_view', 'AccountStore', 'MemoryAccountStore', 'SQLAlchemyAccountStore']
