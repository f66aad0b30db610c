"""
Admin read model over all accounts.
"""


class AdminQuery:

    def __init__(self, ledger):
        self.ledger = ledger

    def list_users(self):
        return self.ledger.list_all()

    def stats(self):
        """Aggregate totals across every account"""
        users = self.ledger.list_all()
        return {
            'totalUsers': len(users),
            'totalAdmins': sum(1 for user in users if user.get('role') == 'admin'),
            'totalWalletBalance': sum(user.get('walletBalance', 0) for user in users),
            'totalEcoPoints': sum(user.get('ecoPoints', 0) for user in users),
            'totalScans': sum(len(user.get('logs', [])) for user in users),
            'totalRedemptions': sum(len(user.get('redemptions', [])) for user in users),
        }
