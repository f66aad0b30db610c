"""
Account model: identity, credentials and ledger balances.
"""

import logging
from decimal import Decimal
from werkzeug.security import generate_password_hash, check_password_hash
from ..core.app import db
from ..utils.clock import utcnow
from .role import AccountRole


class Account(db.Model):
    """Registered user with wallet balance, eco points and history"""
    __tablename__ = 'account'

    email = db.Column(db.String(120), primary_key=True)
    name = db.Column(db.String(120), nullable=False, default='')
    password_hash = db.Column(db.String(256), nullable=False)
    role = db.Column(db.String(20), nullable=False, default=AccountRole.USER.value)
    wallet_balance = db.Column(db.Numeric(10, 2), nullable=False, default=0)
    eco_points = db.Column(db.Integer, nullable=False, default=0)
    created_at = db.Column(db.DateTime, default=utcnow)

    # Histories, in application order
    logs = db.relationship('EarnEvent', backref='account', lazy='select',
                           order_by='EarnEvent.id')
    redemptions = db.relationship('RedeemEvent', backref='account', lazy='select',
                                  order_by='RedeemEvent.id')

    __table_args__ = (
        db.CheckConstraint('wallet_balance >= 0', name='ck_account_wallet_non_negative'),
        db.CheckConstraint('eco_points >= 0', name='ck_account_points_non_negative'),
    )

    @property
    def id(self):
        return self.email

    def set_password(self, password):
        """Set account password hash"""
        self.password_hash = generate_password_hash(password)

    def check_password(self, password):
        """Check password against stored hash"""
        if not self.password_hash:
            return False

        try:
            return check_password_hash(self.password_hash, password)
        except ValueError as e:
            logging.error(f"Password check error: {str(e)}")
            return False

    def is_admin(self):
        return self.role == AccountRole.ADMIN.value

    def to_document(self, include_secret=False):
        """Account as a JSON-ready document"""
        document = {
            'id': self.email,
            'name': self.name,
            'email': self.email,
            'role': self.role,
            'walletBalance': self.wallet_balance if self.wallet_balance is not None else Decimal('0.00'),
            'ecoPoints': self.eco_points or 0,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
            'logs': [event.to_document() for event in self.logs],
            'redemptions': [event.to_document() for event in self.redemptions],
        }
        if include_secret:
            document['passwordHash'] = self.password_hash
        return document

    def __repr__(self):
        return f"<Account {self.email}>"
