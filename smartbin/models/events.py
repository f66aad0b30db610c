"""
History entries attached to an account. Rows are appended, never updated.
"""

import datetime
from ..core.app import db
from ..utils.clock import utcnow

CATEGORY_MAX_LENGTH = 64


def _parse_date(value):
    if isinstance(value, str):
        return datetime.datetime.fromisoformat(value)
    return value or utcnow()


class EarnEvent(db.Model):
    """A credit from one recycled item"""
    __tablename__ = 'earn_event'

    id = db.Column(db.Integer, primary_key=True)
    account_email = db.Column(db.String(120), db.ForeignKey('account.email'), nullable=False)
    timestamp = db.Column(db.DateTime, default=utcnow, nullable=False)
    waste_category = db.Column(db.String(CATEGORY_MAX_LENGTH), nullable=False)
    reward_amount = db.Column(db.Numeric(10, 2), nullable=False)
    points_amount = db.Column(db.Integer, nullable=False)
    weight_kg = db.Column(db.Float, nullable=True)
    location = db.Column(db.Text, nullable=True)

    __table_args__ = (
        db.Index('idx_earn_event_account', 'account_email'),
        db.Index('idx_earn_event_timestamp', 'timestamp'),
    )

    @classmethod
    def from_document(cls, document):
        return cls(
            timestamp=_parse_date(document.get('date')),
            waste_category=document['wasteCategory'],
            reward_amount=document['amount'],
            points_amount=document['points'],
            weight_kg=document.get('weight'),
            location=document.get('location'),
        )

    def to_document(self):
        return {
            'date': self.timestamp.isoformat(),
            'wasteCategory': self.waste_category,
            'wasteType': self.waste_category,
            'amount': self.reward_amount,
            'points': self.points_amount,
            'weight': self.weight_kg,
            'location': self.location,
        }

    def __repr__(self):
        return f"<EarnEvent {self.waste_category} +{self.reward_amount} for {self.account_email}>"


class RedeemEvent(db.Model):
    """A debit for one redeemed reward"""
    __tablename__ = 'redeem_event'

    id = db.Column(db.Integer, primary_key=True)
    account_email = db.Column(db.String(120), db.ForeignKey('account.email'), nullable=False)
    timestamp = db.Column(db.DateTime, default=utcnow, nullable=False)
    item_name = db.Column(db.String(255), nullable=False)
    cost = db.Column(db.Numeric(10, 2), nullable=False)
    cost_type = db.Column(db.String(10), nullable=False)

    __table_args__ = (
        db.Index('idx_redeem_event_account', 'account_email'),
        db.CheckConstraint('cost > 0', name='ck_redeem_event_cost_positive'),
    )

    @classmethod
    def from_document(cls, document):
        return cls(
            timestamp=_parse_date(document.get('date')),
            item_name=document['item'],
            cost=document['cost'],
            cost_type=document['type'],
        )

    def to_document(self):
        return {
            'date': self.timestamp.isoformat(),
            'item': self.item_name,
            'cost': self.cost,
            'type': self.cost_type,
        }

    def __repr__(self):
        return f"<RedeemEvent {self.item_name} -{self.cost} {self.cost_type} for {self.account_email}>"
