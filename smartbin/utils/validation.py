"""
Data validation utilities for API requests.
"""

import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from ..models.role import CostType

EMAIL_PATTERN = r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$'

# Money columns are Numeric(10, 2)
CENT = Decimal('0.01')
MAX_COST = Decimal('99999999.99')


def to_money(value):
    """Amount as a Decimal rounded to whole cents"""
    return Decimal(str(value)).quantize(CENT, rounding=ROUND_HALF_UP)


def validate_email(email):
    """Validate email format"""
    if not email or not isinstance(email, str):
        return False, "Email is required"

    email = email.strip().lower()

    if len(email) > 120:
        return False, "Email too long"

    if not re.match(EMAIL_PATTERN, email):
        return False, "Invalid email format"

    return True, "Valid"


def validate_name(name):
    """Validate display name"""
    if not name or not isinstance(name, str) or not name.strip():
        return False, "Name is required"

    if len(name.strip()) > 120:
        return False, "Name too long"

    return True, "Valid"


def validate_password(password, min_length=1):
    """Validate password length"""
    if not password or not isinstance(password, str):
        return False, "Password is required"

    if len(password) < min_length:
        return False, f"Password must be at least {min_length} characters long"

    return True, "Valid"


def validate_cost(cost, cost_type):
    """
    Validate a redemption cost and type.

    Money costs are rounded to cents; points costs must be whole numbers.

    Returns:
        tuple: (is_valid, message, cost as Decimal / int or None)
    """
    valid_types = [member.value for member in CostType]
    if cost_type not in valid_types:
        return False, f"Type must be one of: {', '.join(valid_types)}", None

    if isinstance(cost, bool) or cost is None:
        return False, "Cost must be a number", None

    try:
        amount = Decimal(str(cost))
    except (InvalidOperation, ValueError):
        return False, "Cost must be a number", None

    if not amount.is_finite() or amount <= 0:
        return False, "Cost must be greater than zero", None

    if amount > MAX_COST:
        return False, "Cost too large", None

    if cost_type == CostType.POINTS.value:
        if amount != amount.to_integral_value():
            return False, "Points cost must be a whole number", None
        return True, "Valid", int(amount)

    amount = amount.quantize(CENT, rounding=ROUND_HALF_UP)
    if amount <= 0:
        return False, "Cost must be at least 0.01", None
    return True, "Valid", amount


def sanitize_text(value, max_length=255):
    """Strip and truncate optional free text"""
    if value is None:
        return None
    value = str(value).strip()
    return value[:max_length] or None
