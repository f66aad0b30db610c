"""
Per-account dashboard summaries derived from the earn history.
"""

import datetime

from ..utils.clock import utcnow

PLASTIC = 'Plastic'


def _event_date(event):
    value = event.get('date')
    if isinstance(value, str):
        value = datetime.datetime.fromisoformat(value)
    return value.date() if value else None


def earnings_by_day(account, days=7, today=None):
    """Summed wallet rewards for each of the last ``days`` days, oldest first"""
    today = today or utcnow().date()
    totals = {}
    for event in account.get('logs', []):
        day = _event_date(event)
        if day is not None:
            totals[day] = totals.get(day, 0) + (event.get('amount') or 0)

    earnings = []
    for offset in range(days - 1, -1, -1):
        day = today - datetime.timedelta(days=offset)
        earnings.append({
            'name': day.strftime('%a'),
            'date': day.isoformat(),
            'earnings': totals.get(day, 0),
        })
    return earnings


def waste_breakdown(account):
    """Count of plastic and non-plastic deposits"""
    logs = account.get('logs', [])
    plastic = sum(1 for event in logs if event.get('wasteCategory') == PLASTIC)
    return [
        {'name': 'Plastic', 'value': plastic},
        {'name': 'Non-Plastic', 'value': len(logs) - plastic},
    ]


def summarize(account, today=None):
    return {
        'earnings': earnings_by_day(account, today=today),
        'waste': waste_breakdown(account),
        'totalScans': len(account.get('logs', [])),
    }
