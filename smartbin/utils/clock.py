"""
Timestamps for stored records.
"""

import datetime


def utcnow():
    """Current UTC time as a naive datetime, matching the DateTime columns"""
    return datetime.datetime.now(datetime.timezone.utc).replace(tzinfo=None)
