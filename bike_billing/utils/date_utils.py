"""Date manipulation utilities"""

from datetime import datetime, timedelta


def hours_before(moment: datetime, hours: float) -> datetime:
    """Point in time `hours` before `moment`"""
    return moment - timedelta(hours=hours)


def not_before(moment: datetime, floor: datetime) -> datetime:
    """Clamp `moment` so it never precedes `floor` (clock skew between hosts)"""
    return moment if moment >= floor else floor
