from datetime import date


def month_start(day, months_back=0):
    """First day of the month ``months_back`` months before ``day``'s month."""
    year, month = day.year, day.month - months_back
    while month < 1:
        month += 12
        year -= 1
    return date(year, month, 1)
