"""
Percent calculator.

Integer reward math in the smallest currency unit.
"""


def percent_of(amount: int, percent: int) -> int:
    """
    Calculate a whole-percent share of an amount, truncated down.

    Python integers do not overflow, so amount * percent is exact for any
    stored amount.

    Args:
        amount: Base amount in the smallest currency unit
        percent: Whole percent (e.g. 10 for 10%)

    Returns:
        floor(amount * percent / 100)

    Example:
        >>> percent_of(999, 10)
        99
    """
    return (amount * percent) // 100
