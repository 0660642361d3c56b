"""
Referral settlement service.

Settles captured purchases into two-level referral reward grants and
balance credits.
"""

__version__ = "0.1.0"
