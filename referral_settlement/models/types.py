"""
Standard type definitions for database models.

Provides consistent types for monetary fields across all models.
"""

from sqlalchemy import BigInteger

# Money in the smallest currency unit (cents, satoshi, ...)
# Integer arithmetic only, no fractional amounts
MoneyType = BigInteger

# User identifiers, shared by users and every table that references a user
UserIdType = BigInteger
