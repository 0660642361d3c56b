"""
Business logic constants for referral settlement.

Central location for the reward percentages and purchase status values.
Status strings are shared with the purchase intake side and must not change.
"""

# Reward percentages per referral level (whole percent of purchase amount)
LEVEL_1_PERCENT = 10
LEVEL_2_PERCENT = 5

REFERRAL_PERCENTS = {
    1: LEVEL_1_PERCENT,  # direct referrer
    2: LEVEL_2_PERCENT,  # referrer's referrer
}

# Purchase statuses
PURCHASE_STATUS_AUTHORIZED = "authorized"
PURCHASE_STATUS_CAPTURED = "captured"
PURCHASE_STATUS_REFUNDED = "refunded"
PURCHASE_STATUS_VOIDED = "voided"

PURCHASE_STATUSES = (
    PURCHASE_STATUS_AUTHORIZED,
    PURCHASE_STATUS_CAPTURED,
    PURCHASE_STATUS_REFUNDED,
    PURCHASE_STATUS_VOIDED,
)
