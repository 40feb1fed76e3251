"""Map wallet/transaction failures to user notifications."""
from __future__ import annotations

from ..models import Notification

USER_REJECTED_CODES = (4001, "ACTION_REJECTED")


def classify_submission_error(error: BaseException) -> Notification:
    """Build the notification shown when a borrow transaction fails."""
    code = getattr(error, "code", None)
    message = str(error)
    lowered = message.lower()

    if code in USER_REJECTED_CODES or "user rejected" in lowered or "user denied" in lowered:
        return Notification(
            title="Transaction rejected",
            type="warning",
            description="You rejected the transaction in your wallet.",
        )

    if "insufficient funds" in lowered:
        return Notification(
            title="Insufficient funds",
            type="error",
            description="Your balance does not cover the collateral and gas.",
        )

    return Notification(
        title="Transaction failed",
        type="error",
        description=message or error.__class__.__name__,
    )
