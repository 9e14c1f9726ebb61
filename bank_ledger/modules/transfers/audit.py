"""Construction of audit records for failed transfer attempts."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from bank_ledger.modules.accounts.models import Account

from .models import Transfer, TransferRequest, TransferStatus


def failure_description(description: Optional[str], reason: str, accounts_resolved: bool) -> str:
    if accounts_resolved and description:
        return f"{description} - FAILED: {reason}"
    return f"FAILED: {reason}"


def failed_transfer(
    request: TransferRequest,
    source: Optional[Account],
    destination: Optional[Account],
    reason: str,
    created_at: datetime,
) -> Transfer:
    """Build the FAILED record left behind by a rejected transfer.

    Whatever accounts could be resolved are referenced. When both sides
    resolve to the same account only the source is kept, since a record may
    never reference one account on both sides.
    """
    source_id = source.id if source is not None else None
    destination_id = destination.id if destination is not None else None
    if source_id is not None and source_id == destination_id:
        destination_id = None

    return Transfer(
        id=None,
        source_account_id=source_id,
        destination_account_id=destination_id,
        amount=request.amount,
        description=failure_description(
            request.description,
            reason,
            accounts_resolved=source is not None and destination is not None,
        ),
        status=TransferStatus.FAILED,
        created_at=created_at,
    )
