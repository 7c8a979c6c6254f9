"""Balance effects of transactions on accounts.

An effect maps account IDs to the signed change a transaction makes to their
balances. Effects are kept in insertion order: the source account always
comes before the destination account, and writes follow that order.
"""

import logging
from decimal import Decimal
from typing import Sequence

from walletbook.domain.classification import classify
from walletbook.domain.entities import Platform, Transaction, TransactionType

logger = logging.getLogger(__name__)

Effect = dict[int, Decimal]


def transaction_effect(txn: Transaction) -> Effect:
    """Return the balance change a transaction applies when created.

    The source account moves by the signed amount. A transfer additionally
    credits its destination with the absolute amount.
    """
    effect: Effect = {txn.account_id: txn.amount}
    if (
        classify(txn.category) == TransactionType.TRANSFER
        and txn.destination_account_id is not None
    ):
        credit = abs(txn.amount)
        effect[txn.destination_account_id] = effect.get(txn.destination_account_id, Decimal("0")) + credit
    return effect


def reverse_effect(effect: Effect) -> Effect:
    """Return the effect that undoes ``effect``."""
    return {account_id: -delta for account_id, delta in effect.items()}


def merge_effects(*effects: Effect) -> Effect:
    """Combine effects, dropping accounts whose net change is zero."""
    merged: Effect = {}
    for effect in effects:
        for account_id, delta in effect.items():
            merged[account_id] = merged.get(account_id, Decimal("0")) + delta
    return {account_id: delta for account_id, delta in merged.items() if delta != 0}


def update_effect(old: Transaction, new: Transaction) -> Effect:
    """Return the effect of editing ``old`` into ``new``.

    The old effect is reversed before the new one is applied, so moving a
    transaction between accounts or changing its amount leaves every balance
    equal to the sum of its transaction history.
    """
    return merge_effects(reverse_effect(transaction_effect(old)), transaction_effect(new))


def apply_transaction_effect(effect: Effect, accounts: Sequence[Platform]) -> dict[int, Decimal]:
    """Compute new balances for the accounts touched by ``effect``.

    Accounts that no longer exist (deleted while still referenced) are
    skipped.

    Returns:
        Mapping of account ID to new balance, in effect order
    """
    by_id = {account.id: account for account in accounts}
    balances: dict[int, Decimal] = {}
    for account_id, delta in effect.items():
        account = by_id.get(account_id)
        if account is None:
            logger.warning("Skipping balance change for missing account %s", account_id)
            continue
        balances[account_id] = account.balance + delta
    return balances
