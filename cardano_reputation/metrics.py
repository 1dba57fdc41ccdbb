# cardano_reputation/metrics.py
"""
Metrics extraction.

Turns the two Blockfrost access patterns (stake account vs. payment address)
into a single WalletSnapshot, which the scorer and the response builder read
without caring which branch produced it.
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Set

from cardano_reputation.addresses import (
    STAKE_WALLET,
    PaymentAddress,
    StakeAddress,
    WalletAddress,
    classify_wallet_type,
)
from cardano_reputation.errors import NotFoundError, StakeAccountNotFoundError, UpstreamError

logger = logging.getLogger(__name__)

LOVELACE_UNIT = "lovelace"
LOVELACE_PER_ADA = 1_000_000

STAKE_NOT_FOUND_MESSAGE = "This is a stake account (starts with stake), but not found on chain."


@dataclass
class WalletSnapshot:
    stake_address: Optional[str]
    wallet_type: str
    tx_count: int = 0
    transactions: List[Dict[str, Any]] = field(default_factory=list)
    assets: Set[str] = field(default_factory=set)
    nfts: Set[str] = field(default_factory=set)
    first_tx_time: Optional[int] = None
    balance_lovelace: int = 0
    account_info: Optional[Dict[str, Any]] = None
    mint_count: int = 0


def lovelace_to_ada(value) -> float:
    return int(value or 0) / LOVELACE_PER_ADA


def _collect_amounts(amounts, assets, nfts):
    """Add non-ADA units to `assets` (and to `nfts` when quantity is exactly one). Returns lovelace."""
    lovelace = 0
    for amount in amounts or []:
        if amount.get("unit") == LOVELACE_UNIT:
            lovelace += int(amount.get("quantity") or 0)
            continue
        assets.add(amount["unit"])
        if amount.get("quantity") == "1":
            nfts.add(amount["unit"])
    return lovelace


def _first_block_time(transactions):
    if transactions:
        return transactions[0].get("block_time")
    return None


def _count_minted_assets(fetcher, stake_address):
    try:
        return len(fetcher.get_account_assets(stake_address) or [])
    except Exception as e:
        logger.warning(f"Asset list lookup failed for {stake_address}: {e}. Counting 0.")
        return 0


def _snapshot_for_stake(fetcher, address: StakeAddress) -> WalletSnapshot:
    stake_address = address.value
    try:
        account_info = fetcher.get_account(stake_address)
    except NotFoundError as e:
        raise StakeAccountNotFoundError(STAKE_NOT_FOUND_MESSAGE) from e
    except UpstreamError as e:
        # Blockfrost answers 400 for stake keys it cannot decode.
        if e.upstream_status == 400:
            raise StakeAccountNotFoundError(STAKE_NOT_FOUND_MESSAGE) from e
        raise

    transactions = fetcher.get_account_transactions(stake_address) or []
    snapshot = WalletSnapshot(
        stake_address=stake_address,
        wallet_type=STAKE_WALLET,
        tx_count=account_info.get("tx_count") or len(transactions),
        transactions=transactions,
        first_tx_time=_first_block_time(transactions),
        balance_lovelace=int(account_info.get("controlled_amount") or 0),
        account_info=account_info,
    )

    linked = fetcher.get_account_addresses(stake_address)
    logger.info(f"Collecting assets from {len(linked)} addresses linked to {stake_address}")
    for linked_address in linked:
        info = fetcher.get_address(linked_address)
        _collect_amounts(info.get("amount"), snapshot.assets, snapshot.nfts)

    snapshot.mint_count = _count_minted_assets(fetcher, stake_address)
    return snapshot


def _snapshot_for_payment(fetcher, address: PaymentAddress) -> WalletSnapshot:
    address_info = fetcher.get_address(address.value)
    stake_address = address_info.get("stake_address")

    account_info = None
    if stake_address:
        try:
            account_info = fetcher.get_account(stake_address)
        except (NotFoundError, UpstreamError) as e:
            logger.warning(f"Stake account {stake_address} unavailable: {e.message}")
            account_info = None

    transactions = fetcher.get_address_transactions(address.value) or []
    snapshot = WalletSnapshot(
        stake_address=stake_address,
        wallet_type=STAKE_WALLET,
        tx_count=len(transactions),
        transactions=transactions,
        first_tx_time=_first_block_time(transactions),
        account_info=account_info,
    )
    snapshot.balance_lovelace = _collect_amounts(address_info.get("amount"), snapshot.assets, snapshot.nfts)

    if account_info:
        snapshot.balance_lovelace = int(account_info.get("controlled_amount") or snapshot.balance_lovelace)
        snapshot.tx_count = account_info.get("tx_count") or snapshot.tx_count
        snapshot.mint_count = _count_minted_assets(fetcher, stake_address)
    else:
        snapshot.wallet_type = classify_wallet_type(address_info, snapshot.tx_count, False)
    return snapshot


def collect_wallet_snapshot(fetcher, address: WalletAddress) -> WalletSnapshot:
    """
    Fetch everything the scorer needs for `address`.

    Only an unknown stake account surfaces as not-found. A 404 anywhere else
    in the chain (unused payment address, linked address, transaction list)
    is reported as an upstream failure, so the whole check fails with 500.
    """
    if isinstance(address, StakeAddress):
        collect = _snapshot_for_stake
    elif isinstance(address, PaymentAddress):
        collect = _snapshot_for_payment
    else:
        raise TypeError(f"Unsupported address variant: {type(address).__name__}")

    try:
        return collect(fetcher, address)
    except StakeAccountNotFoundError:
        raise
    except NotFoundError as e:
        raise UpstreamError(e.message, upstream_status=404) from e
