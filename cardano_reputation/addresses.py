# cardano_reputation/addresses.py
"""
Wallet address variants and the helpers that only depend on the address.

The raw input string is resolved once, at the HTTP boundary, into either a
StakeAddress or a PaymentAddress. Everything downstream dispatches on the
variant instead of re-checking the string prefix.
"""
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union

from cardano_reputation.errors import ValidationError

STAKE_PREFIX = "stake"

STAKE_WALLET = "Stake Wallet"
ENTERPRISE_WALLET = "Enterprise Wallet"
SCRIPT_WALLET = "Script Wallet"
FRESH_WALLET = "Fresh Wallet"
NORMAL_WALLET = "Normal Wallet"
UNKNOWN_WALLET = "Unknown"


@dataclass(frozen=True)
class StakeAddress:
    value: str


@dataclass(frozen=True)
class PaymentAddress:
    value: str


WalletAddress = Union[StakeAddress, PaymentAddress]


def parse_wallet_address(raw) -> WalletAddress:
    """Resolve user input into an address variant. Raises ValidationError when empty."""
    if not raw or not isinstance(raw, str):
        raise ValidationError("Wallet address is required")
    if raw.startswith(STAKE_PREFIX):
        return StakeAddress(raw)
    return PaymentAddress(raw)


def classify_wallet_type(address_info: Optional[Dict[str, Any]], tx_count: int, is_stake_address: bool) -> str:
    """
    Fixed-priority wallet type: stake input first, then the address subtype
    reported by Blockfrost, then whether the address has ever transacted.
    """
    if is_stake_address:
        return STAKE_WALLET
    if not address_info:
        return UNKNOWN_WALLET

    address_type = address_info.get("type")
    if address_type == "stake":
        return STAKE_WALLET
    if address_type == "enterprise":
        return ENTERPRISE_WALLET
    if address_type == "script" or address_info.get("script") is True:
        return SCRIPT_WALLET
    if tx_count == 0:
        return FRESH_WALLET
    return NORMAL_WALLET


def dedupe_transactions(transactions: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Drop repeated tx_hash entries, keeping the first occurrence and the original order."""
    seen = set()
    unique = []
    for tx in transactions:
        tx_hash = tx.get("tx_hash")
        if tx_hash in seen:
            continue
        seen.add(tx_hash)
        unique.append(tx)
    return unique
