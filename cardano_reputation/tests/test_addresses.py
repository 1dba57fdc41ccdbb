import pytest

from cardano_reputation.addresses import (
    PaymentAddress,
    StakeAddress,
    classify_wallet_type,
    dedupe_transactions,
    parse_wallet_address,
)
from cardano_reputation.errors import ValidationError


def test_parse_wallet_address_variants():
    assert parse_wallet_address("stake1uxyz") == StakeAddress("stake1uxyz")
    assert parse_wallet_address("stake_test1uabc") == StakeAddress("stake_test1uabc")
    assert parse_wallet_address("addr1qxyz") == PaymentAddress("addr1qxyz")


@pytest.mark.parametrize("raw", [None, "", 42])
def test_parse_wallet_address_rejects_empty(raw):
    with pytest.raises(ValidationError, match="Wallet address is required"):
        parse_wallet_address(raw)


def test_stake_input_wins_over_everything():
    assert classify_wallet_type({"type": "script"}, 0, True) == "Stake Wallet"
    assert classify_wallet_type(None, 0, True) == "Stake Wallet"


def test_classify_wallet_type_priority():
    assert classify_wallet_type(None, 5, False) == "Unknown"
    assert classify_wallet_type({"type": "stake"}, 0, False) == "Stake Wallet"
    assert classify_wallet_type({"type": "enterprise"}, 0, False) == "Enterprise Wallet"
    assert classify_wallet_type({"type": "script"}, 3, False) == "Script Wallet"
    assert classify_wallet_type({"type": "shelley", "script": True}, 3, False) == "Script Wallet"
    assert classify_wallet_type({"type": "shelley"}, 0, False) == "Fresh Wallet"
    assert classify_wallet_type({"type": "shelley"}, 4, False) == "Normal Wallet"


def test_classify_wallet_type_is_deterministic():
    info = {"type": "shelley", "script": False}
    results = {classify_wallet_type(info, 7, False) for _ in range(5)}
    assert results == {"Normal Wallet"}


def test_dedupe_keeps_first_occurrence_in_order():
    txs = [
        {"tx_hash": "a", "block_time": 1},
        {"tx_hash": "b", "block_time": 2},
        {"tx_hash": "a", "block_time": 3},
        {"tx_hash": "c", "block_time": 4},
        {"tx_hash": "b", "block_time": 5},
    ]
    unique = dedupe_transactions(txs)
    assert [tx["tx_hash"] for tx in unique] == ["a", "b", "c"]
    assert unique[0]["block_time"] == 1
    assert unique[1]["block_time"] == 2


def test_dedupe_empty():
    assert dedupe_transactions([]) == []
