"""
Pytest fixtures: a dictionary-backed Blockfrost fake and a Flask app wired
to it with an in-memory report store and AI insight disabled.
"""
import time

import pytest

from cardano_reputation.ai_insight import InsightGenerator
from cardano_reputation.app import create_app
from cardano_reputation.errors import NotFoundError
from cardano_reputation.report_store import InMemoryReportStore

DAY = 60 * 60 * 24


class FakeFetcher:
    """Answers from plain dicts. Missing keys behave like a Blockfrost 404; exception values are raised."""

    def __init__(self, accounts=None, account_transactions=None, account_addresses=None,
                 account_assets=None, addresses=None, address_transactions=None):
        self.accounts = accounts or {}
        self.account_transactions = account_transactions or {}
        self.account_addresses = account_addresses or {}
        self.account_assets = account_assets or {}
        self.addresses = addresses or {}
        self.address_transactions = address_transactions or {}
        self.calls = []

    def _lookup(self, table, key, path):
        self.calls.append(path)
        if key not in table:
            raise NotFoundError(f"Not found on chain: {path}")
        value = table[key]
        if isinstance(value, Exception):
            raise value
        return value

    def get_account(self, stake_address):
        return self._lookup(self.accounts, stake_address, f"accounts/{stake_address}")

    def get_account_transactions(self, stake_address):
        return self._lookup(self.account_transactions, stake_address, f"accounts/{stake_address}/transactions")

    def get_account_addresses(self, stake_address):
        return self._lookup(self.account_addresses, stake_address, f"accounts/{stake_address}/addresses")

    def get_account_assets(self, stake_address):
        return self._lookup(self.account_assets, stake_address, f"accounts/{stake_address}/addresses/assets")

    def get_address(self, address):
        return self._lookup(self.addresses, address, f"addresses/{address}")

    def get_address_transactions(self, address):
        return self._lookup(self.address_transactions, address, f"addresses/{address}/transactions")


def make_transactions(count, first_block_time, step=DAY):
    return [
        {"tx_hash": f"tx{i:04d}", "tx_index": 0, "block_height": 8_000_000 + i, "block_time": first_block_time + i * step}
        for i in range(count)
    ]


@pytest.fixture
def stake_fetcher():
    """A delegating stake account, 400 days old, with two linked payment addresses."""
    first = int(time.time()) - 400 * DAY
    txs = make_transactions(3, first)
    txs.append(dict(txs[1]))  # repeated hash
    return FakeFetcher(
        accounts={
            "stake1uxyz": {
                "stake_address": "stake1uxyz",
                "active": True,
                "active_epoch": 210,
                "controlled_amount": "250000000",
                "rewards_sum": "150000000",
                "withdrawals_sum": "20000000",
                "pool_id": "pool1abc",
            },
        },
        account_transactions={"stake1uxyz": txs},
        account_addresses={"stake1uxyz": ["addr1a", "addr1b"]},
        account_assets={"stake1uxyz": [{"unit": "unitA", "quantity": "1"}] * 3},
        addresses={
            "addr1a": {
                "address": "addr1a",
                "amount": [
                    {"unit": "lovelace", "quantity": "200000000"},
                    {"unit": "unitA", "quantity": "1"},
                    {"unit": "unitB", "quantity": "500"},
                ],
                "stake_address": "stake1uxyz",
                "type": "shelley",
            },
            "addr1b": {
                "address": "addr1b",
                "amount": [
                    {"unit": "lovelace", "quantity": "50000000"},
                    {"unit": "unitA", "quantity": "1"},
                    {"unit": "unitC", "quantity": "1"},
                ],
                "stake_address": "stake1uxyz",
                "type": "shelley",
            },
        },
    )


@pytest.fixture
def payment_fetcher():
    """A payment address without a stake key: 12 transactions over 30 days."""
    first = int(time.time()) - 30 * DAY
    return FakeFetcher(
        addresses={
            "addr1qplain": {
                "address": "addr1qplain",
                "amount": [
                    {"unit": "lovelace", "quantity": "5000000"},
                    {"unit": "unitX", "quantity": "1"},
                ],
                "stake_address": None,
                "type": "shelley",
                "script": False,
            },
        },
        address_transactions={"addr1qplain": make_transactions(12, first, step=DAY * 2)},
    )


@pytest.fixture
def report_store():
    return InMemoryReportStore()


@pytest.fixture
def make_client(report_store):
    def _make(fetcher, insight_generator=None):
        app = create_app(
            fetcher=fetcher,
            report_store=report_store,
            insight_generator=insight_generator or InsightGenerator(api_key=""),
        )
        app.config["TESTING"] = True
        return app.test_client()
    return _make


@pytest.fixture
def client(make_client):
    return make_client(FakeFetcher())
