# cardano_reputation/reputation.py
import logging
from datetime import datetime, timezone

from cardano_reputation.addresses import dedupe_transactions, parse_wallet_address
from cardano_reputation.metrics import collect_wallet_snapshot, lovelace_to_ada
from cardano_reputation.report_store import format_timestamp
from cardano_reputation.wallet_scorer import aggregate_score, get_reputation_level, score_snapshot

logger = logging.getLogger(__name__)


def build_metrics(snapshot, breakdown):
    """The `metrics` object of a reputation response: sub-scores plus the raw figures behind them."""
    account_info = snapshot.account_info or {}
    first_tx = None
    if snapshot.first_tx_time:
        first_tx = format_timestamp(datetime.fromtimestamp(snapshot.first_tx_time, tz=timezone.utc))

    metrics = breakdown.to_dict()
    metrics.update({
        "totalTransactions": snapshot.tx_count,
        "totalAssets": len(snapshot.assets),
        "totalNFTs": len(snapshot.nfts),
        "firstTransaction": first_tx,
        "currentBalance": lovelace_to_ada(snapshot.balance_lovelace),
        "rewardsSum": lovelace_to_ada(account_info["rewards_sum"]) if account_info.get("rewards_sum") else None,
        "withdrawalsSum": lovelace_to_ada(account_info["withdrawals_sum"]) if account_info.get("withdrawals_sum") else None,
        "poolId": account_info.get("pool_id"),
        "isStaking": bool(account_info.get("active")),
    })
    return metrics


class ReputationService:
    """
    Runs one reputation check end to end. Any fetch error aborts the whole
    check; only the AI insight is allowed to fail quietly.
    """

    def __init__(self, fetcher, report_store, insight_generator):
        self.fetcher = fetcher
        self.report_store = report_store
        self.insight_generator = insight_generator

    def check(self, raw_address, now=None):
        address = parse_wallet_address(raw_address)
        reports = self.report_store.summarize(address.value)

        snapshot = collect_wallet_snapshot(self.fetcher, address)
        breakdown = score_snapshot(snapshot, now=now)
        metrics = build_metrics(snapshot, breakdown)

        insight = self.insight_generator.generate(metrics, dedupe_transactions(snapshot.transactions))
        if insight.error:
            logger.info(f"Continuing without AI insight for {address.value} ({insight.status.value})")

        score = aggregate_score(breakdown)
        logger.info(f"Reputation for {address.value}: {score} ({snapshot.wallet_type})")
        return {
            "input": address.value,
            "stakeAddress": snapshot.stake_address,
            "reputationScore": score,
            "reputationLevel": get_reputation_level(score),
            "walletType": snapshot.wallet_type,
            "metrics": metrics,
            "aiInsight": insight.text,
            "reports": reports,
        }
