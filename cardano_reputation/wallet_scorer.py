# cardano_reputation/wallet_scorer.py
"""
This module defines the heuristic reputation score for a Cardano wallet.
It is a fixed rule set, not a trained model: eight independent sub-scores
are summed and the total is clamped to the 0-100 range.
"""
from dataclasses import asdict, dataclass
from datetime import datetime, timezone

from cardano_reputation.metrics import lovelace_to_ada

# Define scoring constants
MIN_SCORE = 0
MAX_SCORE = 100
SECONDS_PER_DAY = 60 * 60 * 24

# Reputation bands (lower bound, label). The client colours results with the same thresholds.
REPUTATION_LEVELS = [
    (80, "Very Trustworthy ✅"),
    (50, "Trustworthy ☑️"),
    (20, "Average ⚠️"),
]
LOWEST_REPUTATION_LEVEL = "High Risk 🔴"


@dataclass
class ScoreBreakdown:
    ageScore: int = 0
    transactionScore: int = 0
    tokenDiversityScore: int = 0
    nftActivityScore: int = 0
    stakingScore: int = 0
    rewardScore: int = 0
    spamScore: int = 0
    activityScore: int = 0

    def total(self):
        return aggregate_score(self)

    def to_dict(self):
        return asdict(self)


def days_since(block_time, now=None):
    """Days between a unix block time and `now` (defaults to the current UTC time)."""
    now = now or datetime.now(timezone.utc)
    return (now.timestamp() - block_time) / SECONDS_PER_DAY


def calculate_age_score(age_days):
    if age_days > 365:
        return 20
    if age_days > 90:
        return 10
    if age_days < 7:
        return -20
    return 0


def calculate_transaction_score(transaction_count):
    if transaction_count > 10000:
        return 20
    if transaction_count > 1000:
        return 15
    if transaction_count > 100:
        return 10
    if transaction_count > 10:
        return 5
    return 0


def calculate_token_diversity_score(token_count):
    if token_count > 100:
        return 10
    if token_count > 20:
        return 7
    if token_count > 5:
        return 5
    if token_count >= 2:
        return 2
    return 0


def calculate_nft_activity_score(nft_count):
    if nft_count > 100:
        return 10
    if nft_count > 20:
        return 7
    if nft_count > 5:
        return 5
    if nft_count > 1:
        return 2
    return 0


def calculate_staking_score(account_info):
    """Delegation is active (+10) or registered but waiting for its first epoch (+5)."""
    if not account_info:
        return 0
    if account_info.get("active"):
        return 10
    if account_info.get("active_epoch"):
        return 5
    return 0


def calculate_reward_score(account_info):
    rewards_ada = lovelace_to_ada((account_info or {}).get("rewards_sum"))
    if rewards_ada > 100:
        return 5
    if rewards_ada > 10:
        return 2
    return 0


def calculate_spam_score(asset_count, mint_count=0):
    # mint_count is collected but not weighted yet.
    if asset_count > 1000:
        return -20
    if asset_count > 500:
        return -10
    return 0


def calculate_activity_score(transaction_count, age_days):
    """
    Rewards regular use and penalises bursts that look like spam.

    Args:
        transaction_count (int): Transactions seen for the wallet.
        age_days (float | None): Days since the first transaction, None when unknown.

    Returns:
        int: +5 for 0.5 < tx/day < 10, -5 for tx/day >= 10, otherwise 0.
    """
    if transaction_count <= 0 or age_days is None:
        return 0
    frequency = transaction_count / age_days if age_days != 0 else float("inf")
    if 0.5 < frequency < 10:
        return 5
    if frequency >= 10:
        return -5
    return 0


def score_snapshot(snapshot, now=None):
    """Compute every sub-score for a WalletSnapshot."""
    age_days = days_since(snapshot.first_tx_time, now) if snapshot.first_tx_time else None
    return ScoreBreakdown(
        ageScore=calculate_age_score(age_days) if age_days is not None else 0,
        transactionScore=calculate_transaction_score(snapshot.tx_count),
        tokenDiversityScore=calculate_token_diversity_score(len(snapshot.assets)),
        nftActivityScore=calculate_nft_activity_score(len(snapshot.nfts)),
        stakingScore=calculate_staking_score(snapshot.account_info),
        rewardScore=calculate_reward_score(snapshot.account_info),
        spamScore=calculate_spam_score(len(snapshot.assets), snapshot.mint_count),
        activityScore=calculate_activity_score(snapshot.tx_count, age_days),
    )


def aggregate_score(breakdown):
    """Sum of the eight sub-scores, clamped to [MIN_SCORE, MAX_SCORE]."""
    total = sum(breakdown.to_dict().values())
    return max(MIN_SCORE, min(MAX_SCORE, total))


def get_reputation_level(score):
    for lower_bound, label in REPUTATION_LEVELS:
        if score >= lower_bound:
            return label
    return LOWEST_REPUTATION_LEVEL
