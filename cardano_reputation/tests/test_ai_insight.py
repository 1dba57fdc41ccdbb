"""
Tests for the optional Gemini insight. The SDK is mocked; nothing leaves the process.
"""
from unittest.mock import MagicMock, patch

from cardano_reputation.ai_insight import InsightGenerator, InsightStatus, build_prompt

STATS = {"reputation": 42, "totalTransactions": 12, "isStaking": False}
TXS = [{"tx_hash": f"tx{i}", "block_time": 1_700_000_000 + i} for i in range(15)]


class RefusedResponse:
    """Mimics a blocked response: `.text` raises, the first part still has text."""

    def __init__(self, part_text):
        self.parts = [MagicMock(text=part_text)]

    @property
    def text(self):
        raise ValueError("no text")


def test_prompt_includes_stats_and_latest_transactions():
    prompt = build_prompt(STATS, TXS, 10)
    assert '"totalTransactions": 12' in prompt
    assert "showing up to 10" in prompt
    assert "tx14" in prompt
    assert "tx5" in prompt
    assert '"tx4"' not in prompt


def test_skipped_without_key():
    generator = InsightGenerator(api_key="")
    assert not generator.enabled
    result = generator.generate(STATS, TXS)
    assert result.status == InsightStatus.SKIPPED
    assert result.text is None
    assert result.error is None


@patch("cardano_reputation.ai_insight.genai")
def test_generated(mock_genai):
    mock_genai.GenerativeModel.return_value.generate_content.return_value = MagicMock(text="  Looks like a long-lived staking wallet. ")
    generator = InsightGenerator(api_key="test-key", model_name="gemini-test")

    result = generator.generate(STATS, TXS)

    mock_genai.configure.assert_called_once_with(api_key="test-key")
    mock_genai.GenerativeModel.assert_called_once_with("gemini-test")
    assert result.status == InsightStatus.GENERATED
    assert result.text == "Looks like a long-lived staking wallet."


@patch("cardano_reputation.ai_insight.genai")
def test_falls_back_to_first_part(mock_genai):
    mock_genai.GenerativeModel.return_value.generate_content.return_value = RefusedResponse("Partial answer")
    result = InsightGenerator(api_key="test-key").generate(STATS, TXS)
    assert result.status == InsightStatus.GENERATED
    assert result.text == "Partial answer"


@patch("cardano_reputation.ai_insight.genai")
def test_failure_degrades_to_no_text(mock_genai):
    mock_genai.GenerativeModel.return_value.generate_content.side_effect = RuntimeError("quota exceeded")
    result = InsightGenerator(api_key="test-key").generate(STATS, TXS)
    assert result.status == InsightStatus.FAILED
    assert result.text is None
    assert "quota exceeded" in result.error


@patch("cardano_reputation.ai_insight.genai")
def test_empty_response_is_a_failure(mock_genai):
    mock_genai.GenerativeModel.return_value.generate_content.return_value = MagicMock(text="", parts=[])
    result = InsightGenerator(api_key="test-key").generate(STATS, TXS)
    assert result.status == InsightStatus.FAILED
    assert result.text is None
