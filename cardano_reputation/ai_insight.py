# cardano_reputation/ai_insight.py
import json
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional

import google.generativeai as genai
from google.generativeai.types import HarmBlockThreshold, HarmCategory

from cardano_reputation.config import Config

logger = logging.getLogger(__name__)

PROMPT_TEMPLATE = """You are an expert in blockchain analysis and Cardano wallet safety.

Analyze the following Cardano wallet data and provide a concise risk assessment and summary for NFT and OTC trading safety. Highlight any suspicious patterns, spam, or scam risks, and mention if the wallet appears trustworthy or not. If possible, suggest what a user should be careful about.

Wallet statistics:
{wallet_stats}

Recent transactions (showing up to {max_transactions}):
{transactions}

Respond in 2-3 sentences, in clear, non-technical language for regular users."""


class InsightStatus(str, Enum):
    GENERATED = "generated"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True)
class InsightResult:
    """
    Outcome of an insight request. Only GENERATED carries text; FAILED keeps
    the error for server-side logs and is never shown to API callers.
    """
    status: InsightStatus
    text: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def generated(cls, text):
        return cls(InsightStatus.GENERATED, text=text)

    @classmethod
    def skipped(cls):
        return cls(InsightStatus.SKIPPED)

    @classmethod
    def failed(cls, error):
        return cls(InsightStatus.FAILED, error=error)


def build_prompt(wallet_stats: Dict[str, Any], recent_transactions: List[Dict[str, Any]], max_transactions: int) -> str:
    return PROMPT_TEMPLATE.format(
        wallet_stats=json.dumps(wallet_stats, indent=2, default=str, ensure_ascii=False),
        transactions=json.dumps(recent_transactions[-max_transactions:], indent=2, default=str),
        max_transactions=max_transactions,
    )


class InsightGenerator:
    """Asks a Gemini model for a plain-language risk summary. Disabled without an API key."""

    def __init__(self, api_key=None, model_name=None, max_transactions=None):
        self.api_key = api_key if api_key is not None else Config.GEMINI_API_KEY
        self.model_name = model_name or Config.GEMINI_MODEL
        self.max_transactions = max_transactions or Config.AI_MAX_TRANSACTIONS
        if self.api_key:
            genai.configure(api_key=self.api_key)

    @property
    def enabled(self):
        return bool(self.api_key)

    def generate(self, wallet_stats, recent_transactions) -> InsightResult:
        if not self.enabled:
            return InsightResult.skipped()

        prompt = build_prompt(wallet_stats, recent_transactions, self.max_transactions)
        try:
            model = genai.GenerativeModel(self.model_name)
            safety_settings = {
                HarmCategory.HARM_CATEGORY_HARASSMENT: HarmBlockThreshold.BLOCK_NONE,
                HarmCategory.HARM_CATEGORY_HATE_SPEECH: HarmBlockThreshold.BLOCK_NONE,
                HarmCategory.HARM_CATEGORY_SEXUALLY_EXPLICIT: HarmBlockThreshold.BLOCK_NONE,
                HarmCategory.HARM_CATEGORY_DANGEROUS_CONTENT: HarmBlockThreshold.BLOCK_NONE,
            }
            response = model.generate_content(prompt, safety_settings=safety_settings)
            text = _response_text(response)
        except Exception as e:
            logger.warning(f"Gemini AI error: {e}")
            return InsightResult.failed(str(e))

        if not text:
            logger.warning("Gemini AI returned no text (safety block or empty response)")
            return InsightResult.failed("empty response")
        return InsightResult.generated(text)


def _response_text(response):
    # response.text raises when the model refused to answer
    try:
        text = response.text
    except ValueError:
        text = None
    if not text and getattr(response, "parts", None):
        text = response.parts[0].text
    return text.strip() if text else None
