# cardano_reputation/config.py
import os
from dotenv import load_dotenv

load_dotenv()


class Config:
    # Blockfrost Configuration
    BLOCKFROST_API_KEY = os.getenv('BLOCKFROST_API_KEY')
    BLOCKFROST_URL = os.getenv('BLOCKFROST_URL', 'https://cardano-mainnet.blockfrost.io/api/v0')
    REQUEST_TIMEOUT = float(os.getenv('REQUEST_TIMEOUT', '10'))

    # Transactions fetched per wallet (first page, oldest first)
    TX_PAGE_SIZE = int(os.getenv('TX_PAGE_SIZE', '100'))

    # AI Insight (disabled when no key is set)
    GEMINI_API_KEY = os.getenv('GEMINI_API_KEY')
    GEMINI_MODEL = os.getenv('GEMINI_MODEL', 'gemini-2.5-flash')
    AI_MAX_TRANSACTIONS = int(os.getenv('AI_MAX_TRANSACTIONS', '10'))

    # Community reports: 'json' | 'sql' | 'memory'
    REPORT_STORE = os.getenv('REPORT_STORE', 'json').strip().lower()
    REPORTS_FILE = os.getenv('REPORTS_FILE', 'walletReports.json')
    DATABASE_URL = os.getenv('DATABASE_URL', 'sqlite:///wallet_reports.db')

    # Logging
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO').upper()
    LOG_FILE = os.getenv('LOG_FILE', 'logs/cardano_reputation.log')

    # API Configuration
    API_HOST = os.getenv('API_HOST', '0.0.0.0')
    API_PORT = int(os.getenv('PORT', '5000'))

    @staticmethod
    def ai_enabled():
        return bool(Config.GEMINI_API_KEY)
