# cardano_reputation/blockfrost_fetcher.py
import logging
import requests

from cardano_reputation.config import Config
from cardano_reputation.errors import NotFoundError, UpstreamError


class BlockfrostFetcher:
    """Thin client over the Blockfrost REST endpoints used for reputation checks."""

    def __init__(self, api_key=None, base_url=None, timeout=None, page_size=None, session=None):
        self.api_key = api_key if api_key is not None else Config.BLOCKFROST_API_KEY
        self.base_url = (base_url or Config.BLOCKFROST_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else Config.REQUEST_TIMEOUT
        self.page_size = page_size if page_size is not None else Config.TX_PAGE_SIZE
        self.logger = logging.getLogger(__name__)

        self.session = session or requests.Session()
        self.session.headers.update({"project_id": self.api_key or ""})

        if not self.api_key:
            self.logger.warning("BLOCKFROST_API_KEY is not set; upstream calls will be rejected.")

    # ----------------- Helper utilities -----------------
    def _get(self, path, params=None):
        url = f"{self.base_url}/{path.lstrip('/')}"
        self.logger.debug(f"GET {url} params={params}")
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
        except requests.RequestException as e:
            raise UpstreamError(f"Blockfrost request failed: {path}", body=str(e)) from e

        if response.status_code == 404:
            raise NotFoundError(f"Not found on chain: {path}")
        if response.status_code >= 400:
            raise UpstreamError(
                f"Blockfrost returned {response.status_code} for {path}",
                upstream_status=response.status_code,
                body=response.text,
            )
        try:
            return response.json()
        except ValueError as e:
            raise UpstreamError(f"Blockfrost returned invalid JSON for {path}", body=response.text) from e

    def _first_page(self):
        return {"order": "asc", "count": self.page_size}

    # ----------------- Stake account endpoints -----------------
    def get_account(self, stake_address):
        return self._get(f"accounts/{stake_address}")

    def get_account_transactions(self, stake_address):
        return self._get(f"accounts/{stake_address}/transactions", params=self._first_page())

    def get_account_addresses(self, stake_address):
        """Payment addresses associated with the stake account."""
        return [item["address"] for item in self._get(f"accounts/{stake_address}/addresses")]

    def get_account_assets(self, stake_address):
        return self._get(f"accounts/{stake_address}/addresses/assets")

    # ----------------- Payment address endpoints -----------------
    def get_address(self, address):
        return self._get(f"addresses/{address}")

    def get_address_transactions(self, address):
        return self._get(f"addresses/{address}/transactions", params=self._first_page())
