# cardano_reputation/report_store.py
"""
Community scam/legit reports.

Reports are append-only: created on submission, never edited or removed,
and read back by exact wallet address. Storage sits behind the narrow
ReportStore contract (append / find_by_address) so the Flask layer does not
care whether reports live in memory, in the flat JSON file or in SQL.
"""
import json
import logging
import os
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Dict, List

from cardano_reputation.database import crud
from cardano_reputation.database.db import create_session_factory, init_db
from cardano_reputation.errors import ValidationError

logger = logging.getLogger(__name__)

REPORT_TYPES = ("scam", "legit")
REQUIRED_FIELDS = ("walletAddress", "reportType", "reportedBy", "description")


def format_timestamp(dt):
    """ISO-8601 UTC with millisecond precision and a trailing Z."""
    return dt.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_timestamp(value):
    dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


@dataclass(frozen=True)
class WalletReport:
    wallet_address: str
    report_type: str
    reported_by: str
    description: str
    timestamp: datetime

    def to_dict(self):
        return {
            "walletAddress": self.wallet_address,
            "reportType": self.report_type,
            "reportedBy": self.reported_by,
            "description": self.description,
            "timestamp": format_timestamp(self.timestamp),
        }

    @classmethod
    def from_dict(cls, data):
        return cls(
            wallet_address=data["walletAddress"],
            report_type=data["reportType"],
            reported_by=data["reportedBy"],
            description=data["description"],
            timestamp=parse_timestamp(data["timestamp"]),
        )


def validate_report_payload(payload, now=None) -> WalletReport:
    """
    Build a WalletReport from a request body, stamping it with the server time.
    Raises ValidationError when a field is missing/blank or the type is unknown.
    """
    payload = payload or {}
    for name in REQUIRED_FIELDS:
        value = payload.get(name)
        if not value or not isinstance(value, str):
            raise ValidationError("All fields are required")
    if payload["reportType"] not in REPORT_TYPES:
        raise ValidationError("Invalid report type")

    return WalletReport(
        wallet_address=payload["walletAddress"],
        report_type=payload["reportType"],
        reported_by=payload["reportedBy"],
        description=payload["description"],
        timestamp=now or datetime.now(timezone.utc),
    )


class ReportStore(ABC):

    @abstractmethod
    def append(self, report: WalletReport) -> None:
        ...

    @abstractmethod
    def find_by_address(self, wallet_address: str) -> List[WalletReport]:
        ...

    def partition(self, wallet_address) -> Dict[str, Dict]:
        """Reports for an address split by type, each with its count."""
        grouped = {report_type: [] for report_type in REPORT_TYPES}
        for report in self.find_by_address(wallet_address):
            if report.report_type in grouped:
                grouped[report.report_type].append(report.to_dict())
        return {
            report_type: {"count": len(reports), "reports": reports}
            for report_type, reports in grouped.items()
        }

    def summarize(self, wallet_address) -> Dict[str, int]:
        counts = {report_type: 0 for report_type in REPORT_TYPES}
        for report in self.find_by_address(wallet_address):
            if report.report_type in counts:
                counts[report.report_type] += 1
        return counts


class InMemoryReportStore(ReportStore):

    def __init__(self):
        self._reports: Dict[str, List[WalletReport]] = {}
        self._lock = threading.Lock()

    def append(self, report):
        with self._lock:
            self._reports.setdefault(report.wallet_address, []).append(report)

    def find_by_address(self, wallet_address):
        with self._lock:
            return list(self._reports.get(wallet_address, []))


class JsonFileReportStore(ReportStore):
    """
    A single JSON array on disk, rewritten wholesale on each append.
    There is no cross-process locking: concurrent writers race and the last one wins.
    """

    def __init__(self, path):
        self.path = path

    def _read(self):
        if not os.path.exists(self.path):
            return []
        with open(self.path, "r", encoding="utf-8") as fh:
            return json.load(fh)

    def _write(self, records):
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as fh:
            json.dump(records, fh, indent=2, ensure_ascii=False)

    def append(self, report):
        records = self._read()
        records.append(report.to_dict())
        self._write(records)
        logger.info(f"Stored {report.report_type} report for {report.wallet_address} in {self.path}")

    def find_by_address(self, wallet_address):
        reports = []
        for record in self._read():
            if not isinstance(record, dict) or record.get("walletAddress") != wallet_address:
                continue
            if record.get("reportType") not in REPORT_TYPES:
                logger.warning(f"Skipping report with unknown type {record.get('reportType')!r} in {self.path}")
                continue
            try:
                reports.append(WalletReport.from_dict(record))
            except (KeyError, TypeError, ValueError, AttributeError) as e:
                logger.warning(f"Skipping malformed report for {wallet_address} in {self.path}: {e!r}")
        return reports


class SqlReportStore(ReportStore):

    def __init__(self, database_url=None):
        self.engine, self.SessionLocal = create_session_factory(database_url)
        init_db(self.engine)

    def append(self, report):
        session = self.SessionLocal()
        try:
            crud.create_report(session, report)
        finally:
            session.close()

    def find_by_address(self, wallet_address):
        session = self.SessionLocal()
        try:
            return [
                WalletReport(
                    wallet_address=row.wallet_address,
                    report_type=row.report_type,
                    reported_by=row.reported_by,
                    description=row.description,
                    timestamp=_as_utc(row.timestamp),
                )
                for row in crud.get_reports_by_address(session, wallet_address)
            ]
        finally:
            session.close()


def _as_utc(dt):
    # SQLite hands back naive datetimes
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def create_report_store(kind, reports_file=None, database_url=None) -> ReportStore:
    kind = (kind or "json").lower()
    if kind == "memory":
        return InMemoryReportStore()
    if kind == "sql":
        return SqlReportStore(database_url)
    if kind == "json":
        return JsonFileReportStore(reports_file)
    raise ValueError(f"Unknown REPORT_STORE: {kind}")
