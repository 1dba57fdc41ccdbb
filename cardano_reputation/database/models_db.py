# cardano_reputation/database/models_db.py
import datetime

from sqlalchemy import Column, DateTime, Index, Integer, String, Text
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class WalletReportRow(Base):
    __tablename__ = "wallet_reports"
    id = Column(Integer, primary_key=True, index=True)
    wallet_address = Column(String(128), nullable=False, index=True)
    report_type = Column(String(16), nullable=False)
    reported_by = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    timestamp = Column(DateTime(timezone=True), default=lambda: datetime.datetime.now(datetime.timezone.utc))

    __table_args__ = (
        Index("ix_wallet_reports_address_type", "wallet_address", "report_type"),
    )
