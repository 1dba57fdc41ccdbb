# cardano_reputation/database/crud.py
import logging
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from cardano_reputation.database.models_db import WalletReportRow

logger = logging.getLogger(__name__)


def create_report(session, report):
    """
    Insert one WalletReport and commit.
    Returns the stored WalletReportRow.
    """
    row = WalletReportRow(
        wallet_address=report.wallet_address,
        report_type=report.report_type,
        reported_by=report.reported_by,
        description=report.description,
        timestamp=report.timestamp,
    )
    try:
        session.add(row)
        session.commit()
        logger.info(f"Stored {report.report_type} report for {report.wallet_address}")
        return row
    except SQLAlchemyError as e:
        logger.exception("SQLAlchemy error in create_report: %s", e)
        session.rollback()
        raise


def get_reports_by_address(session, wallet_address):
    """All report rows for an exact wallet address, oldest first."""
    stmt = (
        select(WalletReportRow)
        .where(WalletReportRow.wallet_address == wallet_address)
        .order_by(WalletReportRow.id)
    )
    return session.execute(stmt).scalars().all()
