"""CSV export of logged purchases."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

import pandas as pd

from microinvest.accounting.ledger import Transaction
from microinvest.utils.io import ensure_directory, safe_filename
from microinvest.utils.validation import InvalidArgument

logger = logging.getLogger(__name__)

EXPORT_COLUMNS = ["date", "description", "category", "amount", "roundUp"]


def transactions_frame(transactions: Iterable[Transaction]) -> pd.DataFrame:
    rows = [
        {
            "date": txn.date,
            "description": txn.description,
            "category": txn.category,
            "amount": txn.amount,
            "roundUp": txn.round_up,
        }
        for txn in transactions
    ]
    return pd.DataFrame(rows, columns=EXPORT_COLUMNS)


def transactions_to_csv(transactions: Iterable[Transaction]) -> str:
    """Render purchases as CSV text with amounts to two decimals."""

    df = transactions_frame(transactions)
    if df.empty:
        raise InvalidArgument("No transactions to export")
    return df.to_csv(index=False, float_format="%.2f", lineterminator="\n")


def export_transactions(transactions: Iterable[Transaction], out_dir: Path, plan_name: str) -> Path:
    """Write ``<plan>_transactions.csv`` into ``out_dir``."""

    text = transactions_to_csv(transactions)
    ensure_directory(out_dir)
    path = out_dir / f"{safe_filename(plan_name)}_transactions.csv"
    path.write_text(text, encoding="utf-8")
    logger.info("Exported transactions to %s", path)
    return path


__all__ = ["EXPORT_COLUMNS", "transactions_frame", "transactions_to_csv", "export_transactions"]
