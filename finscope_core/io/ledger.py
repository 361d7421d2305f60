from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import pandas as pd

from finscope_core.domain.models import InvestmentLot, MonetaryRecord, RecordKind


RECORD_COLUMNS = {"date", "amount", "category", "kind"}
LOT_COLUMNS = {"asset_name", "asset_type", "quantity", "purchase_price", "current_price", "purchase_date"}


def _read_csv(csv_path: str | Path, required: set) -> pd.DataFrame:
    path = Path(csv_path)
    if not path.exists():
        raise FileNotFoundError(path)

    df = pd.read_csv(path)
    missing = required - set(df.columns)
    if missing:
        raise ValueError(f"Missing columns in {path.name}: {sorted(missing)}")
    return df


def _optional_id(row: pd.Series) -> Optional[str]:
    value = row.get("id")
    if value is None or pd.isna(value):
        return None
    return str(value)


def load_records(csv_path: str | Path) -> List[MonetaryRecord]:
    df = _read_csv(csv_path, RECORD_COLUMNS)
    df["date"] = pd.to_datetime(df["date"]).dt.date
    records: List[MonetaryRecord] = []
    for _, row in df.iterrows():
        records.append(
            MonetaryRecord(
                occurred_on=row["date"],
                amount=float(row["amount"]),
                category=str(row["category"]),
                kind=RecordKind(str(row["kind"]).strip().lower()),
                id=_optional_id(row),
            )
        )
    return records


def load_lots(csv_path: str | Path) -> List[InvestmentLot]:
    df = _read_csv(csv_path, LOT_COLUMNS)
    df["purchase_date"] = pd.to_datetime(df["purchase_date"]).dt.date
    lots: List[InvestmentLot] = []
    for _, row in df.iterrows():
        lots.append(
            InvestmentLot(
                asset_name=str(row["asset_name"]),
                asset_type=str(row["asset_type"]),
                quantity=float(row["quantity"]),
                unit_cost=float(row["purchase_price"]),
                unit_price=float(row["current_price"]),
                purchased_on=row["purchase_date"],
                id=_optional_id(row),
            )
        )
    return lots
