"""Damage valuation nodes: magnitude codes → dollar amounts.

The Storm Database splits every damage figure into a raw amount
(PROPDMG, CROPDMG) and a magnitude code (PROPDMGEXP, CROPDMGEXP) such as
"K" for thousands.  These nodes turn the codes into multipliers through
two lookup tables and compute PROPDMGVALUE and CROPDMGVALUE.
"""

from __future__ import annotations

import logging
from typing import Any

import pandas as pd

from storm_impact.errors import UnmappedMagnitudeCodeError

logger = logging.getLogger(__name__)

UNMAPPED_CODE_POLICIES: tuple[str, ...] = ("error", "zero", "drop")

# (amount column, code column, derived column, table parameter)
_DAMAGE_COLUMNS: list[tuple[str, str, str, str]] = [
    ("PROPDMG", "PROPDMGEXP", "PROPDMGVALUE", "property_magnitudes"),
    ("CROPDMG", "CROPDMGEXP", "CROPDMGVALUE", "crop_magnitudes"),
]


def _normalize_codes(codes: pd.Series) -> pd.Series:
    """Blank cells become "", everything else is stripped and upper-cased."""
    return codes.fillna("").astype(str).str.strip().str.upper()


def build_magnitude_table(records: list[dict[str, Any]]) -> pd.DataFrame:
    """Build a code → multiplier table from parameter records.

    Example record: ``{"code": "K", "multiplier": 1000}``.

    Raises:
        ValueError: if the same code appears twice after normalization.
    """
    table = pd.DataFrame.from_records(records, columns=["code", "multiplier"])
    table["code"] = _normalize_codes(table["code"])
    table["multiplier"] = table["multiplier"].astype(float)

    duplicated = table.loc[table["code"].duplicated(), "code"].tolist()
    if duplicated:
        raise ValueError(f"Duplicate magnitude codes in table: {duplicated}")
    return table


def _apply_multiplier(
    df: pd.DataFrame,
    amount_col: str,
    code_col: str,
    value_col: str,
    table: pd.DataFrame,
    policy: str,
) -> pd.DataFrame:
    """Left-join ``table`` on the normalized code and compute ``value_col``."""
    joined = df.assign(_code=_normalize_codes(df[code_col])).merge(
        table.rename(columns={"code": "_code"}),
        how="left",
        on="_code",
        validate="many_to_one",
    )

    unmapped = joined["multiplier"].isna()
    if unmapped.any():
        codes = sorted(joined.loc[unmapped, "_code"].unique().tolist())
        n_rows = int(unmapped.sum())
        if policy == "error":
            raise UnmappedMagnitudeCodeError(code_col, codes, n_rows)

        logger.warning(
            "%s: %s rows have unmapped codes %s (policy=%s)",
            code_col,
            f"{n_rows:,}",
            codes,
            policy,
        )
        if policy == "zero":
            joined.loc[unmapped, "multiplier"] = 0.0
        else:
            joined = joined.loc[~unmapped].reset_index(drop=True)

    missing_amount = joined[amount_col].isna()
    if missing_amount.any():
        logger.warning(
            "%s: %s rows have no amount; %s left empty and skipped in totals",
            amount_col,
            f"{int(missing_amount.sum()):,}",
            value_col,
        )

    joined[value_col] = joined[amount_col] * joined["multiplier"]
    return joined.drop(columns=["_code", "multiplier"])


# ── Node 1 ───────────────────────────────────────────────────────────
def derive_damage_values(
    df: pd.DataFrame,
    parameters: dict[str, Any],
) -> pd.DataFrame:
    """Add PROPDMGVALUE and CROPDMGVALUE in dollars.

    Codes outside a table are handled by ``unmapped_code_policy``:
    - error: raise UnmappedMagnitudeCodeError (default)
    - zero:  treat the damage as $0
    - drop:  remove the affected rows

    Args:
        df: Clean event table from data_processing.
        parameters: ``damage_valuation`` block of parameters.yml.

    Returns:
        Event table with the two derived value columns appended.
    """
    policy: str = parameters.get("unmapped_code_policy", "error")
    if policy not in UNMAPPED_CODE_POLICIES:
        raise ValueError(
            f"Unknown unmapped_code_policy {policy!r}; "
            f"expected one of {UNMAPPED_CODE_POLICIES}"
        )

    result = df.reset_index(drop=True)
    for amount_col, code_col, value_col, table_key in _DAMAGE_COLUMNS:
        table = build_magnitude_table(parameters[table_key])
        result = _apply_multiplier(
            result, amount_col, code_col, value_col, table, policy
        )
        logger.info(
            "%s: %s rows valued, total $%s",
            value_col,
            f"{len(result):,}",
            f"{result[value_col].sum():,.0f}",
        )

    return result
