"""Pure normalization of raw per-network position records. No I/O.

Providers disagree on field names and nesting (``supply.balanceUsd`` on one
network, ``scaledATokenBalance`` at the top level on another). Each logical
field is read through an ordered tuple of candidate key paths; the first
present value wins, otherwise a typed default applies. Nothing here raises.
"""
from __future__ import annotations

import math
from typing import Any, Iterable, Mapping

from ..models import BorrowPosition, SupplyPosition, TokenInfo, TokenPosition

KeyPath = tuple[str, ...]

TOKEN_ADDRESS: tuple[KeyPath, ...] = (
    ("token", "address"),
    ("underlyingAsset",),
    ("underlying_asset",),
)
TOKEN_SYMBOL: tuple[KeyPath, ...] = (("token", "symbol"), ("symbol",))
TOKEN_NAME: tuple[KeyPath, ...] = (("token", "name"), ("name",))
TOKEN_DECIMALS: tuple[KeyPath, ...] = (("token", "decimals"), ("decimals",))
TOKEN_LOGO: tuple[KeyPath, ...] = (("token", "logoURI"), ("logoURI",))

SUPPLY_BALANCE: tuple[KeyPath, ...] = (("supply", "balance"), ("scaledATokenBalance",))
SUPPLY_BALANCE_USD: tuple[KeyPath, ...] = (
    ("supply", "balanceUsd"),
    ("supply", "balance_usd"),
)
SUPPLY_BALANCE_RAW: tuple[KeyPath, ...] = (
    ("supply", "balanceRaw"),
    ("supply", "balance_raw"),
)
SUPPLY_APY: tuple[KeyPath, ...] = (("supply", "apy"),)
SUPPLY_IS_COLLATERAL: tuple[KeyPath, ...] = (
    ("supply", "isCollateral"),
    ("usageAsCollateralEnabledOnUser",),
)

BORROW_BALANCE: tuple[KeyPath, ...] = (("borrow", "balance"), ("scaledVariableDebt",))
BORROW_BALANCE_USD: tuple[KeyPath, ...] = (
    ("borrow", "balanceUsd"),
    ("borrow", "balance_usd"),
)
BORROW_BALANCE_RAW: tuple[KeyPath, ...] = (
    ("borrow", "balanceRaw"),
    ("borrow", "balance_raw"),
)
BORROW_APY: tuple[KeyPath, ...] = (("borrow", "apy"),)

LOAN_TO_VALUE: tuple[KeyPath, ...] = (("loanToValue",), ("loan_to_value",))
LIQUIDATION_THRESHOLD: tuple[KeyPath, ...] = (
    ("liquidationThreshold",),
    ("liquidation_threshold",),
)

_MISSING = object()


def _lookup(record: Mapping[str, Any], path: KeyPath) -> Any:
    node: Any = record
    for key in path:
        if not isinstance(node, Mapping) or key not in node:
            return _MISSING
        node = node[key]
    return node


def first_present(record: Mapping[str, Any], paths: Iterable[KeyPath]) -> Any:
    """Return the first value found along ``paths``, or ``None``.

    Missing keys, ``None`` and empty strings all count as absent.
    """
    for path in paths:
        value = _lookup(record, path)
        if value is _MISSING or value is None or value == "":
            continue
        return value
    return None


def read_str(record: Mapping[str, Any], paths: Iterable[KeyPath], default: str = "") -> str:
    value = first_present(record, paths)
    return default if value is None else str(value)


def _as_quantity(value: Any) -> float | None:
    """Parse ``value`` as a finite, non-negative number, else ``None``."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number) or number < 0:
        return None
    return number


def read_amount(record: Mapping[str, Any], paths: Iterable[KeyPath]) -> str:
    """Read a decimal amount as a string.

    Non-numeric, non-finite and negative values all become ``"0"``.
    """
    value = first_present(record, paths)
    if _as_quantity(value) is None:
        return "0"
    return str(value)


def read_float(record: Mapping[str, Any], paths: Iterable[KeyPath], default: float = 0.0) -> float:
    """Read a rate or ratio; unusable values (see :func:`read_amount`) give ``default``."""
    number = _as_quantity(first_present(record, paths))
    return default if number is None else number


def read_int(record: Mapping[str, Any], paths: Iterable[KeyPath], default: int) -> int:
    value = first_present(record, paths)
    if value is None or isinstance(value, bool):
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def read_bool(record: Mapping[str, Any], paths: Iterable[KeyPath], default: bool = False) -> bool:
    value = first_present(record, paths)
    if value is None:
        return default
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1", "yes")
    return bool(value)


def normalize_position(record: Mapping[str, Any], network_id: str) -> TokenPosition:
    """Convert one raw reserve record into a :class:`TokenPosition`."""
    logo = first_present(record, TOKEN_LOGO)

    return TokenPosition(
        network_id=network_id,
        token=TokenInfo(
            address=read_str(record, TOKEN_ADDRESS),
            symbol=read_str(record, TOKEN_SYMBOL),
            name=read_str(record, TOKEN_NAME),
            decimals=read_int(record, TOKEN_DECIMALS, 18),
            logo_uri=None if logo is None else str(logo),
        ),
        supply=SupplyPosition(
            balance=read_amount(record, SUPPLY_BALANCE),
            balance_usd=read_amount(record, SUPPLY_BALANCE_USD),
            balance_raw=read_amount(record, SUPPLY_BALANCE_RAW),
            apy=read_float(record, SUPPLY_APY),
            is_collateral=read_bool(record, SUPPLY_IS_COLLATERAL),
        ),
        borrow=BorrowPosition(
            balance=read_amount(record, BORROW_BALANCE),
            balance_usd=read_amount(record, BORROW_BALANCE_USD),
            balance_raw=read_amount(record, BORROW_BALANCE_RAW),
            apy=read_float(record, BORROW_APY),
        ),
        loan_to_value=read_float(record, LOAN_TO_VALUE),
        liquidation_threshold=read_float(record, LIQUIDATION_THRESHOLD),
    )


def normalize_positions(records: Iterable[Any], network_id: str) -> list[TokenPosition]:
    """Normalize a list of raw records, skipping entries that are not mappings."""
    return [
        normalize_position(record, network_id)
        for record in records
        if isinstance(record, Mapping)
    ]
