"""SMART Alpha records and their JSON representations."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any


def _decimal_text(value: Decimal) -> str:
    """Plain decimal notation without exponent or trailing zeros."""
    text = format(value.normalize(), "f")
    return "0" if text in ("-0", "") else text


def _time_text(value: datetime) -> str:
    """RFC 3339 timestamp with trimmed fractional seconds; naive values are UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    text = value.strftime("%Y-%m-%dT%H:%M:%S")
    if value.microsecond:
        text += "." + f"{value.microsecond:06d}".rstrip("0")
    offset = value.utcoffset()
    if not offset:
        return text + "Z"
    minutes = int(offset.total_seconds()) // 60
    sign = "+" if minutes >= 0 else "-"
    minutes = abs(minutes)
    return f"{text}{sign}{minutes // 60:02d}:{minutes % 60:02d}"


_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


@dataclass
class Epoch:
    id: int = 0
    senior_liquidity: Decimal = Decimal(0)
    junior_liquidity: Decimal = Decimal(0)
    upside_exposure_rate: Decimal = Decimal(0)
    downside_protection_rate: Decimal = Decimal(0)
    start_date: int | None = None
    end_date: int | None = None
    entry_price: Decimal = Decimal(0)
    junior_profits: Decimal = Decimal(0)
    senior_profits: Decimal = Decimal(0)
    junior_token_price_start: Decimal = Decimal(0)
    senior_token_price_start: Decimal = Decimal(0)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "seniorLiquidity": _decimal_text(self.senior_liquidity),
            "juniorLiquidity": _decimal_text(self.junior_liquidity),
            "upsideExposureRate": _decimal_text(self.upside_exposure_rate),
            "downsideProtectionRate": _decimal_text(self.downside_protection_rate),
            "startDate": self.start_date,
            "endDate": self.end_date,
            "entryPrice": _decimal_text(self.entry_price),
            "juniorProfits": _decimal_text(self.junior_profits),
            "seniorProfits": _decimal_text(self.senior_profits),
            "juniorTokenPriceStart": _decimal_text(self.junior_token_price_start),
            "seniorTokenPriceStart": _decimal_text(self.senior_token_price_start),
        }


@dataclass
class PerformancePoint:
    point: datetime = _EPOCH
    senior_with_sa: Decimal = Decimal(0)
    senior_without_sa: Decimal = Decimal(0)
    junior_with_sa: Decimal = Decimal(0)
    junior_without_sa: Decimal = Decimal(0)
    underlying_price: Decimal = Decimal(0)

    def to_dict(self) -> dict[str, Any]:
        return {
            "point": _time_text(self.point),
            "seniorWithSA": _decimal_text(self.senior_with_sa),
            "seniorWithoutSA": _decimal_text(self.senior_without_sa),
            "juniorWithSA": _decimal_text(self.junior_with_sa),
            "juniorWithoutSA": _decimal_text(self.junior_without_sa),
            "underlyingPrice": _decimal_text(self.underlying_price),
        }


@dataclass
class PoolState:
    epoch: int = 0
    senior_liquidity: Decimal = Decimal(0)
    junior_liquidity: Decimal = Decimal(0)
    upside_exposure_rate: Decimal = Decimal(0)
    downside_protection_rate: Decimal = Decimal(0)

    def to_dict(self) -> dict[str, Any]:
        return {
            "epoch": self.epoch,
            "seniorLiquidity": _decimal_text(self.senior_liquidity),
            "juniorLiquidity": _decimal_text(self.junior_liquidity),
            "upsideExposureRate": _decimal_text(self.upside_exposure_rate),
            "downsideProtectionRate": _decimal_text(self.downside_protection_rate),
        }


@dataclass
class RewardPoolTransaction:
    user_address: str = ""
    transaction_type: str = ""
    amount: Decimal = Decimal(0)
    block_timestamp: int = 0
    block_number: int = 0
    tx_hash: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "userAddress": self.user_address,
            "transactionType": self.transaction_type,
            "amount": _decimal_text(self.amount),
            "blockTimestamp": self.block_timestamp,
            "blockNumber": self.block_number,
            "transactionHash": self.tx_hash,
        }


@dataclass
class TokensPricePoint:
    point: datetime = _EPOCH
    senior_token_price: Decimal = Decimal(0)
    junior_token_price: Decimal = Decimal(0)

    def to_dict(self) -> dict[str, Any]:
        return {
            "point": _time_text(self.point),
            "seniorTokenPrice": _decimal_text(self.senior_token_price),
            "juniorTokenPrice": _decimal_text(self.junior_token_price),
        }


@dataclass
class Transaction:
    pool_address: str = ""
    user_address: str = ""
    tranche: str = ""
    transaction_type: str = ""
    pool_token_symbol: str = ""
    pool_token_address: str = ""
    token_symbol: str = ""
    token_address: str = ""
    oracle_asset_symbol: str = ""
    amount: Decimal = Decimal(0)
    amount_in_quote_asset: Decimal = Decimal(0)
    amount_in_usd: Decimal = Decimal(0)
    transaction_hash: str = ""
    block_timestamp: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "poolAddress": self.pool_address,
            "userAddress": self.user_address,
            "tranche": self.tranche,
            "transactionType": self.transaction_type,
            "poolTokenSymbol": self.pool_token_symbol,
            "poolTokenAddress": self.pool_token_address,
            "tokenSymbol": self.token_symbol,
            "tokenAddress": self.token_address,
            "oracleAssetSymbol": self.oracle_asset_symbol,
            "amount": _decimal_text(self.amount),
            "amountInQuoteAsset": _decimal_text(self.amount_in_quote_asset),
            "amountInUSD": _decimal_text(self.amount_in_usd),
            "transactionHash": self.transaction_hash,
            "blockTimestamp": self.block_timestamp,
        }


@dataclass
class UserPortfolioPoint:
    point: datetime = _EPOCH
    junior_value: Decimal = Decimal(0)
    senior_value: Decimal = Decimal(0)
    entry_queue_value: Decimal = Decimal(0)
    exit_queue_value: Decimal = Decimal(0)

    def to_dict(self) -> dict[str, Any]:
        return {
            "point": _time_text(self.point),
            "juniorValue": _decimal_text(self.junior_value),
            "seniorValue": _decimal_text(self.senior_value),
            "entryQueueValue": _decimal_text(self.entry_queue_value),
            "exitQueueValue": _decimal_text(self.exit_queue_value),
        }