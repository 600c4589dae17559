"""Governance records and their JSON representations."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any


def _decimal_text(value: Decimal) -> str:
    """Plain decimal notation without exponent or trailing zeros."""
    text = format(value.normalize(), "f")
    return "0" if text in ("-0", "") else text


class ProposalState(str, Enum):
    CREATED = "CREATED"
    WARMUP = "WARMUP"
    ACTIVE = "ACTIVE"
    CANCELED = "CANCELED"
    FAILED = "FAILED"
    ACCEPTED = "ACCEPTED"
    QUEUED = "QUEUED"
    GRACE = "GRACE"
    EXPIRED = "EXPIRED"
    EXECUTED = "EXECUTED"
    ABROGATED = "ABROGATED"


@dataclass
class AbrogationProposal:
    proposal_id: int = 0
    creator: str = ""
    create_time: int = 0
    description: str = ""
    for_votes: Decimal = Decimal(0)
    against_votes: Decimal = Decimal(0)

    def to_dict(self) -> dict[str, Any]:
        return {
            "proposalId": self.proposal_id,
            "caller": self.creator,
            "createTime": self.create_time,
            "description": self.description,
            "forVotes": _decimal_text(self.for_votes),
            "againstVotes": _decimal_text(self.against_votes),
        }


@dataclass
class HistoryEvent:
    name: str = ""
    start_ts: int = 0
    end_ts: int = 0
    tx_hash: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "startTimestamp": self.start_ts,
            "endTimestamp": self.end_ts,
            "txHash": self.tx_hash,
        }


@dataclass
class Overview:
    avg_lock_time_seconds: int = 0
    holders: int = 0
    total_delegated_power: Decimal = Decimal(0)
    total_vbond: Decimal = Decimal(0)
    voters: int = 0
    barn_users: int = 0
    holders_staking_excluded: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "avgLockTimeSeconds": self.avg_lock_time_seconds,
            "holders": self.holders,
            "totalDelegatedPower": _decimal_text(self.total_delegated_power),
            "totalVbond": _decimal_text(self.total_vbond),
            "voters": self.voters,
            "barnUsers": self.barn_users,
            "holdersStakingExcluded": self.holders_staking_excluded,
        }


@dataclass
class ProposalBase:
    id: int = 0
    proposer: str = ""
    description: str = ""
    title: str = ""
    create_time: int = 0
    state: ProposalState | None = None
    state_time_left: int | None = None
    for_votes: Decimal = Decimal(0)
    against_votes: Decimal = Decimal(0)

    def to_dict(self) -> dict[str, Any]:
        return {
            "proposalId": self.id,
            "proposer": self.proposer,
            "description": self.description,
            "title": self.title,
            "createTime": self.create_time,
            "state": self.state.value if self.state is not None else "",
            "stateTimeLeft": self.state_time_left,
            "forVotes": _decimal_text(self.for_votes),
            "againstVotes": _decimal_text(self.against_votes),
        }


@dataclass
class Event:
    proposal_id: int = 0
    caller: str = ""
    eta: dict[str, Any] | None = None
    event_type: str = ""
    create_time: int = 0
    tx_hash: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "proposalId": self.proposal_id,
            "caller": self.caller,
            "eventData": self.eta,
            "eventType": self.event_type,
            "createTime": self.create_time,
            "txHash": self.tx_hash,
        }


@dataclass
class ProposalFull(ProposalBase):
    targets: list[str] = field(default_factory=list)
    values: list[str] = field(default_factory=list)
    signatures: list[str] = field(default_factory=list)
    calldatas: list[str] = field(default_factory=list)
    block_timestamp: int = 0
    warm_up_duration: int = 0
    active_duration: int = 0
    queue_duration: int = 0
    grace_period_duration: int = 0
    acceptance_threshold: int = 0
    min_quorum: int = 0
    bond_staked: Decimal = Decimal(0)
    history: list[HistoryEvent] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result.update(
            {
                "targets": list(self.targets),
                "values": list(self.values),
                "signatures": list(self.signatures),
                "calldatas": list(self.calldatas),
                "blockTimestamp": self.block_timestamp,
                "warmUpDuration": self.warm_up_duration,
                "activeDuration": self.active_duration,
                "queueDuration": self.queue_duration,
                "gracePeriodDuration": self.grace_period_duration,
                "acceptanceThreshold": self.acceptance_threshold,
                "minQuorum": self.min_quorum,
                "history": [event.to_dict() for event in self.history],
            }
        )
        return result


@dataclass
class TreasuryTx:
    account_address: str = ""
    account_label: str = ""
    counterparty_address: str = ""
    counterparty_label: str = ""
    amount: Decimal = Decimal(0)
    transaction_direction: str = ""
    token_address: str = ""
    token_symbol: str = ""
    token_decimals: int = 0
    transaction_hash: str = ""
    block_timestamp: int = 0
    block_number: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "accountAddress": self.account_address,
            "accountLabel": self.account_label,
            "counterpartyAddress": self.counterparty_address,
            "counterpartyLabel": self.counterparty_label,
            "amount": _decimal_text(self.amount),
            "transactionDirection": self.transaction_direction,
            "tokenAddress": self.token_address,
            "tokenSymbol": self.token_symbol,
            "tokenDecimals": self.token_decimals,
            "transactionHash": self.transaction_hash,
            "blockTimestamp": self.block_timestamp,
            "blockNumber": self.block_number,
        }


@dataclass
class Vote:
    user: str = ""
    support: bool = False
    block_timestamp: int = 0
    power: Decimal = Decimal(0)

    def to_dict(self) -> dict[str, Any]:
        return {
            "address": self.user,
            "support": self.support,
            "blockTimestamp": self.block_timestamp,
            "power": _decimal_text(self.power),
        }


@dataclass
class Voter:
    address: str = ""
    bond_staked: Decimal = Decimal(0)
    locked_until: int = 0
    delegated_power: Decimal = Decimal(0)
    votes: int = 0
    proposals: int = 0
    voting_power: Decimal = Decimal(0)
    has_active_delegation: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "address": self.address,
            "bondStaked": _decimal_text(self.bond_staked),
            "lockedUntil": self.locked_until,
            "delegatedPower": _decimal_text(self.delegated_power),
            "votes": self.votes,
            "proposals": self.proposals,
            "votingPower": _decimal_text(self.voting_power),
            "hasActiveDelegation": self.has_active_delegation,
        }