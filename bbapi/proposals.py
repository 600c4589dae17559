"""Governance proposal timing, outcome checks and state history."""

from __future__ import annotations

import re
import time
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext
from functools import cmp_to_key
from typing import Iterable, Sequence

from bbapi.governance_types import Event, HistoryEvent, ProposalFull, ProposalState

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1
_INTEGER = re.compile(r"[+-]?[0-9]+")

_FINAL_STATES = {
    ProposalState.CANCELED,
    ProposalState.FAILED,
    ProposalState.ACCEPTED,
    ProposalState.EXPIRED,
    ProposalState.EXECUTED,
    ProposalState.ABROGATED,
}

AbrogationTally = tuple  # (for_votes, bond_staked)


def _now(now: int | None) -> int:
    return int(time.time()) if now is None else now


def _div_round(numerator: Decimal, denominator: Decimal, places: int) -> Decimal:
    """Divide and round half away from zero to a fixed number of places."""
    with localcontext() as ctx:
        ctx.prec = 200
        quotient = numerator / denominator
        return quotient.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)


def time_left(
    state: ProposalState,
    create_time: int,
    warm_up_duration: int,
    active_duration: int,
    queue_duration: int,
    grace_period_duration: int,
    now: int | None = None,
) -> int | None:
    """Seconds left in the proposal's current state, or None for final states."""
    state = ProposalState(state)
    if state in _FINAL_STATES:
        return None
    current = _now(now)
    if state is ProposalState.WARMUP:
        return create_time + warm_up_duration - current
    if state is ProposalState.ACTIVE:
        return create_time + warm_up_duration + active_duration - current
    if state is ProposalState.QUEUED:
        return create_time + warm_up_duration + active_duration + queue_duration - current
    if state is ProposalState.GRACE:
        return (
            create_time
            + warm_up_duration
            + active_duration
            + queue_duration
            + grace_period_duration
            - current
        )
    return 0


def parse_proposal_id(value: str) -> int:
    """Parse a base-10 signed 64-bit proposal id."""
    if not isinstance(value, str) or not _INTEGER.fullmatch(value):
        raise ValueError("invalid proposalID")
    number = int(value, 10)
    if not _INT64_MIN <= number <= _INT64_MAX:
        raise ValueError("invalid proposalID")
    return number


def is_failed_proposal(proposal: ProposalFull) -> bool:
    """True when quorum was not reached or the acceptance threshold was not passed."""
    min_quorum = Decimal(proposal.min_quorum)
    acceptance = Decimal(proposal.acceptance_threshold)
    hundred = Decimal(100)

    total = proposal.for_votes + proposal.against_votes
    if total < _div_round(proposal.bond_staked * min_quorum, hundred, 18):
        return True

    min_for_votes = _div_round(total * acceptance, hundred, 18)
    return proposal.for_votes <= min_for_votes


def _parse_decimal(text: object, name: str) -> Decimal:
    try:
        value = Decimal(str(text).strip())
    except InvalidOperation:
        raise ValueError(f"could not convert {name} to decimal") from None
    if not value.is_finite():
        raise ValueError(f"could not convert {name} to decimal")
    return value


def abrogation_proposal_passed(for_votes: str, bond_staked: str) -> bool:
    """True when the votes for exceed half of the staked bond."""
    pro = _parse_decimal(for_votes, "forVotes")
    staked = _parse_decimal(bond_staked, "bondStaked")
    return pro > _div_round(staked, Decimal(2), 18)


def latest_event_end_at(proposal: ProposalFull, event: HistoryEvent) -> int:
    """End of the most recent history entry, or 0 when it has no fixed end."""
    durations = {
        ProposalState.WARMUP.value: proposal.warm_up_duration,
        ProposalState.ACTIVE.value: proposal.active_duration,
        ProposalState.QUEUED.value: proposal.queue_duration,
        ProposalState.GRACE.value: proposal.grace_period_duration,
    }
    if event.name not in durations:
        return 0
    return event.start_ts + durations[event.name]


def _cancel_before(events: Sequence[Event], deadline: int) -> HistoryEvent | None:
    if (
        events
        and events[0].create_time < deadline
        and events[0].event_type == ProposalState.CANCELED.value
    ):
        return HistoryEvent(
            name=ProposalState.CANCELED.value,
            start_ts=events[0].create_time,
            tx_hash=events[0].tx_hash,
        )
    return None


def build_history(
    proposal: ProposalFull,
    events: Iterable[Event],
    abrogation: AbrogationTally | None = None,
    now: int | None = None,
) -> list[HistoryEvent]:
    """Reconstruct the states a proposal went through, in chronological order.

    ``events`` are the proposal's recorded events, the first being its creation.
    ``abrogation`` is ``(for_votes, bond_staked)`` of its abrogation proposal, or
    None when there is none.
    """
    events = list(events)
    if not events:
        raise ValueError("proposal has no events")
    current = _now(now)

    history = [
        HistoryEvent(
            name=ProposalState.CREATED.value,
            start_ts=proposal.create_time,
            tx_hash=events[0].tx_hash,
        )
    ]
    remaining = sorted(events, key=lambda e: e.create_time)[1:]

    history.append(HistoryEvent(name=ProposalState.WARMUP.value, start_ts=proposal.create_time))

    next_deadline = proposal.create_time + proposal.warm_up_duration
    canceled = _cancel_before(remaining, next_deadline)
    if canceled is not None:
        history.append(canceled)
        return history
    if next_deadline >= current:
        return history

    history.append(HistoryEvent(name=ProposalState.ACTIVE.value, start_ts=next_deadline + 1))

    next_deadline = proposal.create_time + proposal.warm_up_duration + proposal.active_duration
    canceled = _cancel_before(remaining, next_deadline)
    if canceled is not None:
        history.append(canceled)
        return history
    if next_deadline >= current:
        return history

    if is_failed_proposal(proposal):
        history.append(HistoryEvent(name=ProposalState.FAILED.value, start_ts=next_deadline + 1))
        return history
    history.append(HistoryEvent(name=ProposalState.ACCEPTED.value, start_ts=next_deadline + 1))

    if not remaining or remaining[0].event_type != ProposalState.QUEUED.value:
        return history

    history.append(
        HistoryEvent(
            name=ProposalState.QUEUED.value,
            start_ts=next_deadline + 1,
            tx_hash=remaining[0].tx_hash,
        )
    )
    remaining = remaining[1:]

    next_deadline += proposal.queue_duration
    if next_deadline >= current:
        return history

    if abrogation is not None:
        for_votes, bond_staked = abrogation
        if abrogation_proposal_passed(str(for_votes), str(bond_staked)):
            history.append(
                HistoryEvent(name=ProposalState.ABROGATED.value, start_ts=next_deadline)
            )
            return history

    history.append(HistoryEvent(name=ProposalState.GRACE.value, start_ts=next_deadline))

    next_deadline += proposal.grace_period_duration
    if (
        remaining
        and remaining[0].create_time <= next_deadline
        and remaining[0].event_type == ProposalState.EXECUTED.value
    ):
        history.append(
            HistoryEvent(
                name=ProposalState.EXECUTED.value,
                start_ts=remaining[0].create_time,
                tx_hash=remaining[0].tx_hash,
            )
        )
        return history

    if next_deadline >= current:
        return history

    history.append(HistoryEvent(name=ProposalState.EXPIRED.value, start_ts=next_deadline))
    return history


_PAIRS_BEFORE = {
    (ProposalState.WARMUP.value, ProposalState.CREATED.value),
    (ProposalState.QUEUED.value, ProposalState.ACCEPTED.value),
}


def _newest_first(a: HistoryEvent, b: HistoryEvent) -> int:
    if (a.name, b.name) in _PAIRS_BEFORE:
        return -1
    if (b.name, a.name) in _PAIRS_BEFORE:
        return 1
    if a.start_ts > b.start_ts:
        return -1
    if a.start_ts < b.start_ts:
        return 1
    return 0


def history(
    proposal: ProposalFull,
    events: Iterable[Event],
    abrogation: AbrogationTally | None = None,
    now: int | None = None,
) -> list[HistoryEvent]:
    """The proposal's history, newest first, with end timestamps filled in."""
    entries = sorted(
        build_history(proposal, events, abrogation, now), key=cmp_to_key(_newest_first)
    )
    for previous, entry in zip(entries, entries[1:]):
        entry.end_ts = previous.start_ts - 1
    entries[0].end_ts = latest_event_end_at(proposal, entries[0])
    return entries