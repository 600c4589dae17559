import json
from decimal import Decimal

import pytest

from bbapi.governance_types import (
    AbrogationProposal,
    Event,
    HistoryEvent,
    Overview,
    ProposalBase,
    ProposalFull,
    ProposalState,
    TreasuryTx,
    Vote,
    Voter,
)


@pytest.mark.parametrize("state", list(ProposalState))
def test_state_value_is_name(state):
    assert state.value == state.name
    assert ProposalState(state.name) is state


def test_unknown_state_rejected():
    with pytest.raises(ValueError):
        ProposalState("PENDING")


def test_abrogation_proposal_keys_and_round_trip():
    ap = AbrogationProposal(
        proposal_id=4,
        creator="0xabc",
        create_time=100,
        description="d",
        for_votes=Decimal("12.5"),
        against_votes=Decimal("3"),
    )
    data = ap.to_dict()
    assert set(data) == {
        "proposalId", "caller", "createTime", "description", "forVotes", "againstVotes",
    }
    assert data["caller"] == "0xabc"
    assert data["forVotes"] == "12.5"
    assert data["againstVotes"] == "3"


def test_decimal_text_has_no_exponent_or_trailing_zeros():
    assert Vote(power=Decimal("1.50")).to_dict()["power"] == "1.5"
    assert Vote(power=Decimal("1E+2")).to_dict()["power"] == "100"
    assert Vote(power=Decimal("-0")).to_dict()["power"] == "0"


def test_history_event():
    event = HistoryEvent(name=ProposalState.WARMUP.value, start_ts=10, end_ts=20, tx_hash="0x1")
    assert event.to_dict() == {
        "name": "WARMUP",
        "startTimestamp": 10,
        "endTimestamp": 20,
        "txHash": "0x1",
    }


def test_proposal_base_state_and_time_left():
    data = ProposalBase(id=1, state=ProposalState.ACTIVE, state_time_left=None).to_dict()
    assert data["state"] == "ACTIVE"
    assert data["stateTimeLeft"] is None
    assert data["proposalId"] == 1


def test_proposal_base_without_state():
    assert ProposalBase().to_dict()["state"] == ""


def test_proposal_full_includes_base_and_hides_bond_staked():
    proposal = ProposalFull(
        id=2,
        state=ProposalState.QUEUED,
        state_time_left=30,
        targets=["0xt"],
        min_quorum=40,
        bond_staked=Decimal("1000"),
        history=[HistoryEvent(name="CREATED", start_ts=5)],
    )
    data = proposal.to_dict()
    assert "bondStaked" not in data
    assert set(ProposalBase().to_dict()) <= set(data)
    assert data["state"] == "QUEUED"
    assert data["stateTimeLeft"] == 30
    assert data["targets"] == ["0xt"]
    assert data["minQuorum"] == 40
    assert data["history"] == [
        {"name": "CREATED", "startTimestamp": 5, "endTimestamp": 0, "txHash": ""}
    ]
    assert json.loads(json.dumps(data)) == data


def test_event_data_key():
    event = Event(proposal_id=3, eta={"eta": 5}, event_type="QUEUED", tx_hash="0x9")
    data = event.to_dict()
    assert data["eventData"] == {"eta": 5}
    assert data["eventType"] == "QUEUED"
    assert data["txHash"] == "0x9"


def test_overview_round_trip():
    overview = Overview(holders=5, total_vbond=Decimal("7.25"), barn_users=2)
    data = overview.to_dict()
    assert data["holders"] == 5
    assert data["totalVbond"] == "7.25"
    assert data["barnUsers"] == 2
    assert data["totalDelegatedPower"] == "0"


def test_treasury_tx_keys():
    tx = TreasuryTx(account_address="0xa", amount=Decimal("0.5"), token_decimals=18)
    data = tx.to_dict()
    assert data["accountAddress"] == "0xa"
    assert data["amount"] == "0.5"
    assert data["tokenDecimals"] == 18


def test_vote_and_voter():
    vote = Vote(user="0xu", support=True, block_timestamp=9, power=Decimal("2"))
    assert vote.to_dict()["address"] == "0xu"
    assert vote.to_dict()["support"] is True

    voter = Voter(address="0xv", voting_power=Decimal("3.5"), has_active_delegation=True)
    data = voter.to_dict()
    assert data["votingPower"] == "3.5"
    assert data["hasActiveDelegation"] is True
    assert json.loads(json.dumps(data)) == data