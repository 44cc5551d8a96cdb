import pytest

from burstagent_app.completeness import (
    allocation_total,
    can_request_confirmation,
    invalid_fields,
    is_complete,
    missing_fields,
    missing_optional,
    missing_required,
)
from burstagent_app.datamodel import BurstDEX, BurstTokenDraft, DexAllocation

from .conftest import make_draft


def test_fresh_draft_misses_everything():
    draft = BurstTokenDraft()
    assert missing_required(draft) == [
        "name",
        "symbol",
        "total_supply",
        "description",
        "burst_amount",
        "dex_allocations",
        "reward_dex",
        "creator_address",
    ]
    assert len(missing_optional(draft)) == 7
    assert not can_request_confirmation(draft)
    assert not is_complete(draft)


def test_empty_string_counts_as_missing():
    draft = make_draft(description="  ")
    assert missing_required(draft) == ["description"]


def test_complete_required_fields_can_request_confirmation():
    draft = make_draft()
    assert missing_required(draft) == []
    assert allocation_total(draft) == 10000
    assert can_request_confirmation(draft)
    # optional fields are still open
    assert not is_complete(draft)


def test_allocation_total_must_be_full_share():
    draft = make_draft(dex_allocations=[DexAllocation(dex=BurstDEX.APEX, allocation=9000)])
    assert allocation_total(draft) == 9000
    assert not can_request_confirmation(draft)


def test_reward_dex_must_have_an_allocation():
    draft = make_draft(reward_dex=BurstDEX.PANGOLIN)
    assert not can_request_confirmation(draft)


@pytest.mark.parametrize("field,value", [("symbol", "GRUMPYCATTOKEN"), ("burst_amount", 5), ("trading_fee", 900)])
def test_invalid_value_blocks_confirmation(field, value):
    draft = make_draft(**{field: value})
    assert missing_required(draft) == []
    assert invalid_fields(draft) == [field]
    assert not can_request_confirmation(draft)


def test_valid_draft_has_no_invalid_fields():
    assert invalid_fields(make_draft(trading_fee=250, website="https://grumpy.example")) == []


def test_is_complete_with_every_field():
    draft = make_draft(
        trading_fee=100,
        max_wallet_percent=500,
        image_description="a grumpy cat",
        website="https://grumpycat.fi",
        twitter="@grumpycat",
        telegram="https://t.me/grumpycat",
        discord="https://discord.gg/grumpycat",
    )
    assert is_complete(draft)
    assert missing_fields(draft).empty


def test_missing_fields_groups_both_lists():
    result = missing_fields(make_draft(name=None, website=None))
    assert result.required == ["name"]
    assert "website" in result.optional
