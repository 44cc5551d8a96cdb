"""Tests for the field catalog."""

import pytest

from burstagent_app.datamodel import (
    CONTROL_FIELDS,
    BurstDEX,
    DexAllocation,
    coerce_field,
    guidance,
    optional_fields,
    required_fields,
    validate_field,
)
from burstagent_app.errors import UnknownFieldError


class TestFieldLists:
    def test_required_fields_in_order(self):
        assert required_fields() == [
            "name",
            "symbol",
            "total_supply",
            "description",
            "burst_amount",
            "dex_allocations",
            "reward_dex",
            "creator_address",
        ]

    def test_optional_fields_in_order(self):
        assert optional_fields() == [
            "trading_fee",
            "max_wallet_percent",
            "image_description",
            "website",
            "twitter",
            "telegram",
            "discord",
        ]

    def test_control_fields_are_not_user_fields(self):
        assert CONTROL_FIELDS.isdisjoint(required_fields() + optional_fields())

    def test_guidance_for_known_field(self):
        rule = guidance("burst_amount")
        assert "AVAX" in rule.description
        assert rule.valid_example
        assert rule.invalid_example
        assert rule.instructions

    @pytest.mark.parametrize("field", ["is_confirmed", "last_updated", "bogus"])
    def test_guidance_rejects_control_and_unknown_fields(self, field):
        with pytest.raises(UnknownFieldError):
            guidance(field)


class TestCoercion:
    @pytest.mark.parametrize(
        "raw,expected",
        [
            (1000000, 1000000),
            ("1,000,000", 1000000),
            ("314k", 314000),
            ("1m", 1000000),
            ("100 billion", 100000000000),
            ("2 Million", 2000000),
        ],
    )
    def test_total_supply(self, raw, expected):
        assert coerce_field("total_supply", raw) == expected

    @pytest.mark.parametrize("raw", ["100.5", "100.5k", "lots", "1 gazillion", True])
    def test_total_supply_rejects_unusable_input(self, raw):
        with pytest.raises(ValueError):
            coerce_field("total_supply", raw)

    def test_percent_becomes_basis_points(self):
        assert coerce_field("trading_fee", "2.5%") == 250
        assert coerce_field("max_wallet_percent", "100%") == 10000
        assert coerce_field("trading_fee", 125) == 125

    def test_dex_parsing_is_case_insensitive_and_accepts_ordinals(self):
        assert coerce_field("reward_dex", "apex") == BurstDEX.APEX
        assert coerce_field("reward_dex", " Pangolin ") == BurstDEX.PANGOLIN
        assert coerce_field("reward_dex", 2) == BurstDEX.PHARAOH

    def test_unknown_dex_is_rejected(self):
        with pytest.raises(ValueError):
            coerce_field("reward_dex", "UNISWAP")

    def test_burst_amount_strips_avax(self):
        assert coerce_field("burst_amount", "300 AVAX") == 300
        assert coerce_field("burst_amount", "52.5avax") == 52.5

    def test_symbol_drops_dollar_sign(self):
        assert coerce_field("symbol", "$GRUMP") == "GRUMP"

    def test_allocations_drop_invalid_dex_entries(self):
        allocations = coerce_field(
            "dex_allocations",
            [
                {"dex": "apex", "allocation": 5000},
                {"dex": "UNISWAP", "allocation": 2500},
                {"dex": "JOE", "allocation": "50%"},
            ],
        )
        assert allocations == [
            DexAllocation(dex=BurstDEX.APEX, allocation=5000),
            DexAllocation(dex=BurstDEX.JOE, allocation=5000),
        ]

    def test_allocations_accept_mapping(self):
        allocations = coerce_field("dex_allocations", {"APEX": 7000, "PHARAOH": 3000})
        assert [a.dex for a in allocations] == [BurstDEX.APEX, BurstDEX.PHARAOH]

    def test_allocations_without_usable_entry_are_rejected(self):
        with pytest.raises(ValueError):
            coerce_field("dex_allocations", [{"dex": "SUSHI", "allocation": 10000}])

    def test_unknown_field(self):
        with pytest.raises(UnknownFieldError):
            coerce_field("received_token_request", True)


class TestValidation:
    def test_valid_values(self):
        assert validate_field("name", "Grumpy Cat") is None
        assert validate_field("symbol", "GRUMP") is None
        assert validate_field("burst_amount", 300) is None
        assert validate_field("creator_address", "0x742d35Cc6634C0532925a3b844Bc454e4438f44e") is None

    def test_unset_value_is_not_checked(self):
        assert validate_field("trading_fee", None) is None

    @pytest.mark.parametrize(
        "field,value",
        [
            ("name", "x" * 51),
            ("symbol", "TOOLONGSYMB"),
            ("total_supply", 0),
            ("burst_amount", 45),
            ("burst_amount", 2001),
            ("trading_fee", 501),
            ("max_wallet_percent", 10001),
            ("creator_address", "0x1234"),
            ("dex_allocations", []),
        ],
    )
    def test_invalid_values(self, field, value):
        assert validate_field(field, value) is not None

    def test_allocations_must_sum_to_full_share(self):
        reason = validate_field(
            "dex_allocations",
            [DexAllocation(dex=BurstDEX.APEX, allocation=5000), DexAllocation(dex=BurstDEX.JOE, allocation=4000)],
        )
        assert "9000" in reason
