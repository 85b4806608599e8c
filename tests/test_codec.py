"""Tests for the drips receiver config codec.

The packed layout must match DripsHub bit for bit, otherwise receivers hash
differently on-chain and every later setDrips call reverts.
"""

import pytest

from drips_sdk import (
    ArgumentRangeError,
    ConfigRangeError,
    DripsReceiver,
    DripsReceiverConfig,
    from_uint,
    pack_config,
    pack_receiver,
    to_int,
    to_uint,
    unpack_config,
    unpack_receiver,
)


class TestPackConfig:
    """Tests for pack_config."""

    def test_pack_amount_only(self) -> None:
        """amount_per_sec sits above start and duration (bit 64)."""
        packed = pack_config(DripsReceiverConfig(start=0, duration=0, amount_per_sec=1000))
        assert packed == 1000 << 64

    def test_pack_all_fields(self) -> None:
        """Each field lands in its own segment."""
        config = DripsReceiverConfig(start=0x11223344, duration=0x55667788, amount_per_sec=0xABCDEF)
        assert pack_config(config) == (0xABCDEF << 64) | (0x11223344 << 32) | 0x55667788

    def test_pack_leaves_reserved_bits_zero(self) -> None:
        """Bits 224-255 are never set by encoding."""
        config = DripsReceiverConfig(start=2**32 - 1, duration=2**32 - 1, amount_per_sec=2**160 - 1)
        packed = pack_config(config)

        assert packed >> 224 == 0
        assert packed == (1 << 224) - 1

    def test_pack_rejects_amount_too_wide(self) -> None:
        """amount_per_sec must fit in 160 bits."""
        with pytest.raises(ConfigRangeError) as exc_info:
            pack_config(DripsReceiverConfig(amount_per_sec=2**160))

        assert exc_info.value.argument == "amount_per_sec"
        assert exc_info.value.value == 2**160

    def test_pack_rejects_start_too_wide(self) -> None:
        """start must fit in 32 bits."""
        with pytest.raises(ConfigRangeError) as exc_info:
            pack_config(DripsReceiverConfig(start=2**32, amount_per_sec=1))

        assert exc_info.value.argument == "start"

    def test_pack_rejects_negative_duration(self) -> None:
        """Negative fields are rejected, not wrapped."""
        with pytest.raises(ConfigRangeError) as exc_info:
            pack_config(DripsReceiverConfig(duration=-1, amount_per_sec=1))

        assert exc_info.value.argument == "duration"
        assert exc_info.value.value == -1

    def test_config_range_error_is_argument_range_error(self) -> None:
        """Callers can catch ConfigRangeError as a generic range error."""
        with pytest.raises(ArgumentRangeError):
            pack_config(DripsReceiverConfig(amount_per_sec=-5))


class TestUnpackConfig:
    """Tests for unpack_config."""

    def test_round_trip_simple(self) -> None:
        """pack then unpack returns the same config."""
        config = DripsReceiverConfig(start=0, duration=0, amount_per_sec=1000)
        assert unpack_config(pack_config(config)) == config

    @pytest.mark.parametrize(
        "config",
        [
            DripsReceiverConfig(start=1_700_000_000, duration=86_400, amount_per_sec=10**18),
            DripsReceiverConfig(start=2**32 - 1, duration=2**32 - 1, amount_per_sec=2**160 - 1),
            DripsReceiverConfig(start=1, duration=0, amount_per_sec=1),
        ],
    )
    def test_round_trip_boundaries(self, config: DripsReceiverConfig) -> None:
        """Round trip holds at field boundaries."""
        assert unpack_config(pack_config(config)) == config

    def test_unpack_ignores_reserved_bits(self) -> None:
        """Reserved high bits (e.g. a drip ID) do not leak into the config."""
        config = DripsReceiverConfig(start=5, duration=6, amount_per_sec=7)
        packed = pack_config(config) | (0xDEADBEEF << 224)

        assert unpack_config(packed) == config

    def test_unpack_rejects_values_wider_than_uint256(self) -> None:
        """Only uint256 values can be decoded."""
        with pytest.raises(ArgumentRangeError):
            unpack_config(2**256)

    def test_unpack_rejects_negative(self) -> None:
        """Negative values are not transport words."""
        with pytest.raises(ArgumentRangeError):
            unpack_config(-1)


class TestReceiverTuples:
    """Tests for pack_receiver / unpack_receiver."""

    def test_pack_receiver(self) -> None:
        """A receiver becomes the (userId, config) contract tuple."""
        receiver = DripsReceiver(user_id=42, config=DripsReceiverConfig(amount_per_sec=3))
        assert pack_receiver(receiver) == (42, 3 << 64)

    def test_unpack_receiver(self) -> None:
        """An on-chain tuple decodes into a DripsReceiver."""
        receiver = unpack_receiver((42, (3 << 64) | (10 << 32) | 20))

        assert receiver.user_id == 42
        assert receiver.config == DripsReceiverConfig(start=10, duration=20, amount_per_sec=3)

    def test_unpack_receiver_accepts_lists(self) -> None:
        """web3 may decode structs as lists."""
        assert unpack_receiver([1, 1 << 64]).config.amount_per_sec == 1


class TestIntegerConversions:
    """Tests for the explicit transport conversions."""

    def test_to_uint_accepts_bounds(self) -> None:
        """0 and 2**bits - 1 fit."""
        assert to_uint(0, 128, "amount") == 0
        assert to_uint(2**128 - 1, 128, "amount") == 2**128 - 1

    def test_to_uint_rejects_overflow(self) -> None:
        """Values wider than the word are rejected with the argument name."""
        with pytest.raises(ArgumentRangeError) as exc_info:
            to_uint(2**128, 128, "amount")

        assert exc_info.value.argument == "amount"
        assert "uint128" in str(exc_info.value)

    def test_to_uint_rejects_bool(self) -> None:
        """True is not an amount."""
        with pytest.raises(ArgumentRangeError):
            to_uint(True, 256, "user_id")

    def test_to_uint_rejects_float(self) -> None:
        """No floats on the accounting path."""
        with pytest.raises(ArgumentRangeError):
            to_uint(1.5, 256, "amount")

    def test_to_int_signed_range(self) -> None:
        """int128 accepts its full two's complement range."""
        assert to_int(-(2**127), 128, "balance_delta") == -(2**127)
        assert to_int(2**127 - 1, 128, "balance_delta") == 2**127 - 1

        with pytest.raises(ArgumentRangeError):
            to_int(2**127, 128, "balance_delta")
        with pytest.raises(ArgumentRangeError):
            to_int(-(2**127) - 1, 128, "balance_delta")

    def test_from_uint_parses_subgraph_strings(self) -> None:
        """Decimal and hex strings are decoded."""
        assert from_uint("123", 256, "user_id") == 123
        assert from_uint("0xff", 256, "user_id") == 255

    def test_from_uint_rejects_garbage(self) -> None:
        """Non-numeric strings raise ArgumentRangeError."""
        with pytest.raises(ArgumentRangeError):
            from_uint("not-a-number", 256, "user_id")
