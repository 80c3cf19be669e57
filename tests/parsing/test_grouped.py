"""
Tests for grouped setting parsing and the thread-safe GroupedSetting store.
"""

import threading

import pytest

from tradesim.errors import IllegalConfigurationError, InvalidGroupedValueError
from tradesim.parsing.grouped import (
    REFERENCE_KEY,
    GroupedSetting,
    parse_amount,
    parse_group,
    parse_grouped_setting,
    split_groups,
)


class TestParseGroupedSetting:
    """Test the grouped setting grammar."""

    def test_bracketed_groups_fan_out(self):
        result = parse_grouped_setting("[USDT]2000.0,[ADA;ETH]100.0", parse_amount)
        assert result.snapshot() == {"USDT": 2000.0, "ADA": 100.0, "ETH": 100.0}

    def test_bare_value_uses_reference_key(self):
        result = parse_grouped_setting("50.0", parse_amount)
        assert result.snapshot() == {REFERENCE_KEY: 50.0}

    def test_last_write_wins(self):
        result = parse_grouped_setting("[A]1,[A]2", parse_amount)
        assert result.snapshot() == {"A": 2.0}

    def test_mixed_bare_and_bracketed(self):
        result = parse_grouped_setting("1000,[BTC]0.5", parse_amount)
        assert result.snapshot() == {"": 1000.0, "BTC": 0.5}

    def test_whitespace_insignificant(self):
        result = parse_grouped_setting(" [ ADA ; ETH ] 100.0 , [USDT] 5 ", parse_amount)
        assert result.snapshot() == {"ADA": 100.0, "ETH": 100.0, "USDT": 5.0}

    @pytest.mark.parametrize("spec", [None, "", "   "])
    def test_empty_spec(self, spec):
        assert len(parse_grouped_setting(spec, parse_amount)) == 0

    def test_blank_groups_skipped(self):
        result = parse_grouped_setting("[A]1,,[B]2,", parse_amount)
        assert result.snapshot() == {"A": 1.0, "B": 2.0}

    def test_fanned_out_values_independent(self):
        """Each symbol of a group can be overwritten on its own."""
        result = parse_grouped_setting("[ADA;ETH]100.0", parse_amount)
        result.put("ADA", 1.0)
        assert result.get("ADA") == 1.0
        assert result.get("ETH") == 100.0

    def test_writes_into_existing_store(self):
        store = GroupedSetting({"BTC": 1.0, "ETH": 5.0})
        returned = parse_grouped_setting("[ETH]7", parse_amount, into=store)
        assert returned is store
        assert store.snapshot() == {"BTC": 1.0, "ETH": 7.0}

    def test_custom_converter(self):
        result = parse_grouped_setting("[A;B]3,[C]4", int)
        assert result.snapshot() == {"A": 3, "B": 3, "C": 4}


class TestParseGroupedSettingErrors:
    """Test malformed grouped settings."""

    def test_conversion_failure_wrapped(self):
        with pytest.raises(InvalidGroupedValueError) as exc_info:
            parse_grouped_setting("[USDT]lots", parse_amount, "simulation.initial.funds")

        error = exc_info.value
        assert error.property_name == "simulation.initial.funds"
        assert error.raw_value == "[USDT]lots"
        assert error.group == "[USDT]lots"
        assert isinstance(error.cause, ValueError)
        assert "'lots'" in str(error)

    def test_configuration_error_from_converter_passes_through(self):
        """Errors raised by the converter itself keep their type, gaining the property name."""
        original = IllegalConfigurationError("negative amount", raw_value="-1")

        def reject(text):
            raise original

        with pytest.raises(IllegalConfigurationError) as exc_info:
            parse_grouped_setting("[A]-1", reject, "simulation.initial.funds")

        assert exc_info.value is original
        assert original.property_name == "simulation.initial.funds"

    def test_converter_property_name_not_overwritten(self):
        def reject(text):
            raise IllegalConfigurationError("bad", property_name="custom.key")

        with pytest.raises(IllegalConfigurationError) as exc_info:
            parse_grouped_setting("1", reject, "simulation.initial.funds")
        assert exc_info.value.property_name == "custom.key"

    @pytest.mark.parametrize("spec", [
        "[]100",        # no symbols
        "[A;]100",      # empty symbol
        "[;B]100",
        "[A 100",       # missing ']'
        "A]100",        # stray ']'
        "[A]1[B]2",     # second group without comma
        "[A[B]]1",      # nested brackets
    ])
    def test_malformed_groups(self, spec):
        with pytest.raises(InvalidGroupedValueError):
            parse_grouped_setting(spec, parse_amount, "simulation.initial.funds")

    def test_empty_value_fails_conversion(self):
        with pytest.raises(InvalidGroupedValueError):
            parse_grouped_setting("[A]", parse_amount)

    def test_failure_keeps_earlier_groups(self):
        """Groups before the failing one are already stored."""
        store = GroupedSetting()
        with pytest.raises(InvalidGroupedValueError):
            parse_grouped_setting("[A]1,[B]x", parse_amount, into=store)
        assert store.snapshot() == {"A": 1.0}


class TestGroupTokenizer:
    """Test group splitting helpers."""

    def test_commas_inside_brackets_do_not_split(self):
        assert split_groups("[A,B]1,2") == ["[A,B]1", "2"]

    def test_parse_group(self):
        assert parse_group(" [X; Y] 3.5 ") == (("X", "Y"), "3.5")
        assert parse_group("3.5") == ((), "3.5")


class TestGroupedSetting:
    """Test the GroupedSetting store."""

    def test_get_default(self):
        store = GroupedSetting()
        assert store.get("BTC") is None
        assert store.get("BTC", 0.0) == 0.0

    def test_put_all_without_symbols_uses_reference_key(self):
        store = GroupedSetting()
        store.put_all(10.0)
        assert store.snapshot() == {"": 10.0}

    def test_as_mapping_is_read_only(self):
        store = GroupedSetting({"A": 1.0})
        view = store.as_mapping()
        with pytest.raises(TypeError):
            view["A"] = 2.0

    def test_as_mapping_reflects_later_writes(self):
        store = GroupedSetting({"A": 1.0})
        view = store.as_mapping()

        store.put("B", 2.0)
        store.remove("A")

        assert dict(view) == {"B": 2.0}
        assert "A" not in view
        assert len(view) == 1
        with pytest.raises(KeyError):
            view["A"]

    def test_copy_is_independent(self):
        store = GroupedSetting({"A": 1.0})
        clone = store.copy()
        clone.put("A", 2.0)
        assert store.get("A") == 1.0
        assert clone.get("A") == 2.0

    def test_equality(self):
        assert GroupedSetting({"A": 1.0}) == GroupedSetting({"A": 1.0})
        assert GroupedSetting({"A": 1.0}) == {"A": 1.0}
        assert GroupedSetting({"A": 1.0}) != {"A": 2.0}

    def test_remove_and_clear(self):
        store = GroupedSetting({"A": 1.0, "B": 2.0})
        assert store.remove("A") == 1.0
        assert "A" not in store
        store.clear()
        assert len(store) == 0

    def test_concurrent_writers(self):
        """Concurrent puts from several threads are all applied."""
        store = GroupedSetting()

        def writer(prefix):
            for i in range(500):
                store.put(f"{prefix}{i}", float(i))
                store.get(f"{prefix}{i}")
                list(store)

        threads = [threading.Thread(target=writer, args=(p,)) for p in "ABCD"]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(store) == 2000
        assert store.get("C499") == 499.0
