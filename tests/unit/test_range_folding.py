"""Unit tests for hostlist range folding."""

import random

import pytest

from topograph.domain.services.range_folding import compress, expand, split


@pytest.mark.unit
class TestSplit:
    """Test prefix / numeric suffix decomposition."""

    @pytest.mark.parametrize(
        "name, prefix, suffix",
        [
            ("", "", ""),
            ("abc", "abc", ""),
            ("12345", "", "12345"),
            ("0012345", "00", "12345"),
            ("abc1203045", "abc", "1203045"),
            ("abc01203045", "abc0", "1203045"),
        ],
    )
    def test_split(self, name, prefix, suffix):
        assert split(name) == (prefix, suffix)

    def test_all_zero_suffix_stays_in_prefix(self):
        assert split("node000") == ("node000", "")

    def test_only_trailing_digits_count(self):
        assert split("rack12-node7") == ("rack12-node", "7")

    def test_long_digit_run_before_letters(self):
        name = "1" * 200_000 + "a"
        assert split(name) == (name, "")
        assert split(name + "42") == (name, "42")

    def test_non_ascii_digits_are_not_a_suffix(self):
        assert split("node\u0661\u0662") == ("node\u0661\u0662", "")

    @pytest.mark.parametrize("name", ["eos0507", "n-001", "x10y020", "0", "a00b"])
    def test_prefix_and_padded_suffix_rebuild_name(self, name):
        prefix, suffix = split(name)
        assert prefix + suffix == name


@pytest.mark.unit
class TestCompress:
    """Test range folding of name lists."""

    def test_empty_list(self):
        assert compress([]) == []

    def test_ranges(self):
        names = ["eos0507", "eos0509", "eos0482", "eos0483", "eos0508", "eos0484"]
        assert compress(names) == ["eos0[482-484]", "eos0[507-509]"]

    def test_singles(self):
        assert compress(["eos0507", "eos0509", "eos0482"]) == ["eos0482", "eos0507", "eos0509"]

    @pytest.mark.parametrize(
        "names",
        [
            ["eos0507", "eos0509", "abc", "eos0482", "eos0508"],
            ["eos0507", "eos0509", "abc", "eos0508", "eos0482"],
        ],
    )
    def test_mixed_input_order(self, names):
        assert compress(names) == ["abc", "eos0482", "eos0[507-509]"]

    # Numeric order within a prefix, not string order of the tokens: the
    # scheduler fixtures expect Node[201-202],Node205.
    def test_ranges_of_one_prefix_in_numeric_order(self):
        assert compress(["Node205", "Node201", "Node202"]) == ["Node[201-202]", "Node205"]

    def test_switch_names(self):
        assert compress(["switch.2.2", "switch.2.1"]) == ["switch.2.[1-2]"]

    def test_duplicates_collapse(self):
        assert compress(["n1", "n2", "n1"]) == ["n[1-2]"]

    def test_plain_name_next_to_numbered_names(self):
        assert compress(["abc2", "abc", "abc1"]) == ["abc", "abc[1-2]"]

    def test_accepts_generator(self):
        assert compress(f"n{i}" for i in (3, 1, 2)) == ["n[1-3]"]


@pytest.mark.unit
class TestExpand:
    """Test expansion of folded tokens."""

    def test_plain_token(self):
        assert expand("node7") == ["node7"]

    def test_range_token(self):
        assert expand("eos0[482-484]") == ["eos0482", "eos0483", "eos0484"]

    def test_compress_then_expand_recovers_names(self):
        rng = random.Random(7)
        names = {f"gpu{rng.randint(1, 60):03d}" for _ in range(40)} | {"login", "n0", "n1", "n2"}
        tokens = compress(list(names))

        expanded = [name for token in tokens for name in expand(token)]
        assert len(tokens) <= len(names)
        assert sorted(expanded) == sorted(names)
