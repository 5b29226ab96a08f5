"""Tests for torrent_cleanup.equality."""

from hypothesis import given
from hypothesis import strategies as st

from torrent_cleanup.equality import compare, equals, structural_hash
from torrent_cleanup.values import VDict, VInt, VList, VString


# ---------------------------------------------------------------------------
# Integers
# ---------------------------------------------------------------------------

class TestIntegers:
    def test_same_value(self):
        assert equals(VInt(23), VInt(23))

    def test_different_value(self):
        assert not equals(VInt(23), VInt(42))

    def test_native_int(self):
        assert equals(VInt(23), 23)
        assert equals(23, VInt(23))
        assert not equals(VInt(23), 42)

    def test_native_text_is_not_an_int(self):
        assert not equals(VInt(23), "23")

    def test_float_is_not_converted(self):
        assert not equals(VInt(23), 23.0)

    def test_compare(self):
        assert compare(VInt(23), VInt(42)) < 0
        assert compare(VInt(42), VInt(23)) > 0
        assert compare(VInt(23), VInt(23)) == 0
        assert compare(VInt(23), 23) == 0

    def test_null(self):
        assert not equals(VInt(23), None)
        assert compare(VInt(23), None) != 0


# ---------------------------------------------------------------------------
# Strings
# ---------------------------------------------------------------------------

class TestStrings:
    def test_same_content(self):
        assert equals(VString(b"foo"), VString(b"foo"))

    def test_different_content(self):
        assert not equals(VString(b"foo"), VString(b"bar"))

    def test_native_text(self):
        assert equals(VString(b"foo"), "foo")
        assert equals("foo", VString(b"foo"))
        assert not equals(VString(b"foo"), "bar")

    def test_native_bytes(self):
        assert equals(VString(b"\xff"), b"\xff")

    def test_non_ascii_text(self):
        assert equals(VString("é".encode("utf-8")), "é")

    def test_compare(self):
        assert compare(VString(b"foo"), VString(b"foo")) == 0
        assert compare(VString(b"foo"), VString(b"bar")) > 0
        assert compare(VString(b"bar"), "foo") < 0

    def test_null(self):
        assert not equals(VString(b"foo"), None)
        assert compare(VString(b"foo"), None) == -1


class TestCrossVariant:
    def test_string_never_equals_int(self):
        assert not equals(VString(b"foo"), VInt(23))
        assert not equals(VInt(23), VString(b"foo"))

    def test_digit_string_never_equals_int(self):
        assert not equals(VString(b"23"), VInt(23))
        assert not equals(VString(b"23"), 23)

    def test_incompatible_compare_falls_back(self):
        assert compare(VString(b"a"), VInt(1)) == -1
        assert compare(VList(), VList()) == -1

    def test_two_natives(self):
        assert not equals("a", "a")


# ---------------------------------------------------------------------------
# Lists
# ---------------------------------------------------------------------------

class TestLists:
    def setup_method(self):
        self.l1 = VList([VString(b"foo"), VString(b"bar")])
        self.l2 = VList([VInt(23), VInt(42)])
        self.l3 = VList([VString(b"foo"), VString(b"bar")])
        self.l4 = VList([VString(b"bar"), VString(b"foo")])

    def test_equality(self):
        assert equals(self.l1, self.l1)
        assert equals(self.l1, self.l3)
        assert not equals(self.l1, self.l2)
        assert not equals(self.l1, self.l4)

    def test_length_mismatch(self):
        assert not equals(self.l1, VList([VString(b"foo")]))

    def test_null(self):
        assert not equals(self.l1, None)

    def test_contains(self):
        assert VString(b"foo") in self.l1.items
        assert VInt(23) not in self.l1.items

    def test_hash_equal_for_equal_lists(self):
        assert structural_hash(self.l1) == structural_hash(self.l3)

    def test_hash_is_order_sensitive(self):
        assert structural_hash(self.l1) != structural_hash(self.l4)


# ---------------------------------------------------------------------------
# Dictionaries
# ---------------------------------------------------------------------------

class TestDicts:
    def test_equal_regardless_of_order(self):
        a = VDict({VString(b"a"): VInt(1), VString(b"b"): VInt(2)})
        b = VDict({VString(b"b"): VInt(2), VString(b"a"): VInt(1)})
        assert equals(a, b)
        assert structural_hash(a) == structural_hash(b)

    def test_different_value(self):
        a = VDict({VString(b"a"): VInt(1)})
        b = VDict({VString(b"a"): VInt(2)})
        assert not equals(a, b)

    def test_different_keys(self):
        a = VDict({VString(b"a"): VInt(1)})
        b = VDict({VString(b"b"): VInt(1)})
        assert not equals(a, b)

    def test_native_lookups(self):
        d = VDict({VString(b"foo"): VString(b"bar")})
        assert "foo" in d
        assert equals(d["foo"], "bar")

    def test_nested(self):
        a = VDict({VString(b"l"): VList([VInt(1), VDict({VString(b"x"): VInt(2)})])})
        b = VDict({VString(b"l"): VList([VInt(1), VDict({VString(b"x"): VInt(2)})])})
        assert equals(a, b)
        assert structural_hash(a) == structural_hash(b)

    def test_dict_is_not_list(self):
        assert not equals(VDict(), VList())


# ---------------------------------------------------------------------------
# Properties
# ---------------------------------------------------------------------------

_keys = st.binary(max_size=6)


@given(st.dictionaries(_keys, st.integers(min_value=0, max_value=1000), max_size=8))
def test_dict_hash_ignores_insertion_order(entries):
    forward = VDict({VString(k): VInt(v) for k, v in entries.items()})
    backward = VDict({VString(k): VInt(v) for k, v in reversed(list(entries.items()))})
    assert equals(forward, backward)
    assert structural_hash(forward) == structural_hash(backward)


@given(st.binary(max_size=16), st.binary(max_size=16))
def test_string_equality_is_symmetric(a, b):
    assert equals(VString(a), VString(b)) == equals(VString(b), VString(a))
    assert equals(VString(a), VString(b)) == (a == b)
