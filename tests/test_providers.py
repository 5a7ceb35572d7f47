"""
Tests for the default structural hash and deep-equality providers.

The central property is consistency: whenever ``deep_equal(a, b)`` holds,
``StructuralHasher`` must give ``a`` and ``b`` the same hash.
"""

import math
from collections import OrderedDict, namedtuple
from enum import Enum

import numpy as np
import pytest

from deepset.providers import DeepEquality, StructuralHasher, deep_equal, default_providers, structural_hash
from deepset.providers.kinds import Kind, classify, record_fields

from sample_values import Point, Record, Slotted, SlottedChild


class Color(Enum):
    RED = 1
    BLUE = 2


Pair = namedtuple("Pair", "left right")


# (a, b) built independently, expected to be deep-equal
EQUAL_PAIRS = [
    ({"n": 1, "s": "1", "b": True}, {"b": True, "s": "1", "n": 1}),
    ([1, [2, [3, {"x": (4,)}]]], [1, [2, [3, {"x": (4,)}]]]),
    ({1, 2, 3}, {3, 2, 1}),
    (frozenset({"a", "b"}), frozenset({"b", "a"})),
    ({(1, 2): "t", 3: "i"}, {3: "i", (1, 2): "t"}),
    (float("nan"), float("nan")),
    (0.0, -0.0),
    (complex(1, float("nan")), complex(1, float("nan"))),
    (b"raw", b"raw"),
    (Point(1, 2, ["a"]), Point(1, 2, ["a"])),
    (Record("r", {"k": [1]}), Record("r", {"k": [1]})),
    (Slotted(1), Slotted(1)),
    (Slotted([1, {"k": 2}], secret="s"), Slotted([1, {"k": 2}], secret="s")),
    (SlottedChild(1, extra=(2,)), SlottedChild(1, extra=(2,))),
    ({Slotted(1): "v"}, {Slotted(1): "v"}),
    (Color.RED, Color.RED),
    (Pair(1, [2]), Pair(1, [2])),
    (np.array([1, 2, 3]), np.array([1, 2, 3])),
    (np.array([[0.5, np.nan]]), np.array([[0.5, np.nan]])),
    (np.array([-0.0, 1.0]), np.array([0.0, 1.0])),
    (np.array([{"a": 1}, None], dtype=object), np.array([{"a": 1}, None], dtype=object)),
    (np.float32(2.5), np.float32(2.5)),
    (None, None),
]

# (a, b) expected to differ
UNEQUAL_PAIRS = [
    ([1, 2], (1, 2)),
    ([1, 2], [2, 1]),
    ({"a": 1}, {"a": 2}),
    ({"a": 1}, {"a": 1, "b": None}),
    ({"a": 1}, OrderedDict(a=1)),
    ({1, 2}, frozenset({1, 2})),
    (1, True),
    (1, 1.0),
    ({1: "a"}, {True: "a"}),
    ({1}, {True}),
    (Point(1, 2, ["a"]), Point(1, 2, ["b"])),
    (Slotted(1, secret="a"), Slotted(1, secret="b")),
    (Slotted(1), SlottedChild(1, extra=None)),
    (Color.RED, Color.BLUE),
    (Pair(1, 2), (1, 2)),
    (np.array([1, 2]), np.array([1.0, 2.0])),
    (np.array([1, 2]), np.array([[1, 2]])),
    (np.float32(2.5), np.float64(2.5)),
    ("1", 1),
    (None, 0),
]


class TestDeepEqual:

    @pytest.mark.parametrize("a,b", EQUAL_PAIRS)
    def test_equal_pairs(self, a, b):
        assert deep_equal(a, b)
        assert deep_equal(b, a)

    @pytest.mark.parametrize("a,b", UNEQUAL_PAIRS)
    def test_unequal_pairs(self, a, b):
        assert not deep_equal(a, b)
        assert not deep_equal(b, a)

    def test_reflexive_on_same_object(self):
        value = {"k": [float("nan")]}
        assert deep_equal(value, value)

    def test_relaxed_numeric(self):
        assert deep_equal(1, 1.0, strict_numeric=False)
        assert deep_equal(True, 1, strict_numeric=False)
        assert deep_equal({1: [2.0]}, {1.0: [2]}, strict_numeric=False)
        assert not deep_equal(1, 1.5, strict_numeric=False)
        assert deep_equal(float("nan"), float("nan"), strict_numeric=False)

    def test_deep_equality_provider(self):
        equals = DeepEquality(strict_numeric=False)
        assert equals([1], [1.0])
        assert not DeepEquality()([1], [1.0])

    def test_unhashable_fallback_raises_only_when_hashed(self):
        class Token:
            __hash__ = None

            def __eq__(self, other):
                return isinstance(other, Token)

        assert deep_equal(Token(), Token())
        with pytest.raises(TypeError):
            structural_hash(Token())


class TestStructuralHasher:

    @pytest.mark.parametrize("a,b", EQUAL_PAIRS)
    def test_equal_values_hash_alike(self, a, b):
        assert structural_hash(a) == structural_hash(b)

    @pytest.mark.parametrize("a,b", UNEQUAL_PAIRS)
    def test_unequal_values_hash_apart(self, a, b):
        # collisions are allowed by contract but not expected for 64-bit digests
        assert structural_hash(a) != structural_hash(b)

    def test_deterministic_across_instances(self):
        value = {"list": [1, 2, {"x": None}], "set": {"a", "b"}}
        assert StructuralHasher()(value) == StructuralHasher()(value)

    def test_digest_size_bounds_hash(self):
        hasher = StructuralHasher(digest_size=2)
        assert 0 <= hasher(["anything"]) < 2 ** 16
        assert len(StructuralHasher(digest_size=32).digest("x")) == 32

    def test_salt_changes_hash(self):
        assert StructuralHasher(salt=b"one")("v") != StructuralHasher(salt=b"two")("v")

    @pytest.mark.parametrize("kwargs", [
        {"digest_size": 0},
        {"digest_size": 65},
        {"salt": b"x" * 17},
    ])
    def test_rejects_invalid_parameters(self, kwargs):
        with pytest.raises(ValueError):
            StructuralHasher(**kwargs)

    def test_relaxed_numeric_hash_matches_equality(self):
        hasher = StructuralHasher(strict_numeric=False)
        assert hasher(1) == hasher(1.0) == hasher(True)
        assert hasher([1, {"k": 2}]) == hasher([1.0, {"k": 2.0}])
        assert hasher(1) != hasher(1.5)

    def test_large_ints_and_floats(self):
        assert structural_hash(2 ** 80) == structural_hash(2 ** 80)
        assert structural_hash(2 ** 80) != structural_hash(2 ** 80 + 1)
        assert structural_hash(math.inf) != structural_hash(-math.inf)

    def test_repr(self):
        assert repr(StructuralHasher()) == "StructuralHasher(digest_size=8, strict_numeric=True)"


class TestClassify:

    @pytest.mark.parametrize("value,kind", [
        (None, Kind.NONE),
        (True, Kind.BOOL),
        (3, Kind.INT),
        (3.0, Kind.FLOAT),
        ("s", Kind.STR),
        (bytearray(b"x"), Kind.BYTES),
        (Color.RED, Kind.ENUM),
        (np.zeros(2), Kind.NDARRAY),
        (np.float64(1.0), Kind.NPSCALAR),
        ({}, Kind.MAPPING),
        (set(), Kind.SET),
        ([], Kind.SEQUENCE),
        (Point(0, 0, []), Kind.DATACLASS),
        (Record("r", {}), Kind.OBJECT),
        (Slotted(1), Kind.OBJECT),
        (object(), Kind.HASHABLE),
        (len, Kind.HASHABLE),
    ])
    def test_kinds(self, value, kind):
        assert classify(value) == kind

    def test_relaxed_numbers_share_a_kind(self):
        assert {classify(v, strict_numeric=False) for v in (True, 1, 1.0)} == {Kind.NUMBER}

    def test_slot_fields_follow_the_mro(self):
        fields = record_fields(SlottedChild(1, extra=2))
        assert fields == {"extra": 2, "value": 1, "_Slotted__secret": None}

    def test_unset_slots_are_skipped(self):
        value = Slotted.__new__(Slotted)
        value.value = 3
        assert record_fields(value) == {"value": 3}


class TestIdentityHashedMembers:
    """Dict keys and set members that Python hashes by identity.

    Such containers can hold several structurally equal members, so every
    member has to be matched against a distinct member of the other side.
    """

    @staticmethod
    def twin_keys():
        return {Record("r", {}): "v", Record("r", {}): "v"}

    @staticmethod
    def distinct_keys():
        return {Record("r", {}): "v", Record("s", {}): "v"}

    def test_mapping_matching_is_one_to_one(self):
        a, b = self.twin_keys(), self.distinct_keys()
        assert deep_equal(a, b) == deep_equal(b, a)
        assert not deep_equal(a, b)
        assert structural_hash(a) != structural_hash(b)

    def test_set_matching_is_one_to_one(self):
        a = set(self.twin_keys())
        b = set(self.distinct_keys())
        assert deep_equal(a, b) == deep_equal(b, a)
        assert not deep_equal(a, b)
        assert structural_hash(a) != structural_hash(b)

    def test_equal_multiplicities_still_match(self):
        a, b = self.twin_keys(), self.twin_keys()
        assert deep_equal(a, b)
        assert deep_equal(set(a), set(b))
        assert structural_hash(a) == structural_hash(b)


class TestDefaultProviders:

    def test_default_pair(self):
        hasher, equals = default_providers()
        assert isinstance(hasher, StructuralHasher)
        assert equals({"a": [1]}, {"a": [1]})

    def test_from_config(self):
        from deepset import DeepSetConfig

        hasher, equals = default_providers(DeepSetConfig(digest_size=4, salt="pepper", strict_numeric=False))
        assert hasher.digest_size == 4
        assert not hasher.strict_numeric
        assert equals(1, 1.0)
