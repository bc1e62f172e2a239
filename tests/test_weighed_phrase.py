from dataclasses import FrozenInstanceError

import pytest

from phrase_hunter.core.weighed_phrase import (
    combine,
    is_subset_of,
    weigh,
    weights_equal,
)


def test_weigh_counts_characters_without_spaces():
    phrase = weigh("a ba c")

    assert dict(phrase.weight) == {"a": 2, "b": 1, "c": 1}
    assert phrase.text == "a ba c"
    assert phrase.space_count == 2
    assert phrase.word_count == 3


def test_weigh_is_case_sensitive():
    assert dict(weigh("Aa").weight) == {"A": 1, "a": 1}


def test_weigh_empty_text_has_empty_weight():
    assert dict(weigh("").weight) == {}


def test_weighed_phrase_is_immutable():
    phrase = weigh("listen")

    with pytest.raises(FrozenInstanceError):
        phrase.text = "silent"
    with pytest.raises(TypeError):
        phrase.weight["l"] = 5


@pytest.mark.parametrize(
    "left, right",
    [("cat", "dog"), ("poultry", "outwits ants"), ("a", "a"), ("", "xyz")],
)
def test_combine_matches_weighing_joined_text(left, right):
    joined = combine(weigh(left), weigh(right))

    assert joined.text == f"{left} {right}"
    assert dict(joined.weight) == dict(weigh(f"{left} {right}").weight)
    assert joined.space_count == weigh(left).space_count + weigh(right).space_count + 1


def test_combine_is_commutative_on_weight_only():
    ab = combine(weigh("ab"), weigh("cd"))
    ba = combine(weigh("cd"), weigh("ab"))

    assert weights_equal(ab, ba)
    assert ab.text != ba.text


def test_subset_is_reflexive():
    phrase = weigh("poultry outwits ants")

    assert is_subset_of(phrase, phrase)


def test_subset_respects_character_counts():
    target = weigh("cat dog")

    assert is_subset_of(weigh("tag"), target)
    assert not is_subset_of(weigh("toot"), target)
    assert not is_subset_of(weigh("cats"), target)


def test_subset_rejects_more_distinct_characters():
    assert not is_subset_of(weigh("abc"), weigh("aabb"))


def test_mutual_subsets_have_equal_weights():
    first = weigh("dormitory")
    second = weigh("dirty room")

    assert is_subset_of(first, second)
    assert is_subset_of(second, first)
    assert weights_equal(first, second)


@pytest.mark.parametrize(
    "left, right",
    [
        ("listen", "silent"),
        ("dormitory", "dirty room"),
        ("cat", "act t"),
        ("Cat", "act"),
        ("aab", "abb"),
        ("", " "),
    ],
)
def test_weights_equal_matches_sorted_characters(left, right):
    expected = sorted(left.replace(" ", "")) == sorted(right.replace(" ", ""))

    assert weights_equal(weigh(left), weigh(right)) is expected
