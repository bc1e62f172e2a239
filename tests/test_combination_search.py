import pytest

from phrase_hunter.core import (
    AnswerCounter,
    CombinationSearch,
    DigestVerifier,
    filter_words,
    search_combinations,
    weigh,
    weights_equal,
)

from conftest import md5_hex


def _run(words, phrase, max_words, *, threshold=1, workers=1):
    emitted = []
    target = weigh(phrase)
    search_combinations(
        filter_words(words, target),
        target,
        max_words,
        AnswerCounter(threshold),
        emitted.append,
        workers=workers,
    )
    return emitted


def test_finds_two_word_anagram():
    emitted = _run(["cat", "act", "tac", "dog"], "cat dog", 2)

    assert "cat dog" in emitted
    assert sorted(emitted) == ["act dog", "cat dog", "tac dog"]


def test_only_exact_weights_are_emitted():
    phrase = "cat dog"
    emitted = _run(["cat", "act", "tac", "dog", "do", "g", "go", "d"], phrase, 4)

    assert emitted
    for candidate in emitted:
        assert weights_equal(weigh(candidate), weigh(phrase))


def test_word_count_bound_limits_combinations():
    words = ["ab", "cd", "ef", "abcd"]

    assert sorted(_run(words, "ab cd ef", 2)) == ["abcd ef"]
    assert sorted(_run(words, "ab cd ef", 3)) == ["ab cd ef", "abcd ef"]


def test_each_combination_is_reported_once():
    emitted = _run(["a", "b", "c"], "abc", 3)

    assert len(emitted) == 1
    assert sorted(emitted[0].split(" ")) == ["a", "b", "c"]


@pytest.mark.parametrize("max_words", [0, 1])
def test_bound_below_two_emits_nothing(max_words):
    assert _run(["cat", "dog"], "cat dog", max_words) == []


def test_empty_dictionary_emits_nothing():
    assert _run([], "cat dog", 4) == []


def test_satisfied_counter_stops_the_search():
    counter = AnswerCounter(1)
    counter.increment()
    emitted = []

    search = CombinationSearch(["cat", "dog"], weigh("cat dog"), 2, counter, emitted.append)

    assert search.run() == 0
    assert emitted == []


def test_parallel_search_finds_the_same_combinations():
    words = ["ab", "cd", "ef", "abcd", "ba", "dc", "fe", "cdef"]

    sequential = _run(words, "ab cd ef", 3)
    parallel = _run(words, "ab cd ef", 3, workers=4)

    assert sorted(parallel) == sorted(sequential)


def test_search_and_verify_pipeline_reports_listen_silent():
    words = ["listen", "silent", "enlist", "tinsel", "inlets"]
    target = weigh("listen silent")
    notified = []
    counter = AnswerCounter(1)
    verifier = DigestVerifier(
        {"easy": md5_hex("silent listen")},
        counter,
        on_match=notified.append,
    )

    search = CombinationSearch(
        filter_words(words, target),
        target,
        2,
        counter,
        verifier.verify_candidate,
    )
    search.run()

    assert [(m.label, m.phrase) for m in notified] == [("easy", "silent listen")]


def test_no_notifications_after_threshold():
    words = ["listen", "silent", "enlist", "tinsel"]
    target = weigh("listen silent")
    notified = []
    counter = AnswerCounter(2)
    verifier = DigestVerifier(
        {"easy": md5_hex("listen silent"), "medium": md5_hex("listen enlist")},
        counter,
        on_match=notified.append,
    )
    candidates = []

    def _verify(candidate):
        candidates.append(candidate)
        verifier.verify_candidate(candidate)

    CombinationSearch(words, target, 2, counter, _verify).run()

    assert sorted(m.label for m in notified) == ["easy", "medium"]
    assert counter.value == 2
    assert candidates[-1] == "listen enlist"
    assert "enlist tinsel" not in candidates


class RecordingSearch(CombinationSearch):
    """Search that remembers every partial combination it extends."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.visited = []

    def _extend(self, base, pool):
        self.visited.append(base.text)
        super()._extend(base, pool)


def test_length_bound_stops_branches_longer_than_target_text():
    emitted = []
    search = RecordingSearch(
        list("abcdefgh"),
        weigh("abcdefgh"),
        8,
        AnswerCounter(1),
        emitted.append,
    )

    search.run()

    # "a b c d e" is 9 characters long; no single letter fits the
    # remaining room of 0, so six-word partials are never built.
    depths = {text.count(" ") + 1 for text in search.visited}
    assert max(depths) == 5
    assert "a b c d e" in search.visited
    assert emitted == []


def test_extensions_are_tried_shortest_first():
    emitted = []
    search = RecordingSearch(
        ["ab", "c", "de", "fgh"],
        weigh("abcdefgh"),
        5,
        AnswerCounter(1),
        emitted.append,
    )

    search.run()

    children = [text for text in search.visited if text.startswith("fgh ") and text.count(" ") == 1]
    assert children == ["fgh c", "fgh ab", "fgh de"]
    assert emitted == ["fgh c ab de"]
