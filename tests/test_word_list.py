import pytest

from phrase_hunter.core import WordListError, WordListLoader, filter_words, weigh
from phrase_hunter.core.weighed_phrase import is_subset_of


def test_loader_strips_lines_and_skips_blanks(tmp_path):
    path = tmp_path / "words.txt"
    path.write_bytes(b"listen\r\n\r\n  silent \nenlist\n")

    loader = WordListLoader(path)

    assert loader.load() == ("listen", "silent", "enlist")


def test_loader_reads_file_once(write_word_list):
    path = write_word_list(["one", "two"])
    loader = WordListLoader(path)

    first = loader.load()
    path.write_text("three\n", encoding="utf-8")

    assert loader.load() is first


def test_loader_raises_for_missing_file(tmp_path):
    loader = WordListLoader(tmp_path / "missing.txt")

    with pytest.raises(WordListError):
        loader.load()


def test_filter_keeps_first_occurrence_in_order():
    target = weigh("cat dog")

    words = filter_words(["dog", "cat", "act", "dog", "cat", "god"], target)

    assert words == ("dog", "cat", "act", "god")


def test_filter_drops_words_outside_target_weight():
    target = weigh("cat dog")

    words = filter_words(["cats", "toot", "Cat", "goat", "cog", "coat", ""], target)

    assert words == ("goat", "cog", "coat")
    for word in words:
        assert is_subset_of(weigh(word), target)


def test_filter_empty_input():
    assert filter_words([], weigh("anything")) == ()
