from engconvert.textfile import TextFile
from engconvert.textgroup import TextGroup


def _sample() -> TextFile:
    return TextFile(
        name="sample",
        groups=[
            TextGroup(1, strings=["Rome", "the eternal city"]),
            TextGroup(4, strings=[]),
            TextGroup(7, strings=["a b c", "", "Caesar"]),
        ],
    )


def test_max_group_id_empty_is_zero():
    assert TextFile().max_group_id() == 0


def test_max_group_id_is_last_group():
    text_file = _sample()
    assert text_file.max_group_id() == text_file.groups[-1].id


def test_max_group_id_follows_list_order_not_maximum():
    text_file = TextFile(groups=[TextGroup(9), TextGroup(3)])
    assert text_file.max_group_id() == 3


def test_total_strings_is_sum_of_group_sizes():
    text_file = _sample()
    assert text_file.total_strings() == sum(len(g.strings) for g in text_file.groups)


def test_total_words_is_sum_of_group_words():
    text_file = _sample()
    assert text_file.total_words() == sum(g.total_words() for g in text_file.groups)


def test_empty_file_totals():
    text_file = TextFile()
    assert text_file.total_strings() == 0
    assert text_file.total_words() == 0


def test_defaults():
    text_file = TextFile()
    assert text_file.name == ""
    assert text_file.index_with_counts is False
    assert text_file.groups == []