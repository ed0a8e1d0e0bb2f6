import sys
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parents[1]))

from ogma.runtime.query import Query, decode_query, describe_query, ordinal  # noqa: E402


def test_single_key_query():
    assert decode_query("the sum") == ([Query.key("sum")], "")


def test_nested_query_is_outermost_first():
    items, rest = decode_query("the name of the user rest")
    assert items == [Query.key("user"), Query.key("name")]
    assert rest == " rest"


def test_ordinal_segments_become_indices():
    items, _ = decode_query("the 2nd of the scores")
    assert items == [Query.key("scores"), Query.index(1)]
    assert items[1].as_index() == 1
    assert items[1].as_key() is None


def test_query_stops_before_unrelated_words():
    assert decode_query("the left is equal") == ([Query.key("left")], " is equal")
    assert decode_query("the sum of 3") == ([Query.key("sum")], " of 3")


def test_non_query_text_decodes_to_nothing():
    assert decode_query("4 and 5") == ([], "4 and 5")
    assert decode_query("the") == ([], "the")
    assert decode_query("the , x") == ([], "the , x")
    assert decode_query("") == ([], "")


def test_ordinal_rendering():
    assert [ordinal(n) for n in (1, 2, 3, 4, 11, 12, 13, 21, 22, 111)] == [
        "1st",
        "2nd",
        "3rd",
        "4th",
        "11th",
        "12th",
        "13th",
        "21st",
        "22nd",
        "111th",
    ]


def test_describe_query_reads_back_as_a_phrase():
    assert describe_query([Query.key("user"), Query.key("name")]) == "the name of the user"
    assert str(Query.index(0)) == "1st"
