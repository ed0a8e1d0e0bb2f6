import sys
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from ogma.runtime.clause import DataVar, QueryVar, Static, compile_clause  # noqa: E402
from ogma.runtime.data import DataDecodeError  # noqa: E402
from ogma.runtime.errors import (  # noqa: E402
    DataDecodeFailure,
    EmptyQuery,
    ExpectedEof,
    MatchError,
    MismatchedStaticToken,
    UnexpectedEof,
    UnfilledVar,
    UnknownDataVar,
    UnknownQueryVar,
)
from ogma.runtime.matcher import Matcher, match_clause  # noqa: E402
from ogma.runtime.query import Query  # noqa: E402

CLAUSE = (Static("the"), DataVar("x"))


def test_static_then_data():
    assert match_clause(CLAUSE, "the 5", (), {"x": int}) == {"x": 5}


def test_missing_input_is_unexpected_eof():
    with pytest.raises(UnexpectedEof):
        match_clause(CLAUSE, "the", (), {"x": int})


def test_trailing_tokens_are_rejected():
    with pytest.raises(ExpectedEof, match="unexpected trailing tokens"):
        match_clause(CLAUSE, "the 5 extra", (), {"x": int})


def test_static_words_must_match_exactly():
    with pytest.raises(MismatchedStaticToken):
        match_clause(CLAUSE, "The 5", (), {"x": int})


def test_addition_clause_end_to_end():
    clause = compile_clause("the addition of d`a` and d`b` henceforth q`out`")
    values = match_clause(
        clause,
        "the addition of 3 and 4 henceforth the sum",
        ("out",),
        {"a": int, "b": int},
    )
    assert values == {"a": 3, "b": 4, "out": [Query.key("sum")]}


def test_unknown_destinations():
    with pytest.raises(UnknownQueryVar):
        match_clause((QueryVar("q"),), "the sum", (), {})
    with pytest.raises(UnknownDataVar):
        match_clause((DataVar("d"),), "3", (), {})


def test_unfilled_destination():
    with pytest.raises(UnfilledVar):
        match_clause((Static("go"),), "go", (), {"x": int})


def test_query_placeholder_needs_a_query():
    with pytest.raises(EmptyQuery):
        match_clause((QueryVar("out"),), "4", ("out",), {})


def test_decoder_errors_are_wrapped():
    with pytest.raises(DataDecodeFailure) as info:
        match_clause((DataVar("x"),), "abc", (), {"x": int})
    assert isinstance(info.value.__cause__, DataDecodeError)
    assert isinstance(info.value, MatchError)


def test_matcher_primitives():
    m = Matcher("the total of the 1st  ")
    assert m.next_static() == "the"
    assert m.next_static() == "total"
    assert m.next_static() == "of"
    assert m.next_query() == [Query.index(0)]
    assert m.is_empty()
    with pytest.raises(UnexpectedEof):
        m.next_static()


def test_failed_query_leaves_text_in_place():
    m = Matcher("4 left")
    with pytest.raises(EmptyQuery):
        m.next_query()
    assert m.next_data(int) == 4
    assert m.src == " left"
