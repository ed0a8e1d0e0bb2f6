import sys
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from ogma.runtime.clause import (  # noqa: E402
    DataVar,
    QueryVar,
    Static,
    compile_clause,
    data_names,
    describe_clause,
    parse_clause,
    query_names,
    variable_names,
)
from ogma.runtime.errors import ClauseError, InvalidVariableName, InvalidVariablePrefix  # noqa: E402


def test_plain_words_become_static_tokens_in_order():
    assert compile_clause("the token string") == (
        Static("the"),
        Static("token"),
        Static("string"),
    )


def test_placeholders():
    assert compile_clause("the q`variable` token") == (
        Static("the"),
        QueryVar("variable"),
        Static("token"),
    )
    assert compile_clause("the d`variable` token") == (
        Static("the"),
        DataVar("variable"),
        Static("token"),
    )


def test_empty_template_has_no_tokens():
    assert compile_clause("") == ()
    assert list(parse_clause("   ")) == []


def test_concatenated_templates_concatenate_tokens():
    left = "the addition of q`input`"
    right = "and d`b` henceforth q`out`"
    assert compile_clause(left + " " + right) == compile_clause(left) + compile_clause(right)


def test_placeholder_must_end_with_marker():
    with pytest.raises(InvalidVariableName):
        compile_clause("the d`x")
    with pytest.raises(InvalidVariableName):
        compile_clause("q``")


@pytest.mark.parametrize("word", ["x`y`", "qq`y`", "`y`"])
def test_placeholder_prefix_must_be_q_or_d(word):
    with pytest.raises(InvalidVariablePrefix):
        compile_clause(f"the {word}")


def test_errors_report_word_and_offset():
    with pytest.raises(ClauseError) as info:
        compile_clause("the   x`y` end")
    assert info.value.word == "x`y`"
    assert info.value.offset == 6
    assert "invalid variable prefix" in str(info.value)
    assert isinstance(info.value, ValueError)


def test_lone_back_tick_has_an_empty_prefix():
    with pytest.raises(InvalidVariablePrefix) as info:
        compile_clause("the `")
    assert info.value.offset == 4


def test_parse_clause_is_lazy():
    tokens = parse_clause("the x`y`")
    assert next(tokens) == Static("the")
    with pytest.raises(InvalidVariablePrefix):
        next(tokens)


def test_token_kinds_and_names():
    clause = compile_clause("the q`a` and d`b`")
    assert clause[0].is_static()
    assert clause[1].is_query_var()
    assert clause[3].is_data_var()
    assert Static("a") != QueryVar("a")
    assert variable_names(clause) == ["a", "b"]
    assert query_names(clause) == ["a"]
    assert data_names(clause) == ["b"]
    assert describe_clause(clause) == "the q`a` and d`b`"
