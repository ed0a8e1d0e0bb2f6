import sys
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parents[1]))

from ogma.runtime.tokenizer import PUNCT, QUOTED, WORD, next_word, tokenize  # noqa: E402


def test_tokenize_splits_on_whitespace():
    words = tokenize("  the   token\tstring ")
    assert [w.text for w in words] == ["the", "token", "string"]
    assert all(w.kind == WORD for w in words)


def test_next_word_returns_none_on_blank_text():
    assert next_word("") is None
    assert next_word("   \n") is None


def test_back_tick_sections_are_atomic_inside_words():
    word, rest = next_word("q`my var` rest")
    assert word.raw == "q`my var`"
    assert word.kind == WORD
    assert rest == " rest"


def test_quoted_word_is_unwrapped():
    word, rest = next_word("`hello, world` next")
    assert word.kind == QUOTED
    assert word.is_quoted
    assert word.text == "hello, world"
    assert word.raw == "`hello, world`"
    assert rest == " next"


def test_commas_are_punctuation_words():
    words = tokenize("1, 2;3")
    assert [(w.kind, w.text) for w in words] == [
        (WORD, "1"),
        (PUNCT, ","),
        (WORD, "2"),
        (PUNCT, ";"),
        (WORD, "3"),
    ]


def test_numbers_keep_signs_and_points():
    assert [w.text for w in tokenize("-4 3.5 +2")] == ["-4", "3.5", "+2"]


def test_unterminated_quote_runs_to_end():
    word, rest = next_word("`abc def")
    assert word.kind == WORD
    assert word.raw == "`abc def"
    assert rest == ""
