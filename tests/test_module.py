import logging
import sys
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from ogma.binding import command, given  # noqa: E402
from ogma.runtime.bdd import Step, StepContext  # noqa: E402
from ogma.runtime.errors import CompileError, DataDecodeFailure, MismatchedStaticToken, UnexpectedEof  # noqa: E402
from ogma.runtime.module import Module, source_lines  # noqa: E402


@command("go d`n`")
def go_number(ctx, n: int):
    ctx.set_global("winner", "number")


@command("go d`n`")
def go_again(ctx, n: int):
    ctx.set_global("winner", "again")


@command("go d`word`")
def go_word(ctx, word: str):
    ctx.set_global("winner", "word")


@given("the value d`value`")
def value(ctx, value: int):
    ctx.set_global("value", value)


def test_source_lines_trim_and_keep_numbers():
    source = "\n  first  \n\n\tsecond\n"
    assert list(source_lines(source)) == [(2, "first"), (5, "second")]


def test_earlier_candidate_wins():
    module = Module([go_number, go_again])
    script = module.compile(None, "go 1")
    instance = script.instance()
    instance.exec()
    assert instance.ctx.get_global("winner", str) == "number"


def test_later_candidate_used_when_earlier_fails():
    module = Module([go_number, go_word])
    cmd = module.compile_line(None, "go `text`")
    assert cmd.name == "go_word"


def test_last_failure_is_reported():
    module = Module([go_number, go_word])
    with pytest.raises(CompileError) as info:
        module.compile(None, "go 1\n\ngo nowhere")
    assert info.value.line_number == 3
    assert info.value.line == "go nowhere"
    assert isinstance(info.value.cause, DataDecodeFailure)
    assert str(info.value).startswith("line 3:")


def test_empty_module_fails_every_line():
    with pytest.raises(UnexpectedEof):
        Module([]).compile_line(None, "anything")
    with pytest.raises(CompileError) as info:
        Module().compile(None, "anything")
    assert info.value.line_number == 1


def test_empty_source_compiles_to_empty_script():
    assert len(Module([go_number]).compile(None, "  \n\n ")) == 0


def test_keyword_state_threads_across_lines():
    module = Module([value])
    ctx = StepContext()
    script = module.compile(ctx, "Given the value 1\nAnd the value 2")
    assert len(script) == 2
    assert ctx.step is Step.GIVEN

    ctx.step = Step.THEN
    with pytest.raises(CompileError):
        module.compile(ctx, "And the value 3\nGiven the value 4")


def test_failed_match_leaves_keyword_state_alone():
    ctx = StepContext()
    with pytest.raises(DataDecodeFailure):
        Module([value]).compile_line(ctx, "Given the value oops")
    assert ctx.step is Step.START


def test_compile_source_uses_fresh_step_context():
    module = Module([value])
    assert len(module.compile_source("Given the value 1")) == 1
    with pytest.raises(CompileError) as info:
        module.compile_source("And the value 1")
    assert info.value.line_number == 1


def test_mismatched_keyword_is_a_static_mismatch():
    with pytest.raises(MismatchedStaticToken):
        value.match_line(StepContext(), "Then the value 1")


def test_compile_logs_accepted_lines(caplog):
    with caplog.at_level(logging.DEBUG, logger="ogma.compile"):
        Module([go_number]).compile(None, "go 4")
    assert any("go_number" in rec.getMessage() for rec in caplog.records)
