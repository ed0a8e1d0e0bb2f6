"""Integer arithmetic steps for Given/When/Then scripts.

::

    Given the value 3 henceforth the input
    And the addition of the input and 4 henceforth the left
    And the difference of the input and -4 henceforth the right
    When the left is equal to the right
    Then do nothing
"""

from __future__ import annotations

from typing import Any

from ..binding import given, then, when
from ..runtime.errors import Trap
from ..runtime.module import Module
from ..runtime.query import Query, describe_query
from ..runtime.vm import Context


def single_key(queries: list[Query]) -> str:
    key = queries[0].as_key() if len(queries) == 1 else None
    if key is None:
        raise Trap.runtime(f"expected a variable name, not {describe_query(queries)!r}")
    return key


@given("the value d`value` henceforth q`out`", name="Let")
def let(ctx: Context, value: Any, out: list[Query]) -> None:
    ctx.set_global(single_key(out), value)


@given("the addition of q`input` and d`b` henceforth q`out`", name="Add")
def add(ctx: Context, input: list[Query], b: int, out: list[Query]) -> None:
    a = ctx.require_global(single_key(input), int)
    ctx.set_global(single_key(out), a + b)


@given("the difference of q`input` and d`b` henceforth q`out`", name="Sub")
def sub(ctx: Context, input: list[Query], b: int, out: list[Query]) -> None:
    a = ctx.require_global(single_key(input), int)
    ctx.set_global(single_key(out), a - b)


@given("the product of q`input` and d`b` henceforth q`out`", name="Mul")
def mul(ctx: Context, input: list[Query], b: int, out: list[Query]) -> None:
    a = ctx.require_global(single_key(input), int)
    ctx.set_global(single_key(out), a * b)


@when("q`left` is equal to q`right`", name="Equals")
def equals(ctx: Context, left: list[Query], right: list[Query]) -> None:
    a = ctx.require_global(single_key(left), int)
    b = ctx.require_global(single_key(right), int)
    if a != b:
        raise Trap.runtime("left not equal to right")


@then("do nothing", name="Noop")
def noop(ctx: Context) -> None:
    pass


MODULE = Module([let, add, sub, mul, equals, noop])
