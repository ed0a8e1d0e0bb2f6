"""Given/When/Then keyword sequencing."""

from __future__ import annotations

from enum import Enum


class Step(Enum):
    START = "start"
    GIVEN = "given"
    WHEN = "when"
    THEN = "then"

    def next(self, keyword: str) -> "Step | None":
        """Return the state after ``keyword`` or ``None`` if it is illegal here."""

        if keyword == "Given":
            if self in (Step.START, Step.GIVEN):
                return Step.GIVEN
            return None
        if keyword == "When":
            if self is Step.THEN:
                return None
            return Step.WHEN
        if keyword == "Then":
            return Step.THEN
        if keyword == "And":
            if self is Step.START:
                return None
            return self
        return None


class StepContext:
    """Mutable keyword state threaded through one script compilation."""

    def __init__(self, step: Step = Step.START):
        self.step = step

    def peek(self, keyword: str) -> Step | None:
        return self.step.next(keyword)

    def advance(self, keyword: str) -> bool:
        nxt = self.step.next(keyword)
        if nxt is None:
            return False
        self.step = nxt
        return True

    def reset(self) -> None:
        self.step = Step.START

    def __repr__(self) -> str:  # pragma: no cover - representation helper
        return f"StepContext({self.step.name})"


__all__ = ["Step", "StepContext"]
