import logging
from collections.abc import Callable
from typing import Any, Protocol, runtime_checkable

from puzzle_rsvp.invites.exceptions import UnknownEvent

logger = logging.getLogger(__name__)


@runtime_checkable
class Verifier(Protocol):
    """Pure predicate deciding whether a submission solves an event's puzzle.

    Implementations receive the raw submission and return a bool. They must
    not perform I/O or touch storage; persisting the solved state is the
    puzzle gate's job alone.
    """

    def evaluate(self, submission: Any) -> bool: ...


class FunctionVerifier:
    """Adapts a plain ``submission -> bool`` callable to :class:`Verifier`."""

    def __init__(self, fn: Callable[[Any], bool]):
        self.fn = fn

    def evaluate(self, submission: Any) -> bool:
        return self.fn(submission)

    def __repr__(self) -> str:
        return f"FunctionVerifier({getattr(self.fn, '__name__', self.fn)!r})"


class VerifierRegistry:
    def __init__(self):
        self._verifiers: dict[str, Verifier] = {}

    def register(self, event_slug: str, verifier: Verifier | Callable[[Any], bool]) -> None:
        if not isinstance(verifier, Verifier):
            if not callable(verifier):
                raise TypeError(f"Verifier for {event_slug!r} must be callable or define evaluate()")
            verifier = FunctionVerifier(verifier)
        if event_slug in self._verifiers:
            logger.warning("Replacing verifier for event %s", event_slug)
        self._verifiers[event_slug] = verifier

    def resolve(self, event_slug: str) -> Verifier:
        try:
            return self._verifiers[event_slug]
        except KeyError:
            raise UnknownEvent(event_slug) from None

    def __contains__(self, event_slug: str) -> bool:
        return event_slug in self._verifiers

    def __len__(self) -> int:
        return len(self._verifiers)

    def slugs(self) -> list[str]:
        return sorted(self._verifiers)
