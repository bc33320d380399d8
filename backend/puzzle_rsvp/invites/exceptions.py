class InviteNotFound(Exception):
    """Token is unknown, or bound to a different event than the one requested.

    Both cases share this exception so callers cannot probe which tokens
    exist for other events.
    """


class UnknownEvent(Exception):
    """No verifier is registered for the event slug."""

    def __init__(self, event_slug: str):
        super().__init__(f"No verifier registered for event {event_slug!r}")
        self.event_slug = event_slug


class RsvpForbidden(Exception):
    """RSVP submitted for an invite whose puzzle has not been solved."""


class RateLimited(Exception):
    def __init__(self, retry_after: int):
        super().__init__(f"Too many attempts, retry in {retry_after}s")
        self.retry_after = retry_after
