"""Configurable verifier kinds.

Each verifier compares a guest's submission against values fixed at startup.
Text is normalised before comparison so that casing and stray whitespace do
not make a correct answer fail.
"""
import hashlib
import hmac
from typing import Any


def normalize(value: Any) -> str | None:
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        value = str(value)
    if not isinstance(value, str):
        return None
    return " ".join(value.split()).casefold()


def sha256_hex(value: str) -> str:
    return hashlib.sha256(value.encode("utf-8")).hexdigest()


class AnswerVerifier:
    """Accepts any one of a set of plain-text answers."""

    def __init__(self, answers: list[str]):
        if not answers:
            raise ValueError("AnswerVerifier needs at least one accepted answer")
        self.answers = {normalize(answer) for answer in answers}

    def evaluate(self, submission: Any) -> bool:
        candidate = normalize(submission)
        return candidate is not None and candidate in self.answers


class HashedAnswerVerifier:
    """Like :class:`AnswerVerifier`, but configured with SHA-256 digests of
    the normalised answers so the solution never appears in plain text."""

    def __init__(self, digests: list[str]):
        if not digests:
            raise ValueError("HashedAnswerVerifier needs at least one digest")
        self.digests = [digest.strip().lower() for digest in digests]

    def evaluate(self, submission: Any) -> bool:
        candidate = normalize(submission)
        if candidate is None:
            return False
        candidate_digest = sha256_hex(candidate)
        matched = False
        for digest in self.digests:
            # Check every digest so timing does not reveal which one matched
            matched |= hmac.compare_digest(candidate_digest, digest)
        return matched


class SequenceVerifier:
    """Accepts a list whose items match the configured steps in order."""

    def __init__(self, steps: list[str]):
        if not steps:
            raise ValueError("SequenceVerifier needs at least one step")
        self.steps = [normalize(step) for step in steps]

    def evaluate(self, submission: Any) -> bool:
        if not isinstance(submission, list) or len(submission) != len(self.steps):
            return False
        return all(normalize(item) == step for item, step in zip(submission, self.steps))
