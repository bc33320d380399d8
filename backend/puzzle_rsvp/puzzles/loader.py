import logging
from datetime import date
from pathlib import Path
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field, TypeAdapter

from puzzle_rsvp.puzzles.registry import Verifier, VerifierRegistry
from puzzle_rsvp.puzzles.verifiers import (
    AnswerVerifier,
    HashedAnswerVerifier,
    SequenceVerifier,
)

logger = logging.getLogger(__name__)


class AnswerConfig(BaseModel):
    kind: Literal["answer"]
    answers: list[str] = Field(min_length=1)


class HashedAnswerConfig(BaseModel):
    kind: Literal["answer_sha256"]
    digests: list[str] = Field(min_length=1)


class SequenceConfig(BaseModel):
    kind: Literal["sequence"]
    steps: list[str] = Field(min_length=1)


VerifierConfig = Annotated[
    Union[AnswerConfig, HashedAnswerConfig, SequenceConfig],
    Field(discriminator="kind"),
]


class EventConfig(BaseModel):
    slug: str = Field(min_length=1, max_length=100)
    title: str
    event_date: date | None = None
    is_active: bool = True
    verifier: VerifierConfig


events_adapter = TypeAdapter(list[EventConfig])


def load_event_configs(path: Path) -> list[EventConfig]:
    """Parse and validate the static events file."""
    return events_adapter.validate_json(path.read_bytes())


def build_verifier(config: VerifierConfig) -> Verifier:
    if isinstance(config, AnswerConfig):
        return AnswerVerifier(config.answers)
    if isinstance(config, HashedAnswerConfig):
        return HashedAnswerVerifier(config.digests)
    if isinstance(config, SequenceConfig):
        return SequenceVerifier(config.steps)
    raise ValueError(f"Unsupported verifier config: {config!r}")


def populate_registry(registry: VerifierRegistry, configs: list[EventConfig]) -> None:
    for config in configs:
        registry.register(config.slug, build_verifier(config.verifier))


def build_registry(events_file: Path | None) -> VerifierRegistry:
    registry = VerifierRegistry()
    if events_file is None:
        logger.warning("No events file configured; every puzzle attempt will be rejected")
        return registry

    populate_registry(registry, load_event_configs(events_file))
    logger.info("Registered verifiers for %d event(s): %s", len(registry), ", ".join(registry.slugs()))
    return registry
