import pytest

from puzzle_rsvp.puzzles.verifiers import (
    AnswerVerifier,
    HashedAnswerVerifier,
    SequenceVerifier,
    normalize,
    sha256_hex,
)

# sha256 of the normalised answer "follow the light"
FOLLOW_THE_LIGHT = "5cd47c03f46cc8ade005dd7d8393ccc58b37641418b07f3204b119151a9f3a69"


@pytest.mark.parametrize(
    "value, expected",
    [
        ("  Open   Sesame ", "open sesame"),
        ("STRASSE", "strasse"),
        (42, "42"),
        (True, None),
        (None, None),
        (["a"], None),
    ],
)
def test_normalize(value, expected):
    assert normalize(value) == expected


def test_answer_verifier_accepts_any_configured_answer():
    verifier = AnswerVerifier(["midsummer", "Mid Summer"])

    assert verifier.evaluate("MIDSUMMER") is True
    assert verifier.evaluate(" mid   summer") is True
    assert verifier.evaluate("midwinter") is False


@pytest.mark.parametrize("submission", [None, 7, True, ["midsummer"], {"answer": "midsummer"}])
def test_answer_verifier_rejects_non_text(submission):
    assert AnswerVerifier(["midsummer"]).evaluate(submission) is False


def test_answer_verifier_requires_answers():
    with pytest.raises(ValueError):
        AnswerVerifier([])


def test_hashed_answer_verifier():
    verifier = HashedAnswerVerifier([FOLLOW_THE_LIGHT.upper()])

    assert verifier.evaluate("Follow the Light") is True
    assert verifier.evaluate("follow the dark") is False
    assert verifier.evaluate(None) is False


def test_sha256_hex_matches_fixture():
    assert sha256_hex("follow the light") == FOLLOW_THE_LIGHT


def test_sequence_verifier():
    verifier = SequenceVerifier(["Red", "Green", "Blue"])

    assert verifier.evaluate(["red", " GREEN", "blue "]) is True
    assert verifier.evaluate(["red", "blue", "green"]) is False
    assert verifier.evaluate(["red", "green"]) is False
    assert verifier.evaluate("red green blue") is False
