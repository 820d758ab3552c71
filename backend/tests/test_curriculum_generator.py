"""Unit tests for the curriculum generator and its retry policy."""

from __future__ import annotations

import pytest

from curriculum_assistant.curriculum_options import ProfileDimension
from curriculum_assistant.services.curriculum_generator import (
    CurriculumGenerator,
    parse_json_reply,
    split_time_allocation,
    strip_code_fences,
)
from curriculum_assistant.services.gemini_client import GeminiConfigurationError, GeminiError
from curriculum_assistant.services.retry import GenerationFailedError, ResponseParseError, with_retry
from curriculum_assistant.schemas.curriculum import LearningSequence, ObjectiveAnalysis


@pytest.fixture
def sleeps() -> list[float]:
    return []


@pytest.fixture
def make_generator(sleeps):
    def _make(client, **kwargs) -> CurriculumGenerator:
        return CurriculumGenerator(client, sleep=sleeps.append, **kwargs)

    return _make


def test_objective_analysis_is_parsed(make_generator, scripted_client, lesson_form, analysis_payload, as_json) -> None:
    client = scripted_client(as_json(analysis_payload))

    result = make_generator(client).generate_objective_analysis(lesson_form)

    assert len(result.objectives()) == 3
    call = client.calls[0]
    assert call["response_mime_type"] == "application/json"
    assert call["response_schema"]["properties"]["semester"]["enum"] == ["Ganjil"]
    assert "Peserta didik memahami siklus air." in call["prompt"]
    assert "Ilmu Pengetahuan Alam" in call["prompt"]


def test_fenced_json_reply_is_accepted(make_generator, scripted_client, lesson_form, analysis_payload, as_json) -> None:
    client = scripted_client(f"```json\n{as_json(analysis_payload)}\n```")

    result = make_generator(client).generate_objective_analysis(lesson_form)

    assert result.outcome_analyses[1].learning_outcome == "Peserta didik menjelaskan ekosistem."


def test_invalid_json_is_retried_with_backoff(
    make_generator, scripted_client, sleeps, lesson_form, analysis_payload, as_json
) -> None:
    client = scripted_client("not json", GeminiError("boom"), as_json(analysis_payload))

    result = make_generator(client, base_delay=1.0).generate_objective_analysis(lesson_form)

    assert isinstance(result, ObjectiveAnalysis)
    assert len(client.calls) == 3
    assert sleeps == [1.0, 2.0]


def test_wrong_semester_counts_as_invalid_reply(
    make_generator, scripted_client, lesson_form, analysis_payload, as_json
) -> None:
    wrong = {**analysis_payload, "semester": "Genap"}
    client = scripted_client(as_json(wrong), as_json(analysis_payload))

    result = make_generator(client).generate_objective_analysis(lesson_form)

    assert result.semester.value == "Ganjil"
    assert len(client.calls) == 2


def test_gives_up_after_attempt_ceiling(make_generator, scripted_client, sleeps, lesson_form) -> None:
    client = scripted_client("{}", "[]", "still not it")

    with pytest.raises(GenerationFailedError) as excinfo:
        make_generator(client, max_attempts=3, base_delay=0.5).generate_objective_analysis(lesson_form)

    assert excinfo.value.attempts == 3
    assert isinstance(excinfo.value.__cause__, ResponseParseError)
    assert sleeps == [0.5, 1.0]


def test_non_retryable_error_stops_immediately(make_generator, scripted_client, sleeps, lesson_form) -> None:
    client = scripted_client(GeminiError("not found", status_code=404, retryable=False), "unused")

    with pytest.raises(GeminiError):
        make_generator(client).generate_objective_analysis(lesson_form)

    assert len(client.calls) == 1
    assert sleeps == []


def test_missing_api_key_is_not_retried(make_generator, scripted_client, lesson_form) -> None:
    client = scripted_client(GeminiConfigurationError("no key"))

    with pytest.raises(GeminiConfigurationError):
        make_generator(client).generate_objective_analysis(lesson_form)


def test_learning_sequence_prompt_lists_objectives(
    make_generator, scripted_client, lesson_form, analysis, sequence_payload, as_json
) -> None:
    client = scripted_client(as_json(sequence_payload))

    result = make_generator(client).generate_learning_sequence(lesson_form, analysis)

    assert isinstance(result, LearningSequence)
    assert result.items[0].profile_dimensions == [ProfileDimension.CRITICAL_REASONING, ProfileDimension.COLLABORATION]
    prompt = client.calls[0]["prompt"]
    assert "1. Menjelaskan evaporasi dengan Cinta Alam" in prompt
    assert "3. Mengidentifikasi rantai makanan dengan Cinta Alam" in prompt
    dimension_enum = client.calls[0]["response_schema"]["properties"]["items"]["items"]["properties"][
        "profile_dimensions"
    ]["items"]["enum"]
    assert "Kolaborasi" in dimension_enum


def test_unknown_profile_dimension_is_rejected(
    make_generator, scripted_client, lesson_form, analysis, sequence_payload, as_json
) -> None:
    bad = {"items": [{**sequence_payload["items"][0], "profile_dimensions": ["Flying"]}]}
    client = scripted_client(as_json(bad), as_json(sequence_payload))

    result = make_generator(client).generate_learning_sequence(lesson_form, analysis)

    assert len(result.items) == 1
    assert len(client.calls) == 2


def test_lesson_plan_is_plain_markdown(make_generator, scripted_client, lesson_form, sequence) -> None:
    client = scripted_client("   ", "# Lesson Plan\n## TP 1\n")

    markdown = make_generator(client).generate_lesson_plan(lesson_form, sequence.items[0])

    assert markdown == "# Lesson Plan\n## TP 1"
    call = client.calls[-1]
    assert call["response_mime_type"] == "text/plain"
    assert call["response_schema"] is None
    assert "Opening activity (14 minutes)" in call["prompt"]
    assert "Core activity (63 minutes)" in call["prompt"]
    assert "Closing activity (14 minutes)" in call["prompt"]


@pytest.mark.parametrize(
    ("allocation", "expected"),
    [
        ("90 Menit (2 JP)", (14, 63, 14)),
        ("30 menit", (5, 21, 5)),
        ("2 x 40 Menit", (0, 1, 0)),
        ("tanpa angka", (0, 0, 0)),
        ("", (0, 0, 0)),
    ],
)
def test_split_time_allocation(allocation: str, expected: tuple[int, int, int]) -> None:
    assert split_time_allocation(allocation) == expected


def test_strip_code_fences() -> None:
    assert strip_code_fences('```json\n{"a": 1}\n```') == '{"a": 1}'
    assert strip_code_fences('{"a": 1}') == '{"a": 1}'


def test_parse_json_reply_rejects_empty() -> None:
    with pytest.raises(ResponseParseError):
        parse_json_reply("  ", LearningSequence)


def test_with_retry_returns_first_success() -> None:
    delays: list[float] = []
    outcomes = iter([ResponseParseError("bad"), "ok"])

    def operation() -> str:
        value = next(outcomes)
        if isinstance(value, Exception):
            raise value
        return value

    assert with_retry(operation, max_attempts=3, base_delay=2.0, sleep=delays.append) == "ok"
    assert delays == [2.0]


def test_with_retry_does_not_catch_unrelated_errors() -> None:
    def operation() -> None:
        raise KeyError("bug")

    with pytest.raises(KeyError):
        with_retry(operation, sleep=lambda _: None)


def test_with_retry_requires_an_attempt() -> None:
    with pytest.raises(ValueError):
        with_retry(lambda: None, max_attempts=0)
