"""Tests for archetype quiz scoring."""

import pytest

from totem_news.quiz import (
    ARCHETYPES,
    QUESTIONS,
    TRAITS,
    Option,
    apply_answer,
    closest_archetype,
    initial_traits,
    score_answers,
)

GUARDIAN_ANSWERS = [3, 1, 2, 0, 3, 2, 3, 0]
GAMBLER_ANSWERS = [0, 0, 0, 3, 1, 3, 1, 1]


def test_quiz_shape() -> None:
    assert len(QUESTIONS) == 8
    assert all(len(q.options) == 4 for q in QUESTIONS)
    assert set(ARCHETYPES) == {"Catalyst", "Builder", "Explorer", "Guardian", "Dreamer", "Gambler"}
    assert all(set(a.ideal) == set(TRAITS) for a in ARCHETYPES.values())


def test_initial_traits() -> None:
    assert initial_traits() == dict.fromkeys(TRAITS, 50)


def test_apply_answer_clamps_and_does_not_mutate() -> None:
    traits = {**initial_traits(), "risk": 95, "calm": 5}
    updated = apply_answer(traits, Option("x", {"risk": 20, "calm": -10}))
    assert updated["risk"] == 100
    assert updated["calm"] == 0
    assert traits["risk"] == 95


def test_score_answers_guardian_path() -> None:
    traits = score_answers(GUARDIAN_ANSWERS)
    assert traits == {"risk": 0, "calm": 100, "analytical": 75, "explorative": 50, "horizon": 95, "safety": 100}
    assert closest_archetype(traits) == "Guardian"


def test_score_answers_gambler_path() -> None:
    traits = score_answers(GAMBLER_ANSWERS)
    assert traits == {"risk": 100, "calm": 20, "analytical": 50, "explorative": 70, "horizon": 15, "safety": 50}
    assert closest_archetype(traits) == "Gambler"


@pytest.mark.parametrize("name", list(ARCHETYPES))
def test_ideal_vector_maps_to_its_archetype(name: str) -> None:
    assert closest_archetype(ARCHETYPES[name].ideal) == name


def test_score_answers_rejects_wrong_count() -> None:
    with pytest.raises(ValueError, match="Expected 8 answers"):
        score_answers([0, 1, 2])


def test_score_answers_rejects_out_of_range() -> None:
    with pytest.raises(ValueError, match="out of range"):
        score_answers([0, 0, 0, 0, 0, 0, 0, 4])
    with pytest.raises(ValueError):
        score_answers([-1, 0, 0, 0, 0, 0, 0, 0])
