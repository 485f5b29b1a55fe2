"""Crypto-investor archetype quiz.

Each answer nudges a six-trait vector (all traits start at 50, clamped to
0..100). The archetype whose ideal vector is nearest in L1 distance wins.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

TRAITS: tuple[str, ...] = ("risk", "calm", "analytical", "explorative", "horizon", "safety")

TraitVector = dict[str, int]


@dataclass(frozen=True)
class Option:
    label: str
    impact: dict[str, int]


@dataclass(frozen=True)
class Question:
    id: str
    text: str
    options: tuple[Option, ...]


@dataclass(frozen=True)
class Archetype:
    name: str
    ideal: TraitVector
    blurb: str
    strengths: list[str] = field(default_factory=list)
    watch: list[str] = field(default_factory=list)


QUESTIONS: tuple[Question, ...] = (
    Question(
        "goal",
        "What's your main goal with crypto right now?",
        (
            Option("Quick gains", {"risk": 20, "calm": -10, "horizon": -15}),
            Option("Long-term wealth", {"horizon": 25, "calm": 10, "risk": -5}),
            Option("Learn & experiment", {"explorative": 20, "analytical": -5}),
            Option("Protect capital", {"safety": 25, "risk": -20, "calm": 10}),
        ),
    ),
    Question(
        "dip",
        "Your portfolio drops 20% in a week. You...",
        (
            Option("Buy more (discount!)", {"risk": 20, "calm": 10}),
            Option("Hold steady", {"calm": 20, "risk": -5}),
            Option("Rebalance slowly", {"analytical": 15, "calm": 10}),
            Option("Panic sell", {"calm": -25, "safety": 10, "risk": -15}),
        ),
    ),
    Question(
        "horizon",
        "How long do you plan to keep most positions?",
        (
            Option("Weeks", {"horizon": -20, "risk": 10}),
            Option("Months", {"horizon": 5}),
            Option("Years", {"horizon": 25, "calm": 10}),
            Option("Not sure", {"explorative": 5}),
        ),
    ),
    Question(
        "decisions",
        "How do you usually decide on a trade?",
        (
            Option("Run the numbers", {"analytical": 25, "calm": 5}),
            Option("Gut feel", {"analytical": -10, "explorative": 10, "risk": 10}),
            Option("Ask the community", {"explorative": 10}),
            Option("Move fast, adjust later", {"risk": 15, "calm": -10}),
        ),
    ),
    Question(
        "learning",
        "Best way you learn?",
        (
            Option("Step-by-step guides", {"analytical": 10, "calm": 5}),
            Option("Tinker with small amounts", {"explorative": 20}),
            Option("Context from news/threads", {"explorative": 10}),
            Option("Set-and-forget", {"calm": 10, "horizon": 10}),
        ),
    ),
    Question(
        "frequency",
        "How often do you trade?",
        (
            Option("Many times a week", {"risk": 15, "calm": -5}),
            Option("A few times a month", {"calm": 5}),
            Option("Rarely", {"horizon": 10, "calm": 10}),
            Option("When something's trending", {"risk": 10, "calm": -10}),
        ),
    ),
    Question(
        "sizing",
        "Position sizing you're most comfortable with?",
        (
            Option("Small test -> scale up", {"analytical": 10, "explorative": 10}),
            Option("Go big on conviction", {"risk": 20}),
            Option("Fixed small amounts regularly", {"calm": 10, "horizon": 10}),
            Option("Only tiny amounts", {"safety": 20, "risk": -10}),
        ),
    ),
    Question(
        "resonate",
        "Pick the one that resonates most:",
        (
            Option("Stability > big wins", {"safety": 20, "risk": -15, "calm": 10}),
            Option("Love bold moves", {"risk": 25, "calm": -10}),
            Option("Curious early-adopter", {"explorative": 20, "risk": 10}),
            Option("Patient systems builder", {"analytical": 20, "horizon": 15, "calm": 10}),
        ),
    ),
)

ARCHETYPES: dict[str, Archetype] = {
    a.name: a
    for a in (
        Archetype(
            "Catalyst",
            {"risk": 80, "calm": 45, "analytical": 45, "explorative": 60, "horizon": 50, "safety": 30},
            "Ambitious, bold, and action-oriented. You like moving fast when the reward looks right.",
            ["Spots momentum early", "Acts decisively", "Comfortable taking calculated risks"],
            ["Avoid over-trading", "Set clear risk limits", "Don't let FOMO drive entries"],
        ),
        Archetype(
            "Builder",
            {"risk": 45, "calm": 80, "analytical": 80, "explorative": 40, "horizon": 80, "safety": 60},
            "Disciplined and forward-thinking. You favor strategies, systems, and steady progress.",
            ["Great planner", "Risk aware", "Consistent compounding mindset"],
            ["Don't miss asymmetric opportunities", "Review bias toward over-caution"],
        ),
        Archetype(
            "Explorer",
            {"risk": 60, "calm": 55, "analytical": 50, "explorative": 85, "horizon": 55, "safety": 40},
            "Curious and independent. You learn best by trying, tinkering, and seeing what happens.",
            ["Finds emerging tech early", "Learns fast by doing"],
            ["Beware shiny-object syndrome", "Diversify experiments"],
        ),
        Archetype(
            "Guardian",
            {"risk": 25, "calm": 80, "analytical": 70, "explorative": 30, "horizon": 70, "safety": 85},
            "You care about protecting what you have. You plan ahead and prefer stability over chaos.",
            ["Capital preservation", "Clear risk controls"],
            ["Inflation/drag from staying too defensive", "Missing cycles"],
        ),
        Archetype(
            "Dreamer",
            {"risk": 55, "calm": 45, "analytical": 45, "explorative": 60, "horizon": 70, "safety": 45},
            "Driven by big goals: freedom, purpose, and hope. You learn as you go and think long-term.",
            ["Vision-driven", "Stays through cycles"],
            ["Confirmation bias", "Emotional entries"],
        ),
        Archetype(
            "Gambler",
            {"risk": 90, "calm": 30, "analytical": 30, "explorative": 65, "horizon": 35, "safety": 15},
            "Drawn to high-risk, high-thrill moves and big swings. Fun, but manage it carefully.",
            ["Bold conviction", "Comfort with volatility"],
            ["Blow-up risk", "Emotional trading"],
        ),
    )
}


def initial_traits() -> TraitVector:
    return dict.fromkeys(TRAITS, 50)


def _clamp(value: int) -> int:
    return max(0, min(100, value))


def apply_answer(traits: TraitVector, option: Option) -> TraitVector:
    """Return a new trait vector with *option*'s impact applied."""
    updated = dict(traits)
    for trait, delta in option.impact.items():
        updated[trait] = _clamp(updated.get(trait, 50) + delta)
    return updated


def score_answers(answers: Sequence[int]) -> TraitVector:
    """Score one option index per question, in question order."""
    if len(answers) != len(QUESTIONS):
        msg = f"Expected {len(QUESTIONS)} answers, got {len(answers)}"
        raise ValueError(msg)
    traits = initial_traits()
    for question, index in zip(QUESTIONS, answers):
        if not 0 <= index < len(question.options):
            msg = f"Answer {index} out of range for question {question.id!r}"
            raise ValueError(msg)
        traits = apply_answer(traits, question.options[index])
    return traits


def closest_archetype(traits: TraitVector) -> str:
    """Return the archetype whose ideal vector is nearest to *traits*.

    Scores are ``1 / (1 + L1 distance)``; ties go to the earlier archetype.
    """
    best_name = ""
    best_score = -1.0
    for name, archetype in ARCHETYPES.items():
        distance = sum(abs(archetype.ideal[t] - traits.get(t, 50)) for t in TRAITS)
        score = 1 / (1 + distance)
        if score > best_score:
            best_name, best_score = name, score
    return best_name
