# app/animals.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, List, Optional
import random


@dataclass(frozen=True)
class Animal:
    id: str
    name: str
    emoji: str
    description: str
    image: str
    min_wpm: int = 0
    max_wpm: int = 0


# -------- WPM-banded animals, slowest first --------
ANIMALS: List[Animal] = [
    Animal("snail", "Snail", "🐌", "Slow and steady wins the race!", "assets/animals/snail.png", 0, 10),
    Animal("sloth", "Sloth", "🦥", "Taking it easy in the jungle", "assets/animals/sloth.png", 10, 20),
    Animal("turtle", "Turtle", "🐢", "Steady progress through the forest", "assets/animals/turtle.png", 20, 30),
    Animal("rabbit", "Rabbit", "🐰", "Hopping along nicely!", "assets/animals/rabbit.png", 30, 40),
    Animal("dog", "Dog", "🐕", "Running with enthusiasm!", "assets/animals/dog.png", 40, 50),
    Animal("deer", "Deer", "🦌", "Graceful and fast", "assets/animals/deer.png", 50, 60),
    Animal("cheetah", "Cheetah", "🐆", "Lightning speed through the jungle!", "assets/animals/cheetah.png", 60, 70),
    Animal("horse", "Horse", "🐎", "Champion of the jungle!", "assets/animals/horse.png", 70, 999),
]

# -------- hatched from mystery eggs --------
LEGENDARY_ANIMALS: List[Animal] = [
    Animal("parrot", "Parrot", "🦜", "A colorful friend from the canopy!", "assets/animals/parrot.png"),
    Animal("butterfly", "Butterfly", "🦋", "Beautiful and graceful!", "assets/animals/butterfly.png"),
    Animal("chameleon", "Chameleon", "🦎", "Master of disguise!", "assets/animals/chameleon.png"),
]

_MESSAGES = [
    (10, "Keep going! You're doing great! 🌟"),
    (20, "Nice progress! Keep practicing! 🎯"),
    (30, "You're getting faster! 🚀"),
    (40, "Excellent work! 💪"),
    (50, "Amazing speed! 🔥"),
    (60, "Incredible typing! ⚡"),
    (70, "Lightning fast! 💨"),
]


def animal_for_wpm(wpm: float) -> Animal:
    for animal in ANIMALS:
        if animal.min_wpm <= wpm < animal.max_wpm:
            return animal
    return ANIMALS[0]


def animal_by_id(animal_id: str) -> Animal:
    for animal in ANIMALS + LEGENDARY_ANIMALS:
        if animal.id == animal_id:
            return animal
    return ANIMALS[0]


def reward_for_wpm(wpm: float, unlocked: Iterable[str]) -> Optional[Animal]:
    """The animal this WPM earns, or None if it is already in the collection."""
    animal = animal_for_wpm(wpm)
    return None if animal.id in set(unlocked) else animal


def next_animal_to_unlock(unlocked: Iterable[str]) -> Optional[Animal]:
    have = set(unlocked)
    for animal in ANIMALS:
        if animal.id not in have:
            return animal
    return None


def unlock_progress(wpm: float, unlocked: Iterable[str]) -> float:
    nxt = next_animal_to_unlock(unlocked)
    if nxt is None:
        return 100.0
    current = animal_for_wpm(wpm)
    span = nxt.min_wpm - current.min_wpm
    if span <= 0:
        return 100.0
    return min((wpm - current.min_wpm) / span * 100.0, 100.0)


def random_legendary(rng: Optional[random.Random] = None) -> Animal:
    return (rng or random).choice(LEGENDARY_ANIMALS)


def motivational_message(wpm: float) -> str:
    for limit, msg in _MESSAGES:
        if wpm < limit:
            return msg
    return "Champion typist! 🏆"
