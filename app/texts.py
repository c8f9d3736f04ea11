# app/texts.py
from __future__ import annotations
from datetime import date
from typing import Dict, List, Optional
import random

from app.config import DIFFICULTIES

FALLBACK_TEXT = "The jungle is full of amazing animals!"

TEXTS: Dict[str, List[str]] = {
    "easy": [
        "The frog jumps high",
        "Monkeys eat bananas",
        "Birds fly in the sky",
        "Tigers are very fast",
        "Elephants are big",
        "Snakes move slowly",
        "Parrots are colorful",
        "The jungle is green",
        "Lions roar loudly",
        "Bears climb trees",
    ],
    "medium": [
        "Colorful parrots fly through the jungle canopy",
        "The monkey swings from tree to tree with ease",
        "Tigers prowl silently through the tall grass",
        "Elephants trumpet loudly by the river bank",
        "Butterflies dance around the blooming flowers",
        "Sloths move slowly through the forest branches",
        "Toucans perch on the highest jungle trees",
        "Jaguars hunt stealthily in the moonlight",
        "Frogs croak loudly near the jungle pond",
        "Chameleons change colors to hide from danger",
        "Deer run swiftly through the forest paths",
        "Snakes slither quietly across the jungle floor",
        "Gorillas beat their chests in the morning",
        "Pandas munch on bamboo all day long",
        "The jungle comes alive with animal sounds",
    ],
    "hard": [
        "The magnificent jaguar prowls silently through the dense undergrowth looking for prey",
        "Colorful macaws squawk loudly as they soar above the lush green jungle canopy",
        "Playful monkeys swing gracefully from vine to vine while chattering to their friends",
        "The enormous elephant carefully makes its way to the crystal clear watering hole",
        "Tiny hummingbirds hover delicately near vibrant tropical flowers collecting sweet nectar",
        "Sleepy sloths hang upside down from sturdy branches munching on fresh green leaves",
        "Mysterious sounds echo through the misty jungle as twilight descends upon the forest",
        "Brightly colored poison dart frogs hop between moss-covered rocks near the rushing stream",
        "The wise old tortoise slowly ambles along the winding path through the ancient jungle",
        "Majestic birds of paradise display their stunning plumage during elaborate mating dances",
        "Skilled chameleons blend seamlessly with their surroundings using incredible camouflage abilities",
        "Powerful gorillas protect their family groups while foraging for fruits and vegetation",
        "Graceful deer leap effortlessly over fallen logs as they navigate the forest floor",
        "Industrious leafcutter ants march in long lines carrying pieces of leaves to their nest",
        "The tropical rainforest teems with countless species of fascinating and exotic creatures",
    ],
}


def estimate_difficulty(text: str) -> str:
    if len(text) < 30:
        return "easy"
    if len(text) < 70:
        return "medium"
    return "hard"


class TextLibrary:
    def __init__(self, difficulty: str = "medium", rng: Optional[random.Random] = None):
        self.texts = {k: list(v) for k, v in TEXTS.items()}
        self.difficulty = difficulty if difficulty in self.texts else "medium"
        self.rng = rng or random.Random()
        self._used: set[str] = set()

    def set_difficulty(self, difficulty: str) -> bool:
        if difficulty not in self.texts:
            return False
        self.difficulty = difficulty
        self._used.clear()
        return True

    def random_text(self, difficulty: Optional[str] = None) -> str:
        """Pick a text, not repeating any until the whole pool has been used."""
        pool = self.texts.get(difficulty or self.difficulty) or []
        if not pool:
            return FALLBACK_TEXT
        fresh = [t for t in pool if t not in self._used]
        if not fresh:
            self._used.difference_update(pool)
            fresh = pool
        text = self.rng.choice(fresh)
        self._used.add(text)
        return text

    def daily_text(self, day: Optional[date] = None) -> str:
        """Same text for everyone on the same calendar day."""
        day = day or date.today()
        pool = self.texts["medium"] + self.texts["hard"]
        return pool[day.timetuple().tm_yday % len(pool)]

    def add_custom_text(self, text: str, difficulty: str = "medium") -> bool:
        text = (text or "").strip()
        if not text or difficulty not in DIFFICULTIES:
            return False
        self.texts.setdefault(difficulty, []).append(text)
        return True

    def text_stats(self, text: str) -> dict:
        return {
            "length": len(text),
            "words": len(text.split(" ")),
            "difficulty": estimate_difficulty(text),
        }
