import random
import re
from typing import List, Optional

from faker import Faker

from bowling_lab.engine.profile import BowlerProfile
from bowling_lab.engine.taxonomy import Arm, Archetype, Family, family_of
from bowling_lab.roster.normalize import derive_strategies


class BowlerGenerator:
    """Generates fictional bowlers for demo rosters and tests"""

    # (country, faker locale, weight)
    NATIONALITIES = [
        ("India", "en_IN", 55),
        ("Australia", "en_AU", 12),
        ("England", "en_GB", 10),
        ("South Africa", "en_US", 8),   # no en_ZA locale
        ("New Zealand", "en_NZ", 8),
        ("West Indies", "en_US", 7),
    ]

    # Archetype distribution, pace-heavy like a real bowling pool
    ARCHETYPE_WEIGHTS = [
        (Archetype.FAST, 14),
        (Archetype.FAST_MEDIUM, 14),
        (Archetype.MEDIUM, 6),
        (Archetype.SEAM, 14),
        (Archetype.SWING, 12),
        (Archetype.LEFT_ARM_PACE, 8),
        (Archetype.OFF_SPIN, 10),
        (Archetype.LEFT_ARM_ORTHODOX, 7),
        (Archetype.LEG_SPIN, 9),
        (Archetype.LEFT_ARM_WRIST_SPIN, 2),
        (Archetype.MYSTERY, 4),
    ]

    # Archetypes that are left-arm by definition
    LEFT_ARM = {Archetype.LEFT_ARM_PACE, Archetype.LEFT_ARM_ORTHODOX, Archetype.LEFT_ARM_WRIST_SPIN}

    STRENGTH_POOLS = {
        Family.PACE: [
            "Accurate yorkers", "Hard 4th stump length", "Wobble seam", "New-ball outswing",
            "Late inswing", "Disguised cutters", "Slower ball bouncer", "Skiddy bouncer",
            "Knuckle ball", "Back of a length into the body",
        ],
        Family.FINGER_SPIN: [
            "Tight stump-to-stump lines", "Arm-ball variation", "Carrom ball",
            "Drift and dip", "Flat quick darts", "Top-spin for bounce",
        ],
        Family.WRIST_SPIN: [
            "Big-turning leg-break", "Deceptive googly", "Top-spinner for bounce",
            "Quick flipper", "Slider on off stump",
        ],
        Family.MYSTERY_SPIN: [
            "Carrom ball", "Googly out of the front of the hand", "Flat skidding slider",
            "Off-break with overspin", "Leg-break off two fingers",
        ],
    }

    # kph ranges by archetype (spin speeds are in the 80s-90s)
    PACE_RANGES = {
        Archetype.FAST: (142, 152),
        Archetype.FAST_MEDIUM: (134, 143),
        Archetype.MEDIUM: (122, 132),
        Archetype.SEAM: (132, 142),
        Archetype.SWING: (128, 140),
        Archetype.LEFT_ARM_PACE: (132, 145),
    }

    TEAMS = [
        "Mumbai Titans", "Chennai Kings", "Bangalore Warriors", "Kolkata Knights",
        "Delhi Dynamos", "Punjab Lions", "Rajasthan Royals XI", "Hyderabad Hawks",
    ]

    FORMAT_COMBOS = [
        (["T20I"], 40),
        (["T20I", "ODI"], 35),
        (["T20I", "ODI", "Test"], 20),
        (["Test"], 5),
    ]

    def __init__(self, seed: Optional[int] = None):
        self.rng = random.Random(seed)
        self._fakers = {}
        self._seed = seed

    def _faker(self, locale: str) -> Faker:
        if locale not in self._fakers:
            fake = Faker(locale)
            if self._seed is not None:
                fake.seed_instance(self._seed)
            self._fakers[locale] = fake
        return self._fakers[locale]

    def _weighted_choice(self, choices: list):
        """Select from weighted choices [(item, weight), ...]"""
        items = [c[0] for c in choices]
        weights = [c[1] for c in choices]
        return self.rng.choices(items, weights=weights, k=1)[0]

    def _pace_kph(self, archetype: Archetype) -> str:
        if family_of(archetype) != Family.PACE:
            low = self.rng.randint(80, 88)
            return f"{low}-{low + 8}"
        lo, hi = self.PACE_RANGES.get(archetype, (130, 140))
        low = self.rng.randint(lo, hi - 4)
        return f"{low}-{low + self.rng.randint(4, 8)}"

    def _strengths(self, archetype: Archetype) -> List[str]:
        pool = self.STRENGTH_POOLS[family_of(archetype)]
        count = self.rng.choices([1, 2, 3], weights=[20, 50, 30], k=1)[0]
        return self.rng.sample(pool, count)

    def generate_bowler(self, archetype: Optional[Archetype] = None, team: Optional[str] = None) -> BowlerProfile:
        """
        Generate a single fictional bowler.

        Args:
            archetype: Specific archetype, or weighted random if None
            team: Specific franchise, or random if None
        """
        country, locale, _ = self._weighted_choice([(n, n[2]) for n in self.NATIONALITIES])
        if archetype is None:
            archetype = self._weighted_choice(self.ARCHETYPE_WEIGHTS)

        if archetype in self.LEFT_ARM:
            arm = Arm.LEFT
        else:
            arm = self.rng.choices([Arm.RIGHT, Arm.LEFT], weights=[80, 20], k=1)[0]

        name = self._faker(locale).name_male()
        return BowlerProfile(
            id=re.sub(r"\s+", "_", name.strip().lower()),
            name=name,
            arm=arm,
            archetype=archetype,
            strengths=self._strengths(archetype),
            strategies=derive_strategies(archetype),
            country=country,
            team=team or self.rng.choice(self.TEAMS),
            formats=list(self._weighted_choice(self.FORMAT_COMBOS)),
            pace_kph=self._pace_kph(archetype),
            is_legend=self.rng.random() < 0.05,
        )

    def generate_roster(self, count: int = 40) -> List[BowlerProfile]:
        """Generate ``count`` bowlers with unique ids."""
        bowlers = []
        seen = {}
        for _ in range(count):
            bowler = self.generate_bowler()
            n = seen.get(bowler.id, 0) + 1
            seen[bowler.id] = n
            if n > 1:
                bowler.id = f"{bowler.id}-{n}"
            bowlers.append(bowler)
        return bowlers
