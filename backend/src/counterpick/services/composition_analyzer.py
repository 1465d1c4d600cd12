"""Team composition analysis: damage profile, power spikes, archetype, strengths and weaknesses."""
import math
from typing import Optional

from counterpick.models.analysis import (
    CompositionAnalysis,
    CompositionArchetype,
    DamageProfile,
)
from counterpick.models.champion import Champion, DamageType, PowerSpike
from counterpick.models.draft import Side


class CompositionAnalyzer:
    """Derives a CompositionAnalysis from a team's committed picks.

    Pure: analysis is recomputed from the picks on every call.

    Damage profile rule: AP, AD and TRUE champions count 1 toward their
    bucket, MIXED champions count 0.5 AP + 0.5 AD, and champions without
    a damage type are left out. Percentages are rounded with the largest
    remainder method so they always sum to 100.

    Archetype rules, first match wins:
        1. TEAMFIGHT  engage >= 2 and teamfight >= 2
        2. POKE       poke >= 2 and poke > engage
        3. SPLITPUSH  splitpush >= 1 and engage <= 1
        4. PICK       pick >= 2
        5. MIXED
    """

    SPIKE_MIN_CHAMPIONS = 2
    HEAVY_DAMAGE_PCT = 70
    MAX_NOTES = 5

    ARCHETYPE_TEMPLATES = {
        CompositionArchetype.TEAMFIGHT: {
            "strengths": ["Strong 5v5 teamfighting", "Multiple engage tools", "Good AoE damage"],
            "weaknesses": ["Weak to split push", "Needs to group"],
        },
        CompositionArchetype.POKE: {
            "strengths": ["Strong siege potential", "Can chunk before fights", "Good objective control"],
            "weaknesses": ["Weak to hard engage", "Needs good spacing"],
        },
        CompositionArchetype.SPLITPUSH: {
            "strengths": ["Creates side lane pressure", "Strong 1-3-1 setups"],
            "weaknesses": ["Weak if forced to group 5v5", "Requires coordination"],
        },
        CompositionArchetype.PICK: {
            "strengths": ["Can catch isolated targets", "Strong skirmishing"],
            "weaknesses": ["Weak to grouped teams", "Falls behind if no picks"],
        },
        CompositionArchetype.MIXED: {
            "strengths": ["Flexible win conditions"],
            "weaknesses": ["May lack a clear identity"],
        },
    }

    # (winner, loser): archetype matchups with a clear edge
    ARCHETYPE_ADVANTAGES = {
        (CompositionArchetype.TEAMFIGHT, CompositionArchetype.PICK),
        (CompositionArchetype.TEAMFIGHT, CompositionArchetype.POKE),
        (CompositionArchetype.SPLITPUSH, CompositionArchetype.TEAMFIGHT),
        (CompositionArchetype.PICK, CompositionArchetype.SPLITPUSH),
        (CompositionArchetype.PICK, CompositionArchetype.POKE),
        (CompositionArchetype.POKE, CompositionArchetype.SPLITPUSH),
    }

    def analyze(self, team: Side, picks: list[Optional[Champion]]) -> Optional[CompositionAnalysis]:
        """Analyze ``team``'s picks; None when there are none."""
        champions = [c for c in picks if c is not None]
        if not champions:
            return None

        counts = self._tag_counts(champions)
        profile = self.damage_profile(champions)
        spikes = self.power_spikes(champions)
        archetype = self.classify_archetype(counts)

        n = len(champions)
        engage_level = round(counts["engage"] / n * 100)
        peel_level = round(counts["peel"] / n * 100)
        waveclear_level = round(counts["waveclear"] / n * 100)

        strengths: list[str] = []
        weaknesses: list[str] = []
        has_damage_data = any(c.damage_type for c in champions)

        if has_damage_data and n >= 2:
            if profile.ap == 0:
                weaknesses.append("Lacks AP damage")
            if profile.ad == 0:
                weaknesses.append("Lacks AD damage")
        if profile.ap >= self.HEAVY_DAMAGE_PCT:
            weaknesses.append("Heavy AP - vulnerable to MR stacking")
        elif profile.ad >= self.HEAVY_DAMAGE_PCT:
            weaknesses.append("Heavy AD - vulnerable to armor stacking")
        elif has_damage_data and n >= 2 and profile.ap >= 30 and profile.ad >= 30:
            strengths.append("Balanced damage profile")

        if counts["engage"] == 0:
            weaknesses.append("No frontline engage")
        elif engage_level >= 60:
            strengths.append("Strong engage tools")

        if n >= 3 and counts["disengage"] == 0:
            weaknesses.append("No disengage tools")

        if peel_level >= 60:
            strengths.append("Excellent peel for carries")
        elif n >= 3 and counts["peel"] == 0:
            weaknesses.append("Limited peel - carries vulnerable")

        if waveclear_level >= 60:
            strengths.append("Good waveclear")
        elif n >= 3 and waveclear_level <= 20:
            weaknesses.append("Weak waveclear - can be sieged")

        if PowerSpike.EARLY in spikes and PowerSpike.LATE not in spikes:
            strengths.append("Strong early game pressure")
            weaknesses.append("Falls off late game")
        elif PowerSpike.LATE in spikes and PowerSpike.EARLY not in spikes:
            strengths.append("Excellent scaling")
            weaknesses.append("Weak early game")

        template = self.ARCHETYPE_TEMPLATES[archetype]
        strengths.extend(template["strengths"][:2])
        weaknesses.extend(template["weaknesses"][:1])

        return CompositionAnalysis(
            team=team,
            archetype=archetype,
            damage_profile=profile,
            power_spikes=spikes,
            strengths=self._dedupe(strengths)[: self.MAX_NOTES],
            weaknesses=self._dedupe(weaknesses)[: self.MAX_NOTES],
            engage_tools=[c.name for c in champions if c.has_tag("engage")],
            disengage_tools=[c.name for c in champions if c.has_tag("disengage")],
            engage_level=engage_level,
            peel_level=peel_level,
            waveclear_level=waveclear_level,
            pick_count=n,
        )

    @staticmethod
    def _tag_counts(champions: list[Champion]) -> dict[str, int]:
        tags = ("engage", "disengage", "teamfight", "poke", "splitpush", "pick", "peel", "waveclear")
        return {tag: sum(1 for c in champions if c.has_tag(tag)) for tag in tags}

    @staticmethod
    def _dedupe(notes: list[str]) -> list[str]:
        return list(dict.fromkeys(notes))

    @staticmethod
    def damage_profile(champions: list[Champion]) -> DamageProfile:
        """AP/AD/true percentages of the picks, summing to exactly 100 (or all 0)."""
        buckets = {"ap": 0.0, "ad": 0.0, "true": 0.0}
        for champ in champions:
            if champ.damage_type == DamageType.AP:
                buckets["ap"] += 1
            elif champ.damage_type == DamageType.AD:
                buckets["ad"] += 1
            elif champ.damage_type == DamageType.TRUE:
                buckets["true"] += 1
            elif champ.damage_type == DamageType.MIXED:
                buckets["ap"] += 0.5
                buckets["ad"] += 0.5

        total = sum(buckets.values())
        if total == 0:
            return DamageProfile()

        raw = {key: value / total * 100 for key, value in buckets.items()}
        floored = {key: math.floor(value) for key, value in raw.items()}
        remainder = 100 - sum(floored.values())
        # Largest fractional parts get the leftover points; ap, ad, true order breaks ties
        by_fraction = sorted(raw, key=lambda key: -(raw[key] - floored[key]))
        for key in by_fraction[:remainder]:
            floored[key] += 1
        return DamageProfile(ap=floored["ap"], ad=floored["ad"], true=floored["true"])

    def power_spikes(self, champions: list[Champion]) -> list[PowerSpike]:
        """Windows carried by at least two picks, in game order."""
        return [
            spike
            for spike in PowerSpike
            if sum(1 for c in champions if spike in c.power_spikes) >= self.SPIKE_MIN_CHAMPIONS
        ]

    @staticmethod
    def classify_archetype(counts: dict[str, int]) -> CompositionArchetype:
        if counts["engage"] >= 2 and counts["teamfight"] >= 2:
            return CompositionArchetype.TEAMFIGHT
        if counts["poke"] >= 2 and counts["poke"] > counts["engage"]:
            return CompositionArchetype.POKE
        if counts["splitpush"] >= 1 and counts["engage"] <= 1:
            return CompositionArchetype.SPLITPUSH
        if counts["pick"] >= 2:
            return CompositionArchetype.PICK
        return CompositionArchetype.MIXED

    def get_team_needs(self, picks: list[Optional[Champion]]) -> list[str]:
        """Gaps in a team with at least two committed picks: AP damage, AD damage, Engage."""
        champions = [c for c in picks if c is not None]
        if len(champions) < 2:
            return []

        needs = []
        if any(c.damage_type for c in champions):
            profile = self.damage_profile(champions)
            if profile.ap == 0:
                needs.append("AP damage")
            if profile.ad == 0:
                needs.append("AD damage")
        if not any(c.has_tag("engage") for c in champions):
            needs.append("Engage")
        return needs

    def compare(
        self, blue: Optional[CompositionAnalysis], red: Optional[CompositionAnalysis]
    ) -> Optional[dict]:
        """Archetype matchup between the two sides; None unless both have picks."""
        if blue is None or red is None:
            return None

        if (blue.archetype, red.archetype) in self.ARCHETYPE_ADVANTAGES:
            favored = Side.BLUE
        elif (red.archetype, blue.archetype) in self.ARCHETYPE_ADVANTAGES:
            favored = Side.RED
        else:
            favored = None

        blue_name = blue.archetype.value.lower()
        red_name = red.archetype.value.lower()
        if favored == Side.BLUE:
            description = f"Blue's {blue_name} comp is favored into Red's {red_name} style"
        elif favored == Side.RED:
            description = f"Red's {red_name} comp is favored into Blue's {blue_name} style"
        else:
            description = "Neutral composition matchup"

        return {
            "blue_archetype": blue.archetype.value,
            "red_archetype": red.archetype.value,
            "favored": favored.value if favored else None,
            "description": description,
        }
