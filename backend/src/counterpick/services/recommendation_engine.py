"""Recommendation engine combining all scoring components."""
import logging
from pathlib import Path
from typing import Optional

from counterpick.errors import DegradedRecommendationWarning
from counterpick.models.champion import Champion, DamageType
from counterpick.models.draft import ActionType, DraftStep, Side
from counterpick.models.recommendations import (
    Recommendation,
    RecommendationCategory,
    RecommendationResult,
)
from counterpick.models.team import DraftPlayer, TeamDraftState
from counterpick.services.availability import available_champions
from counterpick.services.champion_catalog import ChampionCatalog
from counterpick.services.composition_analyzer import CompositionAnalyzer
from counterpick.services.scorers import MatchupCalculator, MetaScorer, ProficiencyScorer
from counterpick.services.synergy_service import SynergyService
from counterpick.utils.role_normalizer import Role, role_for_pick_slot

logger = logging.getLogger(__name__)

# Category a factor's bonus maps to
FACTOR_CATEGORIES = {
    "comfort": RecommendationCategory.COMFORT,
    "counter": RecommendationCategory.COUNTER,
    "meta": RecommendationCategory.META,
    "team_need": RecommendationCategory.META,
    "synergy": RecommendationCategory.SYNERGY,
    "denial": RecommendationCategory.DENY,
    "flex": RecommendationCategory.FLEX,
}
_CATEGORY_ORDER = {category: i for i, category in enumerate(RecommendationCategory)}


class RecommendationEngine:
    """Ranks champions for the step on the clock using additive factor bonuses.

    Stateless between calls: every request is scored from the team states
    it is given.
    """

    # Maximum bonus per factor (score points out of 100)
    WEIGHTS = {
        "comfort": 30.0,   # PICK: acting player's games and win rate
        "meta": 25.0,      # tier / presence
        "counter": 20.0,   # PICK: favorable matchups vs enemy picks
        "synergy": 15.0,   # PICK: curated pairs with allies
        "denial": 40.0,    # BAN: enemy comfort and threats to our picks
        "team_need": 10.0, # PICK: fills a missing damage type or engage
        "flex": 8.0,       # PICK: multi-role early in the draft
    }
    CONTESTING_ROLE_WEIGHT = 0.6
    # Win rate edge over 50% that earns the full counter bonus
    FULL_COUNTER_EDGE = 0.10
    # Share of the denial bonus reserved for champions that counter our picks
    DENIAL_COUNTER_SHARE = 0.25
    FLEX_MAX_TEAM_PICKS = 1

    def __init__(
        self,
        knowledge_dir: Optional[Path] = None,
        catalog: Optional[ChampionCatalog] = None,
        meta_scorer: Optional[MetaScorer] = None,
        matchup_calculator: Optional[MatchupCalculator] = None,
        synergy_service: Optional[SynergyService] = None,
        proficiency_scorer: Optional[ProficiencyScorer] = None,
        composition_analyzer: Optional[CompositionAnalyzer] = None,
        limit: int = 8,
        flex_fallback_threshold: int = 5,
    ):
        self.catalog = catalog or ChampionCatalog(knowledge_dir)
        self.meta_scorer = meta_scorer or MetaScorer(knowledge_dir)
        self.matchup_calculator = matchup_calculator or MatchupCalculator(knowledge_dir)
        self.synergy_service = synergy_service or SynergyService(knowledge_dir)
        self.proficiency_scorer = proficiency_scorer or ProficiencyScorer(knowledge_dir)
        self.composition_analyzer = composition_analyzer or CompositionAnalyzer()
        self.limit = limit
        self.flex_fallback_threshold = flex_fallback_threshold

    def get_recommendations(
        self,
        blue: TeamDraftState,
        red: TeamDraftState,
        step: DraftStep,
        limit: Optional[int] = None,
    ) -> RecommendationResult:
        """Generate ranked recommendations for ``step``.

        Args:
            blue: Blue side state
            red: Red side state
            step: The step on the clock (decides BAN vs PICK and the acting team)
            limit: Maximum recommendations to return (defaults to the engine limit)

        Returns:
            RecommendationResult with the ranked list and any degraded-data warnings
        """
        our = blue if step.team == Side.BLUE else red
        enemy = red if step.team == Side.BLUE else blue
        limit = self.limit if limit is None else limit
        warnings: list[DegradedRecommendationWarning] = []

        if not self.meta_scorer.has_data:
            self._warn(warnings, "meta", "Meta table is empty; meta strength contributes 0")

        available = available_champions(self.catalog, blue, red)

        if step.action_type == ActionType.BAN:
            target_role = None
            scored = self._score_bans(available, our, enemy, warnings)
        else:
            slot = our.first_empty_pick()
            target_role = role_for_pick_slot(slot) if slot is not None else None
            if target_role is None:
                return RecommendationResult(step.action_type, step.team, None, [], warnings)
            scored = self._score_picks(available, our, enemy, slot, target_role, warnings)

        scored.sort(
            key=lambda rec: (-rec.score, -rec.components.get("comfort", 0.0), rec.champion_name)
        )
        return RecommendationResult(
            action_type=step.action_type,
            team=step.team,
            target_role=target_role,
            recommendations=scored[:limit],
            warnings=warnings,
        )

    # ------------------------------------------------------------------ bans

    def _score_bans(
        self,
        candidates: list[Champion],
        our: TeamDraftState,
        enemy: TeamDraftState,
        warnings: list[DegradedRecommendationWarning],
    ) -> list[Recommendation]:
        # Enemy players who have not locked in a champion yet
        open_players = enemy.unpicked_players()
        if not enemy.players:
            self._warn(warnings, "denial", f"No roster for {enemy.team_name}; comfort denial contributes 0")
        elif open_players and not any(self.proficiency_scorer.pool_for(p) for p in open_players):
            self._warn(warnings, "denial", f"No champion pools for {enemy.team_name}; comfort denial contributes 0")

        our_picks = our.filled_picks
        if our_picks and not self._has_counter_data(our_picks):
            self._warn(warnings, "counter", "No matchup data for our picks; counter denial contributes 0")

        recommendations = []
        for champ in candidates:
            contributions: list[tuple[str, float, str]] = []
            target_player = None

            self._add_meta(champ, contributions)

            best_player, best_comfort = None, 0.0
            for player in open_players:
                comfort = self.proficiency_scorer.comfort_score(player, champ.id)
                if comfort > best_comfort:
                    best_player, best_comfort = player, comfort
            if best_player is not None:
                entry = self.proficiency_scorer.entry_for(best_player, champ.id)
                bonus = self.WEIGHTS["denial"] * (1 - self.DENIAL_COUNTER_SHARE) * best_comfort
                contributions.append((
                    "denial",
                    bonus,
                    f"Denies {best_player.name}'s comfort pick "
                    f"({entry.games_played} games, {entry.win_rate:.1f}% WR)",
                ))
                target_player = best_player.name

            threatened, edge = self._best_counter(champ, [(pick, 1.0) for pick in our_picks])
            if threatened is not None:
                bonus = self.WEIGHTS["denial"] * self.DENIAL_COUNTER_SHARE * edge
                contributions.append(("denial", bonus, f"Counters our {threatened.name}"))

            recommendations.append(
                self._build(champ, contributions, fallback_reason="Available ban option",
                            target_player=target_player)
            )
        return recommendations

    # ----------------------------------------------------------------- picks

    def _score_picks(
        self,
        available: list[Champion],
        our: TeamDraftState,
        enemy: TeamDraftState,
        slot: int,
        target_role: Role,
        warnings: list[DegradedRecommendationWarning],
    ) -> list[Recommendation]:
        player = our.player_at(slot)
        if player is None:
            self._warn(warnings, "comfort", f"No {target_role.value} player on {our.team_name}; comfort contributes 0")
        elif not self.proficiency_scorer.pool_for(player):
            self._warn(warnings, "comfort", f"No champion pool for {player.name}; comfort contributes 0")

        # Enemy picks that matter for this lane, with their weight
        enemy_targets: list[tuple[Champion, Optional[Role]]] = [
            (champ, role_for_pick_slot(i)) for i, champ in enumerate(enemy.picks) if champ is not None
        ]
        if enemy_targets and not self._has_counter_data([c for c, _ in enemy_targets]):
            self._warn(warnings, "counter", "No matchup data for enemy picks; counter contributes 0")

        eligible = [c for c in available if target_role in c.roles]
        widened = len(eligible) < self.flex_fallback_threshold
        candidates = available if widened else eligible
        if widened and candidates:
            logger.info(
                f"Only {len(eligible)} {target_role.value} candidates; widening to {len(candidates)} champions"
            )

        allies = our.filled_picks
        team_needs = self.composition_analyzer.get_team_needs(our.picks)

        recommendations = []
        for champ in candidates:
            off_role = target_role not in champ.roles
            contributions: list[tuple[str, float, str]] = []

            comfort = self.proficiency_scorer.comfort_score(player, champ.id)
            if comfort > 0:
                entry = self.proficiency_scorer.entry_for(player, champ.id)
                contributions.append((
                    "comfort",
                    self.WEIGHTS["comfort"] * comfort,
                    f"{player.name}'s comfort pick: {entry.games_played} games, {entry.win_rate:.1f}% WR",
                ))

            self._add_meta(champ, contributions)

            weighted_enemies = []
            for enemy_champ, enemy_role in enemy_targets:
                if enemy_role == target_role:
                    weighted_enemies.append((enemy_champ, 1.0))
                elif enemy_champ.roles & champ.roles:
                    weighted_enemies.append((enemy_champ, self.CONTESTING_ROLE_WEIGHT))
            countered, edge = self._best_counter(champ, weighted_enemies)
            if countered is not None:
                matchup = self.matchup_calculator.get_matchup(champ.id, countered.id)
                contributions.append((
                    "counter",
                    self.WEIGHTS["counter"] * edge,
                    f"Counters {countered.name} ({matchup['score'] * 100:.0f}% win rate)",
                ))

            best_ally, best_synergy = None, 0.0
            for ally in allies:
                synergy = self.synergy_service.get_synergy_score(champ.id, ally.id)
                if synergy > best_synergy:
                    best_ally, best_synergy = ally, synergy
            if best_ally is not None:
                rating = self.synergy_service.get_rating(champ.id, best_ally.id)
                contributions.append((
                    "synergy",
                    self.WEIGHTS["synergy"] * best_synergy,
                    f"Synergy with {best_ally.name} ({rating}-tier pair)",
                ))

            filled = self._needs_filled(champ, team_needs)
            if filled:
                contributions.append((
                    "team_need",
                    self.WEIGHTS["team_need"] * len(filled) / len(team_needs),
                    f"Fills team need: {', '.join(filled)}",
                ))

            flex_lanes = champ.sorted_roles if len(champ.roles) > 1 else []
            if flex_lanes and not off_role and our.pick_count <= self.FLEX_MAX_TEAM_PICKS:
                share = min(1.0, (len(flex_lanes) - 1) / 2)
                contributions.append((
                    "flex",
                    self.WEIGHTS["flex"] * share,
                    f"Flex pick: {'/'.join(role.value for role in flex_lanes)}",
                ))

            recommendations.append(
                self._build(
                    champ,
                    contributions,
                    fallback_reason=f"Playable {target_role.value} option",
                    target_player=player.name if player else None,
                    mastery_level=self.proficiency_scorer.mastery_level(player, champ.id),
                    flex_lanes=flex_lanes,
                    team_needs=filled,
                    off_role_for=target_role if off_role else None,
                )
            )
        return recommendations

    # --------------------------------------------------------------- helpers

    def _add_meta(self, champ: Champion, contributions: list[tuple[str, float, str]]):
        meta = self.meta_scorer.get_meta_score(champ.id)
        if meta > 0:
            tier = self.meta_scorer.get_meta_tier(champ.id)
            label = f"{tier}-tier meta pick" if tier else "Meta pick"
            contributions.append(("meta", self.WEIGHTS["meta"] * meta, label))

    def _best_counter(
        self, champ: Champion, enemies: list[tuple[Champion, float]]
    ) -> tuple[Optional[Champion], float]:
        """Enemy champion ``champ`` counters hardest, and the weighted edge 0.0-1.0."""
        best, best_edge = None, 0.0
        for enemy_champ, weight in enemies:
            matchup = self.matchup_calculator.get_matchup(champ.id, enemy_champ.id)
            if matchup["data_source"] == "none":
                continue
            edge = max(0.0, matchup["score"] - 0.5) / self.FULL_COUNTER_EDGE
            edge = min(1.0, edge) * weight
            if edge > best_edge:
                best, best_edge = enemy_champ, edge
        return best, best_edge

    def _has_counter_data(self, champions: list[Champion]) -> bool:
        if not self.matchup_calculator.has_data:
            return False
        return any(self.matchup_calculator.knows(c.id) for c in champions)

    @staticmethod
    def _needs_filled(champ: Champion, needs: list[str]) -> list[str]:
        filled = []
        for need in needs:
            if need == "AP damage" and champ.damage_type in (DamageType.AP, DamageType.MIXED):
                filled.append(need)
            elif need == "AD damage" and champ.damage_type in (DamageType.AD, DamageType.MIXED):
                filled.append(need)
            elif need == "Engage" and champ.has_tag("engage"):
                filled.append(need)
        return filled

    def _build(
        self,
        champ: Champion,
        contributions: list[tuple[str, float, str]],
        fallback_reason: str,
        target_player: Optional[str] = None,
        mastery_level: Optional[str] = None,
        flex_lanes: Optional[list[Role]] = None,
        team_needs: Optional[list[str]] = None,
        off_role_for: Optional[Role] = None,
    ) -> Recommendation:
        components: dict[str, float] = {}
        for factor, bonus, _ in contributions:
            components[factor] = round(components.get(factor, 0.0) + bonus, 2)

        ordered = sorted((c for c in contributions if c[1] > 0), key=lambda c: -c[1])
        reasons = [reason for _, _, reason in ordered]
        if off_role_for is not None:
            reasons.append(f"Off-role fallback for {off_role_for.value}")
        if not reasons:
            reasons.append(fallback_reason)

        total = sum(components.values())
        score = round(max(0.0, min(100.0, total)), 1)

        return Recommendation(
            champion_id=champ.id,
            champion_name=champ.name,
            score=score,
            category=self._category(components),
            reasons=reasons,
            flex_lanes=flex_lanes or [],
            team_needs=team_needs or [],
            components=components,
            mastery_level=mastery_level,
            target_player=target_player,
            off_role=off_role_for is not None,
        )

    @staticmethod
    def _category(components: dict[str, float]) -> RecommendationCategory:
        """Category of the largest bonus; enum order breaks ties, META when nothing fired."""
        firing = [(bonus, FACTOR_CATEGORIES[factor]) for factor, bonus in components.items() if bonus > 0]
        if not firing:
            return RecommendationCategory.META
        firing.sort(key=lambda item: (-item[0], _CATEGORY_ORDER[item[1]]))
        return firing[0][1]

    @staticmethod
    def _warn(warnings: list[DegradedRecommendationWarning], factor: str, message: str):
        logger.warning(f"Degraded recommendations ({factor}): {message}")
        warnings.append(DegradedRecommendationWarning(factor, message))
