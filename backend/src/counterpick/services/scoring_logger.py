"""Diagnostic logging for recommendation quality analysis.

Captures what the engine recommended at each step and what was actually
banned or picked, so recommendation accuracy can be reviewed after a
draft.

Usage:
    from counterpick.services.scoring_logger import ScoringLogger

    logger = ScoringLogger(output_dir, enabled=True)
    logger.start_session("session-123", blue_team="C9", red_team="TL")

    logger.log_recommendations(action_count, phase, result)
    logger.log_actual_action(action_count, "PICK", "BLUE", "jinx")

    logger.save()
"""
import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

from counterpick.models.recommendations import RecommendationResult

module_logger = logging.getLogger("counterpick.scoring_diagnostics")


class ScoringLogger:
    """Captures recommendation diagnostics for one draft session."""

    def __init__(self, output_dir: Optional[Path] = None, enabled: bool = True):
        """Initialize scoring logger.

        Args:
            output_dir: Directory to save diagnostic files. Defaults to logs/scoring/
            enabled: Whether logging is active
        """
        self.enabled = enabled
        self.output_dir = output_dir or Path(__file__).parents[4] / "logs" / "scoring"
        self.entries: list[dict] = []
        self.session_id: str = ""
        self._metadata: dict = {}
        # Recommendations active for the next action, keyed by action count
        self._active: dict[int, list[dict]] = {}
        # Each session is written to disk at most once
        self.saved_path: Optional[Path] = None

        if self.enabled:
            self.output_dir.mkdir(parents=True, exist_ok=True)
            module_logger.info(f"Scoring diagnostics enabled, output dir: {self.output_dir}")

    def start_session(self, session_id: str, blue_team: str, red_team: str, extra_metadata: Optional[dict] = None):
        if not self.enabled:
            return

        self.session_id = session_id
        self.entries = []
        self._active = {}
        self.saved_path = None
        self._metadata = {
            "session_id": session_id,
            "blue_team": blue_team,
            "red_team": red_team,
            "started_at": datetime.now().isoformat(),
            **(extra_metadata or {}),
        }
        self.entries.append({
            "event": "session_start",
            "timestamp": datetime.now().isoformat(),
            **self._metadata,
        })

    def log_recommendations(self, action_count: int, phase: str, result: RecommendationResult):
        """Log one recommendation computation (top 10 only)."""
        if not self.enabled:
            return

        recs = [
            {
                "rank": i + 1,
                "champion": rec.champion_id,
                "score": rec.score,
                "category": rec.category.value,
                "components": rec.components,
                "reasons": rec.reasons,
            }
            for i, rec in enumerate(result.recommendations[:10])
        ]
        self._active[action_count] = recs
        self.entries.append({
            "event": "recommendations",
            "timestamp": datetime.now().isoformat(),
            "action_count": action_count,
            "phase": phase,
            "action_type": result.action_type.value,
            "for_team": result.team.value,
            "target_role": result.target_role.value if result.target_role else None,
            "warnings": [w.to_dict() for w in result.warnings],
            "recommendations": recs,
        })

    def log_actual_action(self, action_count: int, action_type: str, team: str, champion: str):
        """Log what actually happened vs what was recommended for that action."""
        if not self.enabled:
            return

        recommendations = self._active.get(action_count, [])
        was_recommended = False
        recommendation_rank = None
        recommendation_score = None

        for rec in recommendations:
            if rec["champion"] == champion:
                was_recommended = True
                recommendation_rank = rec["rank"]
                recommendation_score = rec["score"]
                break

        self.entries.append({
            "event": "actual_action",
            "timestamp": datetime.now().isoformat(),
            "action_count": action_count,
            "action_type": action_type,
            "team": team,
            "champion": champion,
            "was_recommended": was_recommended,
            "recommendation_rank": recommendation_rank,
            "recommendation_score": recommendation_score,
            "top3_recommended": [rec["champion"] for rec in recommendations[:3]],
        })

    def log_undo(self, action_count: int, champion: str):
        if not self.enabled:
            return
        self.entries.append({
            "event": "undo",
            "timestamp": datetime.now().isoformat(),
            "action_count": action_count,
            "champion": champion,
        })

    def save(self, suffix: str = "") -> Optional[Path]:
        """Save diagnostics to JSON file.

        Returns:
            Path to saved file, or None if disabled, empty or already saved
        """
        if not self.enabled or not self.entries or self.saved_path is not None:
            return None

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        session_short = self.session_id[:8] if self.session_id else "unknown"
        output_path = self.output_dir / f"draft_{session_short}_{timestamp}{suffix}.json"

        with open(output_path, "w") as f:
            json.dump({
                "metadata": self._metadata,
                "summary": self._compute_summary(),
                "entries": self.entries,
            }, f, indent=2)

        module_logger.info(f"Scoring diagnostics saved: {output_path}")
        self.saved_path = output_path
        return output_path

    def _compute_summary(self) -> dict:
        rec_events = [e for e in self.entries if e["event"] == "recommendations"]
        actual_events = [e for e in self.entries if e["event"] == "actual_action"]

        summary = {"total_recommendation_events": len(rec_events)}
        for action_type in ("PICK", "BAN"):
            actuals = [e for e in actual_events if e["action_type"] == action_type]
            matches = [e for e in actuals if e["was_recommended"]]
            top3 = [e for e in matches if e["recommendation_rank"] <= 3]
            summary[f"{action_type.lower()}_accuracy"] = {
                "total": len(actuals),
                "in_recommendations": len(matches),
                "in_top_3": len(top3),
                "accuracy_pct": round(len(matches) / len(actuals) * 100, 1) if actuals else 0,
                "top3_pct": round(len(top3) / len(actuals) * 100, 1) if actuals else 0,
            }
        return summary
