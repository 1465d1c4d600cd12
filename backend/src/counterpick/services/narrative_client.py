"""Post-draft strategy narrative from an OpenAI-compatible chat completions API.

Falls back to a deterministic narrative built from the composition
analyses when the generator is disabled, unconfigured or failing.
"""

import logging
from typing import Optional

import httpx

from counterpick.models.analysis import CompositionAnalysis

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are an expert League of Legends coach and analyst. "
    "Given a completed professional draft, explain each team's composition, "
    "its win conditions, the key lane matchups and which side the draft favors. "
    "Answer in at most four short paragraphs of plain text."
)


class NarrativeClient:
    """Generates post-draft strategy narratives."""

    def __init__(
        self,
        api_key: str = "",
        base_url: str = "https://api.cerebras.ai/v1",
        model: str = "llama-3.3-70b",
        timeout: float = 30.0,
        enabled: bool = True,
    ):
        """Initialize the narrative client.

        Args:
            api_key: API key for the chat completions endpoint
            base_url: Base URL of an OpenAI-compatible API
            model: Model id to request
            timeout: Request timeout in seconds
            enabled: When False, always use the template narrative
        """
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.model = model
        self.timeout = timeout
        self.enabled = enabled
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def is_configured(self) -> bool:
        return self.enabled and bool(self.api_key)

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(timeout=self.timeout)
        return self._client

    async def close(self):
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()

    async def generate(
        self,
        summary: dict,
        blue_analysis: Optional[CompositionAnalysis],
        red_analysis: Optional[CompositionAnalysis],
        matchup: Optional[dict] = None,
    ) -> dict:
        """Narrative for a completed draft.

        Args:
            summary: Teams with their picks (champion, role, player) and bans
            blue_analysis: Blue composition analysis
            red_analysis: Red composition analysis
            matchup: Archetype matchup note

        Returns:
            {"narrative": str, "source": "llm" | "template"}
        """
        if not self.is_configured:
            logger.info("Narrative generator not configured, using template narrative")
            return self._template(summary, blue_analysis, red_analysis, matchup)

        prompt = self._build_prompt(summary, blue_analysis, red_analysis, matchup)
        try:
            response = await self._call_llm(prompt)
            content = response["choices"][0]["message"]["content"].strip()
            if not content:
                raise ValueError("empty completion")
            return {"narrative": content, "source": "llm"}
        except (httpx.HTTPError, KeyError, IndexError, TypeError, ValueError) as e:
            logger.error(f"Narrative generation failed: {e}")
            return self._template(summary, blue_analysis, red_analysis, matchup)

    async def _call_llm(self, prompt: str) -> dict:
        client = await self._get_client()
        response = await client.post(
            f"{self.base_url}/chat/completions",
            headers={
                "Authorization": f"Bearer {self.api_key}",
                "Content-Type": "application/json",
            },
            json={
                "model": self.model,
                "messages": [
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": prompt},
                ],
                "temperature": 0.4,
                "max_tokens": 1200,
            },
        )
        response.raise_for_status()
        return response.json()

    def _build_prompt(
        self,
        summary: dict,
        blue_analysis: Optional[CompositionAnalysis],
        red_analysis: Optional[CompositionAnalysis],
        matchup: Optional[dict],
    ) -> str:
        sections = ["Analyze this completed League of Legends draft:", ""]
        for side, analysis in (("blue", blue_analysis), ("red", red_analysis)):
            team = summary.get(side, {})
            picks = "\n  ".join(
                f"{p['role']}: {p['champion']} ({p.get('player') or 'unknown'})"
                for p in team.get("picks", [])
            )
            bans = ", ".join(team.get("bans", [])) or "none"
            sections.append(f"{side.title()} Team ({team.get('team_name', side.title())}):")
            sections.append(f"  Bans: {bans}")
            sections.append(f"  Picks:\n  {picks}")
            if analysis:
                sections.append(self._describe_analysis(analysis))
            sections.append("")
        if matchup:
            sections.append(f"Composition matchup: {matchup['description']}")
        return "\n".join(sections)

    @staticmethod
    def _describe_analysis(analysis: CompositionAnalysis) -> str:
        profile = analysis.damage_profile
        spikes = ", ".join(s.value.lower() for s in analysis.power_spikes) or "none"
        return (
            f"  Archetype: {analysis.archetype.value.lower()}; "
            f"damage {profile.ap}% AP / {profile.ad}% AD / {profile.true}% true; "
            f"power spikes: {spikes}; "
            f"strengths: {', '.join(analysis.strengths) or 'none'}; "
            f"weaknesses: {', '.join(analysis.weaknesses) or 'none'}"
        )

    def _template(
        self,
        summary: dict,
        blue_analysis: Optional[CompositionAnalysis],
        red_analysis: Optional[CompositionAnalysis],
        matchup: Optional[dict],
    ) -> dict:
        paragraphs = []
        for side, analysis in (("blue", blue_analysis), ("red", red_analysis)):
            name = summary.get(side, {}).get("team_name", side.title())
            if analysis is None:
                paragraphs.append(f"{name} has no committed picks.")
                continue
            profile = analysis.damage_profile
            text = (
                f"{name} ({side.title()}) drafted a {analysis.archetype.value.lower()} composition "
                f"with {profile.ap}% AP, {profile.ad}% AD and {profile.true}% true damage."
            )
            if analysis.strengths:
                text += f" Strengths: {', '.join(analysis.strengths).lower()}."
            if analysis.weaknesses:
                text += f" Watch out for: {', '.join(analysis.weaknesses).lower()}."
            if analysis.power_spikes:
                windows = ", ".join(s.value.lower() for s in analysis.power_spikes)
                text += f" Power spikes: {windows} game."
            paragraphs.append(text)
        if matchup:
            paragraphs.append(f"{matchup['description']}.")
        return {"narrative": "\n\n".join(paragraphs), "source": "template"}
