"""Natural-language review of an analysis summary (best-effort)."""

from __future__ import annotations

import json
import logging

from repolens.domain.entities import AnalysisSummary, ReviewMode
from repolens.domain.exceptions import LlmError
from repolens.domain.ports.llm_gateway import LlmGateway

logger = logging.getLogger(__name__)

FALLBACK_REVIEW = "AI Analysis Unavailable."

# ── Prompt templates ────────────────────────────────────────────────────────

DEV_SYSTEM_PROMPT = """\
Audit this code analysis as a Senior Engineer. The input is a JSON summary \
of heuristic metrics computed over a sample of the repository's source files. \
Critique architecture, quality, and technical debt. Treat "secret_hints" as a \
rough substring signal, not a confirmed leak. Under 150 words.
"""

HR_SYSTEM_PROMPT = """\
Explain this code analysis to a recruiter. The input is a JSON summary of \
heuristic metrics computed over a sample of the repository's source files. \
Is the project organized? Does it reflect a hireable engineer? Avoid jargon. \
Under 150 words.
"""

_PROMPTS: dict[ReviewMode, str] = {
    ReviewMode.DEV: DEV_SYSTEM_PROMPT,
    ReviewMode.HR: HR_SYSTEM_PROMPT,
}


class ReviewRequester:
    """Asks the LLM for a short review; never raises.

    Parameters
    ----------
    llm_gateway:
        Adapter that sends prompts to an LLM, or ``None`` when no API key is
        configured (every review is then the fallback text).
    """

    def __init__(self, llm_gateway: LlmGateway | None) -> None:
        self._llm = llm_gateway

    async def review(self, summary: AnalysisSummary, mode: ReviewMode = ReviewMode.DEV) -> str:
        if self._llm is None:
            return FALLBACK_REVIEW

        user_prompt = json.dumps(summary.to_dict(), indent=2)
        try:
            return await self._llm.complete(_PROMPTS[mode], user_prompt)
        except LlmError as exc:
            logger.warning("Review generation failed for %s: %s", summary.repo, exc)
            return FALLBACK_REVIEW
