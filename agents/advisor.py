"""
Smart suggestions: asks Claude which additive strategy gives the farmer the
best ROI, given their flock metrics and the full additive list.

The calculator never waits on this. get_smart_suggestions() bounds the call
with a timeout and returns FALLBACK_MESSAGE on any failure, so a dead or slow
service only costs the advice text.
"""
import asyncio
import logging
from dataclasses import dataclass

import anthropic

from config import get_settings
from tools.additive_data import AdditiveReference

logger = logging.getLogger(__name__)

FALLBACK_MESSAGE = "Could not retrieve AI suggestions at this time. Please try again later."

ADVISOR_SYSTEM_PROMPT = """You are an expert in broiler farming practices and feed additives. \
Your goal is to help farmers improve their profitability by recommending the best feed \
additive strategy.

You will receive the farmer's current metrics, their baseline FCR (without any additives), \
and a list of all available additives with their properties (cost, FCR improvement, \
inclusion rate).

- Compare the farmer's current performance with what could be achieved with other \
additives or a strategic blend of additives.
- Focus on which additive or blend gives the best Return on Investment (ROI) or the \
lowest cost per kg of live weight.
- Explain your reasoning, e.g. why a more expensive additive can still give greater \
overall feed savings through a larger FCR improvement.
- Blends are theoretical: say so clearly and recommend testing on a small scale first.
"""


@dataclass(frozen=True)
class SuggestionRequest:
    additive_type: str
    feed_cost_per_live_weight: float
    broiler_weight: float
    mortality_rate: float
    baseline_fcr: float
    current_fcr: float
    all_additives: tuple[AdditiveReference, ...]


def build_prompt(req: SuggestionRequest) -> str:
    additive_lines = "\n".join(
        f"- {a.name}:\n"
        f"  - Cost: {a.cost} $/kg\n"
        f"  - FCR Improvement: {a.fcr_improvement_percent}%\n"
        f"  - Inclusion Rate: {a.inclusion_rate} g/ton"
        + (f"\n  - Mortality Reduction: {a.mortality_reduction_points} percentage points"
           if a.mortality_reduction_points else "")
        for a in req.all_additives
    )
    return f"""Here is the data:
Farmer's Baseline FCR: {req.baseline_fcr}
Farmer's Current Metrics (with {req.additive_type}):
- Current FCR: {req.current_fcr}
- Feed Cost: {req.feed_cost_per_live_weight} $/kg live weight
- Broiler Weight: {req.broiler_weight} kg
- Mortality Rate: {req.mortality_rate} %

Available Additives:
{additive_lines}

Based on this, what is your recommendation?"""


class SuggestionAdvisor:
    name = "Smart Suggestions"
    system_prompt = ADVISOR_SYSTEM_PROMPT

    def _get_client(self) -> anthropic.AsyncAnthropic:
        api_key = get_settings().anthropic_api_key
        if not api_key:
            raise RuntimeError("ANTHROPIC_API_KEY is not configured")
        return anthropic.AsyncAnthropic(api_key=api_key)

    async def suggest(self, req: SuggestionRequest) -> str:
        """Return the model's advice. Raises on API errors or an empty reply."""
        settings = get_settings()
        client = self._get_client()
        response = await client.messages.create(
            model=settings.advisor_model,
            system=self.system_prompt,
            messages=[{"role": "user", "content": build_prompt(req)}],
            max_tokens=settings.advisor_max_tokens,
        )
        text = "".join(
            block.text for block in response.content if getattr(block, "type", None) == "text"
        ).strip()
        if not text:
            raise ValueError("empty suggestion from model")
        return text


async def get_smart_suggestions(
    req: SuggestionRequest,
    advisor: SuggestionAdvisor | None = None,
    timeout: float | None = None,
) -> tuple[str, bool]:
    """
    Returns (text, used_fallback). Never raises for service failures.
    """
    advisor = advisor or suggestion_advisor
    if timeout is None:
        timeout = get_settings().advisor_timeout_seconds
    try:
        return await asyncio.wait_for(advisor.suggest(req), timeout=timeout), False
    except asyncio.TimeoutError:
        logger.warning("smart suggestions timed out after %.1fs", timeout)
    except (anthropic.APIError, RuntimeError, ValueError):
        logger.warning("smart suggestions unavailable", exc_info=True)
    return FALLBACK_MESSAGE, True


# Singleton
suggestion_advisor = SuggestionAdvisor()
