import asyncio
import logging
import random
from typing import Awaitable, Callable, List, Optional

from triage.core.config import settings
from triage.schemas.ticket import SuggestedResponse, Ticket

logger = logging.getLogger(__name__)

Sleep = Callable[[float], Awaitable[None]]

ESCALATION_SENTIMENTS = {"frustrated", "angry"}


class FullListPolicy:
    """Keeps every candidate."""

    def apply(self, candidates: List[SuggestedResponse]) -> List[SuggestedResponse]:
        return list(candidates)


class RandomPrefixPolicy:
    """
    Keeps a prefix of the candidates whose length is drawn uniformly from
    {min_size..max_size}, capped to the number of candidates.
    """

    def __init__(self, rng: Optional[random.Random] = None, min_size: int = 3, max_size: int = 5):
        if min_size < 1 or max_size < min_size:
            raise ValueError(f"Invalid prefix bounds: {min_size}..{max_size}")
        self.rng = rng or random.Random()
        self.min_size = min_size
        self.max_size = max_size

    def apply(self, candidates: List[SuggestedResponse]) -> List[SuggestedResponse]:
        size = self.rng.randint(self.min_size, self.max_size)
        return list(candidates[:size])


def build_prefix_policy(name: str, seed: Optional[int] = None):
    if name == "full":
        return FullListPolicy()
    if name == "random":
        return RandomPrefixPolicy(rng=random.Random(seed))
    raise ValueError(f"Unknown suggestion prefix policy: {name!r}")


class SuggestionGenerator:
    """
    Heuristic stand-in for a model call. Produces tone-labelled reply
    candidates from the ticket's sentiment and tier after a simulated delay.
    """

    def __init__(self, delay: Optional[float] = None, sleep: Sleep = asyncio.sleep, policy=None):
        self.delay = settings.SUGGESTION_DELAY_SECONDS if delay is None else delay
        self.sleep = sleep
        self.policy = policy or FullListPolicy()

    def candidates(self, ticket: Ticket) -> List[SuggestedResponse]:
        """
        The untruncated candidate list for a ticket. Deterministic.
        """
        name = ticket.customer_name
        if ticket.sentiment == "positive":
            return [
                SuggestedResponse(tone="appreciative", text=f"That's great to hear, {name}! We're thrilled you like it."),
                SuggestedResponse(tone="engaging", text=f"Awesome, {name}! Any specific part you found most helpful? We love feedback!"),
            ]

        candidates = [
            SuggestedResponse(
                tone="empathetic",
                text=f"Sorry to hear about the issue, {name}. Let's try to resolve this. Could you try clearing your browser cache and cookies first?",
            ),
            SuggestedResponse(
                tone="efficient",
                text=f"{name}, please attempt to reproduce the error in an incognito window. This will help rule out extension conflicts.",
            ),
            SuggestedResponse(
                tone="friendly",
                text=f"Hey {name}! No worries, we'll get this sorted. Sometimes a simple device restart can do wonders. Worth a shot!",
            ),
        ]
        if ticket.tier > 0 or ticket.sentiment in ESCALATION_SENTIMENTS:
            candidates.append(
                SuggestedResponse(
                    tone="direct",
                    text=f"For a Tier {ticket.tier} issue like this, {name}, I can escalate this to our specialist team if basic steps don't work.",
                )
            )
        return candidates

    async def suggest(self, ticket: Ticket) -> List[SuggestedResponse]:
        logger.info(f"Fetching suggestions for {ticket.customer_name} (ticket {ticket.id})")
        await self.sleep(self.delay)

        candidates = self.candidates(ticket)
        # The two positive-sentiment replies are always offered together
        if ticket.sentiment == "positive":
            return candidates
        return self.policy.apply(candidates)
