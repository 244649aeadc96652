"""Per-request orchestration: intent gate, slot planning, prompting, normalization."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Sequence

from immo_assistant.memory.context import DEFAULT_MAX_TURNS, build_user_only_context, user_turns
from immo_assistant.memory.models import Message
from immo_assistant.pipeline import prompts
from immo_assistant.pipeline.postprocess import format_reply, structured_fields
from immo_assistant.planner.intent import GROUNDING_MAX_TURNS, IntentClassifier
from immo_assistant.planner.simple import RuleBasedPlanner
from immo_assistant.planner.types import AssistantAction, ConversationState, PlannerDecision
from immo_assistant.services.communes import PostalCodeResolver
from immo_assistant.services.llm import GenerativeClient
from immo_assistant.services.market import DEFAULT_BASE_URL, build_market_reference

SLOT_KEYS = ("city", "postal_code", "arrondissement", "source_url")


@dataclass(slots=True)
class ChatRequest:
    """Inputs of one chat call; history is read, never modified."""

    message: str
    history: Sequence[Message] = field(default_factory=list)
    use_instructions: bool = True


@dataclass(slots=True)
class AssistantOutcome:
    """Reply returned to the caller, tagged with the action taken."""

    reply: str
    action: AssistantAction
    data: dict[str, Any] | None = None
    real_estate_intent: bool | None = None

    def as_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"reply": self.reply, "action": self.action.value}
        if self.data is not None:
            payload["data"] = self.data
        return payload


class ChatOrchestrator:
    """Drives the generative service through the market-analysis dialogue.

    Calls are awaited strictly in sequence: the postal code lookup, when
    needed, decides which prompt is sent next.
    """

    def __init__(
        self,
        llm: GenerativeClient,
        resolver: PostalCodeResolver,
        *,
        planner: RuleBasedPlanner | None = None,
        classifier: IntentClassifier | None = None,
        market_base_url: str = DEFAULT_BASE_URL,
        history_window: int = DEFAULT_MAX_TURNS,
        grounding_window: int = GROUNDING_MAX_TURNS,
    ) -> None:
        self.llm = llm
        self.resolver = resolver
        self.planner = planner or RuleBasedPlanner()
        self.classifier = classifier or IntentClassifier()
        self.market_base_url = market_base_url
        self.history_window = history_window
        self.grounding_window = grounding_window
        self._logger = logging.getLogger("immo.pipeline")

    async def handle(self, request: ChatRequest) -> AssistantOutcome:
        if not request.use_instructions:
            result = await self.llm.generate(request.message, use_internet=False)
            return AssistantOutcome(reply=format_reply(result), action=AssistantAction.SIMPLE_CHAT)

        context = build_user_only_context(request.history, request.message, self.history_window)
        if not self.classifier.is_real_estate(context):
            result = await self.llm.generate(prompts.off_topic_prompt(request.message), use_internet=False)
            return AssistantOutcome(
                reply=format_reply(result),
                action=AssistantAction.SIMPLE_CHAT,
                real_estate_intent=False,
            )

        turns = user_turns(request.history, request.message, self.history_window)
        decision = self.planner.decide(self.planner.extract_from_turns(turns))
        slots = decision.slots
        self._logger.info(
            "Planner state %s, missing %s (city=%s, arrondissement=%s, postal_code=%s)",
            decision.state.value,
            decision.missing_slot or "nothing",
            slots.city,
            slots.arrondissement,
            slots.postal_code,
        )

        if decision.state is ConversationState.NEED_CITY:
            return await self._clarify(decision, prompts.ask_city_prompt(request.message), use_internet=True)

        if decision.state is ConversationState.NEED_ARRONDISSEMENT:
            prompt = prompts.ask_arrondissement_prompt(request.message, slots.city)
            return await self._clarify(decision, prompt)

        if decision.state is ConversationState.NEED_POSTAL_CODE:
            resolved = await self.resolver.resolve(slots.city)
            decision = self.planner.decide(slots.with_postal_code(resolved))
            if decision.state is ConversationState.NEED_POSTAL_CODE:
                prompt = prompts.ask_postal_code_prompt(
                    request.message, decision.slots.city, decision.slots.arrondissement
                )
                return await self._clarify(decision, prompt)

        return await self._analyse(request, decision)

    async def _clarify(
        self,
        decision: PlannerDecision,
        prompt: str,
        *,
        use_internet: bool = False,
    ) -> AssistantOutcome:
        result = await self.llm.generate(prompt, use_internet=use_internet)
        return AssistantOutcome(reply=format_reply(result), action=decision.action, real_estate_intent=True)

    async def _analyse(self, request: ChatRequest, decision: PlannerDecision) -> AssistantOutcome:
        slots = decision.slots
        reference = build_market_reference(
            slots.city,
            slots.postal_code,
            slots.arrondissement,
            base_url=self.market_base_url,
            vocabulary=self.planner.vocabulary,
        )
        use_internet = self.classifier.should_use_internet(
            request.message, request.history, self.grounding_window
        )
        result = await self.llm.generate(
            prompts.market_analysis_prompt(request.message, reference),
            use_internet=use_internet,
            schema=prompts.MARKET_SNAPSHOT_SCHEMA,
        )

        extras = {key: value for key, value in structured_fields(result).items() if key not in SLOT_KEYS}
        data = {
            "city": reference.city,
            "postal_code": reference.postal_code,
            "arrondissement": reference.arrondissement,
            "source_url": reference.locator_url,
            **extras,
        }
        return AssistantOutcome(
            reply=format_reply(result),
            action=AssistantAction.CITY_SNAPSHOT,
            data=data,
            real_estate_intent=True,
        )
