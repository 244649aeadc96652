"""Pytest unit test fixtures."""

import pytest

from immo_assistant.pipeline.orchestrator import ChatOrchestrator
from immo_assistant.planner.simple import RuleBasedPlanner


@pytest.fixture()
def planner():
    return RuleBasedPlanner()


@pytest.fixture()
def orchestrator(fake_llm, fake_resolver):
    return ChatOrchestrator(fake_llm, fake_resolver)
