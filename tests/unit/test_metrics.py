from immo_assistant.core.errors import UpstreamTimeoutError
from immo_assistant.core.metrics import MetricsCollector, intent_label
from immo_assistant.planner.types import AssistantAction


def test_turns_are_counted_per_action_and_intent():
    metrics = MetricsCollector()

    metrics.record_turn(AssistantAction.ASK_CITY, True)
    metrics.record_turn(AssistantAction.SIMPLE_CHAT, False)
    metrics.record_turn(AssistantAction.SIMPLE_CHAT, None)

    snapshot = metrics.snapshot()
    assert snapshot.total_requests == 3
    assert snapshot.actions == {"ask_city": 1, "simple_chat": 2}
    assert snapshot.intents == {"real_estate": 1, "other": 1, "unclassified": 1}
    assert snapshot.failures == {}


def test_failures_count_as_error_turns():
    metrics = MetricsCollector()

    metrics.record_failure(UpstreamTimeoutError("slow"))
    metrics.record_failure(RuntimeError("boom"))

    payload = metrics.snapshot().as_dict()
    assert payload["total_requests"] == 2
    assert payload["actions"] == {"error": 2}
    assert payload["failures"] == {"UpstreamTimeoutError": 1, "RuntimeError": 1}


def test_intent_label():
    assert intent_label(True) == "real_estate"
    assert intent_label(False) == "other"
    assert intent_label(None) == "unclassified"
