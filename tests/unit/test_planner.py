from immo_assistant.planner.types import AssistantAction, ConversationState, ExtractedSlots


def test_planner_asks_for_city_first(planner):
    decision = planner.decide(ExtractedSlots(postal_code="33000"))

    assert decision.state is ConversationState.NEED_CITY
    assert decision.action is AssistantAction.ASK_CITY
    assert decision.missing_slot == "city"


def test_planner_requires_arrondissement_for_paris(planner):
    decision = planner.decide(ExtractedSlots(city="Paris", postal_code="75011"))

    assert decision.state is ConversationState.NEED_ARRONDISSEMENT
    assert decision.action.value == "ask_arrondissement"
    assert decision.requires_arrondissement is True


def test_planner_requests_postal_code_once_arrondissement_known(planner):
    decision = planner.decide(ExtractedSlots(city="Lyon", arrondissement=3))

    assert decision.state is ConversationState.NEED_POSTAL_CODE
    assert decision.action.value == "ask_postal_code"


def test_planner_ready_without_arrondissement_outside_big_three(planner):
    decision = planner.decide(ExtractedSlots(city="Bordeaux", postal_code="33000", arrondissement=2))

    assert decision.state is ConversationState.READY
    assert decision.action.value == "city_snapshot"
    assert decision.slots.arrondissement is None


def test_planner_is_pure(planner):
    slots = ExtractedSlots(city="Marseille", postal_code="13008", arrondissement=8)

    first = planner.decide(slots)
    second = planner.decide(slots)

    assert first == second
    assert first.state is ConversationState.READY
    assert slots.arrondissement == 8


def test_planner_extracts_slots_from_context(planner):
    slots = planner.extract("Je veux investir à Paris 11e, code 75011")

    assert slots == ExtractedSlots(city="Paris", postal_code="75011", arrondissement=11)


def test_later_correction_reroutes_the_dialogue(planner):
    first = planner.decide(planner.extract("Je veux investir à Lyon"))
    corrected = planner.decide(planner.extract("Je veux investir à Lyon non pardon, à Bordeaux 33000"))

    assert first.state is ConversationState.NEED_ARRONDISSEMENT
    assert corrected.state is ConversationState.READY
    assert corrected.slots.city == "Bordeaux"


def test_corrected_city_drops_slots_of_the_previous_city(planner):
    slots = planner.extract_from_turns(
        ["Je veux investir à Paris 11e 75011", "Finalement plutôt Bordeaux 33000"]
    )

    assert slots == ExtractedSlots(city="Bordeaux", postal_code="33000", arrondissement=None)


def test_corrected_city_without_postal_code_needs_a_new_one(planner):
    decision = planner.decide(
        planner.extract_from_turns(["Je veux investir à Lyon 3e 69003", "Non, plutôt à Nantes"])
    )

    assert decision.slots.city == "Nantes"
    assert decision.slots.postal_code is None
    assert decision.state is ConversationState.NEED_POSTAL_CODE


def test_slots_given_after_the_city_are_kept(planner):
    slots = planner.extract_from_turns(["Je veux investir", "à Paris", "le 11e", "75011"])

    assert slots == ExtractedSlots(city="Paris", postal_code="75011", arrondissement=11)
