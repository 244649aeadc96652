from immo_assistant.services.market import build_market_reference, locality_slug


def test_paris_arrondissement_locator():
    reference = build_market_reference("Paris", "75011", 11)

    assert reference.locator_url.endswith("paris-11eme-arrondissement-75011/")
    assert reference.locator_url == (
        "https://www.meilleursagents.com/prix-immobilier/paris-11eme-arrondissement-75011/"
    )


def test_city_without_arrondissement_locator():
    reference = build_market_reference("Bordeaux", "33000", None)

    assert reference.locator_url.endswith("bordeaux-33000/")
    assert reference.arrondissement is None


def test_arrondissement_ignored_outside_arrondissement_cities():
    assert locality_slug("Bordeaux", "33000", 2) == "bordeaux-33000"


def test_slug_strips_accents_and_punctuation():
    assert locality_slug("Saint-Étienne", "42000") == "saint-etienne-42000"
    assert locality_slug("L'Haÿ-les-Roses", "94240") == "l-hay-les-roses-94240"


def test_custom_base_url_gets_trailing_slash():
    reference = build_market_reference("Lyon", "69003", 3, base_url="https://example.test/prix")

    assert reference.locator_url == "https://example.test/prix/lyon-3eme-arrondissement-69003/"
