from snapchef.schemas import UnitSystem
from snapchef.services.prompts import UNIT_SYSTEMS, build_recipe_prompt, unit_system_rules


def test_metric_rules():
    rules = unit_system_rules(UnitSystem.METRIC)

    assert "METRIC" in rules
    assert "grams" in rules
    assert "°C" in rules
    assert '"250g flour"' in rules
    assert "°F" not in rules


def test_imperial_rules():
    rules = unit_system_rules(UnitSystem.IMPERIAL)

    assert "IMPERIAL" in rules
    assert "cups" in rules
    assert "°F" in rules
    assert '"350°F"' in rules


def test_unrecognized_system_uses_imperial_rules():
    assert unit_system_rules("kelvin") == unit_system_rules(UnitSystem.IMPERIAL)


def test_prompt_demands_bare_json_with_recipe_fields():
    prompt = build_recipe_prompt(UnitSystem.METRIC)

    for field in ('"title"', '"description"', '"ingredients"', '"name"', '"quantity"',
                  '"unit"', '"instructions"', '"cookingTime"', '"servings"'):
        assert field in prompt
    assert "ONLY with a valid JSON object" in prompt
    assert "markdown" in prompt
    assert "reasonable assumptions" in prompt
    assert unit_system_rules(UnitSystem.METRIC) in prompt


def test_unit_system_catalog():
    assert [u.system for u in UNIT_SYSTEMS] == [UnitSystem.METRIC, UnitSystem.IMPERIAL]
