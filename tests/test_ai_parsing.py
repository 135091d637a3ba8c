"""Tests for extracting structured data from AI replies."""
from typing import List

from schemas.diet_schema import GeneratedDietPlan
from services import ai_parsing


def test_object_inside_prose_and_fences():
    """Test that a JSON object wrapped in prose and code fences is extracted."""
    text = 'Sure! Here is your plan:\n```json\n{"meals": [{"name": "Oats", "calories": 350, "foods": []}]}\n```'
    plan = ai_parsing.parse_object(text, GeneratedDietPlan, None)
    assert plan.meals[0].name == "Oats"
    assert plan.meals[0].calories == 350


def test_invalid_json_returns_fallback():
    """Test that malformed JSON yields the fallback."""
    assert ai_parsing.extract_json_object("{not json}") is None
    assert ai_parsing.parse_object("no braces here", GeneratedDietPlan, "fallback") == "fallback"


def test_schema_mismatch_returns_fallback():
    """Test that JSON failing schema validation yields the fallback."""
    assert ai_parsing.parse_object('{"meals": []}', GeneratedDietPlan, "fallback") == "fallback"
    assert ai_parsing.validate({"meals": "oops"}, GeneratedDietPlan) is None


def test_string_list_prefers_json_array():
    """Test that a JSON array of strings is used when present."""
    text = 'Advice:\n["Drink water", "Sleep more"]'
    assert ai_parsing.parse_string_list(text, ["x"]) == ["Drink water", "Sleep more"]


def test_string_list_falls_back_to_bullets_then_static():
    """Test bullet-line extraction and the static fallback."""
    text = "Here are tips:\n- Walk daily\n• Eat greens\nThanks"
    assert ai_parsing.parse_string_list(text, ["x"]) == ["Walk daily", "Eat greens"]
    assert ai_parsing.parse_string_list("nothing useful", ["x", "y"]) == ["x", "y"]
    assert ai_parsing.parse_string_list("", ["x"]) == ["x"]


def test_validate_generic_types():
    """Test validation against generic types like List[str]."""
    assert ai_parsing.validate(["a", "b"], List[str]) == ["a", "b"]
    assert ai_parsing.validate([1, {"a": 2}], List[str]) is None
    assert ai_parsing.validate(None, List[str]) is None
