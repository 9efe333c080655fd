"""
Unit tests for declarative record filters.
"""

from ema_mcp.tools.ema_utils import FieldFilter, apply_filters
from ema_mcp.tools.ema_utils.filters import EQUALS, EXACT, safety_flag, yes_flag


RECORDS = [
    {"name": "Alpha", "area": "Oncology", "alt_area": "", "flag": "Yes"},
    {"name": "Beta", "area": None, "alt_area": "Lung cancer", "flag": "No"},
    {"name": "Gamma", "area": "Cardiology", "flag": "yes"},
    "not a record",
]


class TestApplyFilters:

    def test_absent_parameters_keep_everything(self):
        filters = (FieldFilter("area", ("area",)),)
        assert apply_filters(RECORDS, filters, {}) == RECORDS

    def test_any_field_may_match(self):
        filters = (FieldFilter("area", ("area", "alt_area")),)
        results = apply_filters(RECORDS, filters, {"area": "CANCER"})
        assert [r["name"] for r in results] == ["Beta"]

    def test_substring_is_case_insensitive(self):
        filters = (FieldFilter("area", ("area",)),)
        results = apply_filters(RECORDS, filters, {"area": "olog"})
        assert [r["name"] for r in results] == ["Alpha", "Gamma"]

    def test_equals_compares_whole_value(self):
        filters = (FieldFilter("name", ("name",), EQUALS),)
        assert apply_filters(RECORDS, filters, {"name": "alp"}) == []
        assert [r["name"] for r in apply_filters(RECORDS, filters, {"name": "ALPHA"})] == ["Alpha"]

    def test_exact_keeps_case(self):
        filters = (FieldFilter("flag", ("flag",), EXACT, yes_flag),)
        assert [r["name"] for r in apply_filters(RECORDS, filters, {"flag": True})] == ["Alpha"]

        names = (FieldFilter("name", ("name",), EXACT),)
        assert apply_filters(RECORDS, names, {"name": "alpha"}) == []
        assert [r["name"] for r in apply_filters(RECORDS, names, {"name": " Alpha"})] == ["Alpha"]

    def test_filters_combine(self):
        filters = (
            FieldFilter("area", ("area",)),
            FieldFilter("flag", ("flag",), EQUALS, yes_flag),
        )
        results = apply_filters(RECORDS, filters, {"area": "o", "flag": True})
        assert [r["name"] for r in results] == ["Alpha", "Gamma"]

    def test_false_yes_flag_is_a_no_op(self):
        filters = (FieldFilter("flag", ("flag",), EQUALS, yes_flag),)
        assert apply_filters(RECORDS, filters, {"flag": False}) == RECORDS


class TestSafetyFlag:

    def test_true_accepts_localized_affirmative(self):
        assert safety_flag(True) == ("Sì", "Yes")

    def test_false_matches_no(self):
        assert safety_flag(False) == ("No",)
