"""
Unit tests for country normalization and multi-country grouping.
"""

from collections import namedtuple

import pytest

from app.domain.workflow.countries import (
    clean_country_name,
    country_key,
    group_countries_by_student,
    normalize_country,
    parse_target_countries,
    same_country,
    students_with_multiple_countries,
)


Profile = namedtuple("Profile", ["student_id", "country"])


class TestNormalization:
    @pytest.mark.parametrize("value", ["U.K.", "UK", "United Kingdom", "uk", "U.K"])
    def test_uk_aliases(self, value):
        assert normalize_country(value) == "United Kingdom"

    @pytest.mark.parametrize("value", ["USA", "U.S.A.", "US", "United States of America"])
    def test_us_aliases(self, value):
        assert normalize_country(value) == "United States"

    def test_dubai_maps_to_uae(self):
        assert normalize_country("Dubai") == "United Arab Emirates"

    def test_bracket_contamination(self):
        assert clean_country_name('["Canada"]') == "Canada"
        assert normalize_country('["germany"]') == "Germany"

    @pytest.mark.parametrize("value", ["U.K.", "new zealand", "NEW ZEALAND", "Côte d'Ivoire"])
    def test_idempotent(self, value):
        once = normalize_country(value)
        assert normalize_country(once) == once

    def test_unknown_single_case_is_capitalized(self):
        assert normalize_country("new zealand") == "New Zealand"

    @pytest.mark.parametrize("value", ["New zealand", "new Zealand", "NEW zealand"])
    def test_unknown_mixed_case_collapses(self, value):
        assert normalize_country(value) == "New Zealand"
        assert normalize_country(value) == normalize_country("New Zealand")

    def test_joining_words_and_apostrophes(self):
        assert normalize_country("BOSNIA AND HERZEGOVINA") == "Bosnia and Herzegovina"
        assert normalize_country("côte D'IVOIRE") == "Côte d'Ivoire"
        assert normalize_country("guinea-BISSAU") == "Guinea-Bissau"

    def test_blank(self):
        assert normalize_country(None) == ""
        assert normalize_country('[""]') == ""
        assert country_key("  ") is None

    def test_keys(self):
        assert country_key("United Kingdom") == "uk"
        assert country_key("america") == "usa"
        assert country_key("Malta") == "malta"

    def test_same_country(self):
        assert same_country("UK", "United Kingdom")
        assert not same_country("UK", "USA")
        assert not same_country(None, None)


class TestTargetCountries:
    def test_json_list(self):
        assert parse_target_countries('["UK", "Canada", "U.K."]') == [
            "United Kingdom",
            "Canada",
        ]

    def test_comma_separated(self):
        assert parse_target_countries("usa, germany") == ["United States", "Germany"]

    def test_iterable(self):
        assert parse_target_countries(["Dubai", "UAE"]) == ["United Arab Emirates"]

    def test_malformed_json_falls_back_to_commas(self):
        assert parse_target_countries('[UK, Canada') == ["United Kingdom", "Canada"]

    def test_none(self):
        assert parse_target_countries(None) == []


class TestGrouping:
    def test_aliases_merge(self):
        profiles = [
            Profile("s1", "UK"),
            Profile("s1", "United Kingdom"),
            Profile("s2", "Canada"),
            Profile("s2", "USA"),
            Profile("s3", "Malta"),
        ]

        grouped = group_countries_by_student(profiles)

        assert grouped == {
            "s1": ["United Kingdom"],
            "s2": ["Canada", "United States"],
            "s3": ["Malta"],
        }

    def test_multiple_only(self):
        profiles = [
            Profile("s1", "U.K."),
            Profile("s1", "uk"),
            Profile("s2", "Canada"),
            Profile("s2", '["Ireland"]'),
        ]

        assert students_with_multiple_countries(profiles) == {
            "s2": ["Canada", "Ireland"],
        }
