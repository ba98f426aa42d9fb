"""Tests for the custom keyword predicates."""

import pytest

from connector_linter.core.predicates import (
    ALLOWED_CATEGORIES,
    ASCII_ENGLISH_CHARSET,
    CAPITALIZED_START,
    CATEGORY_MEMBERSHIP,
    ENUM_MEMBERSHIP,
    FORBIDDEN_WORDS,
    OPERATION_ID_CASING,
    PREDICATES,
    SENTENCE_QUALITY,
    iter_keyword_uses,
    keyword_validators,
)

SENTENCE = {"minWords": 3, "endWithPunctuation": True}


class TestSentenceQuality:
    def test_passes_long_punctuated_sentence(self):
        assert (
            SENTENCE_QUALITY.evaluate("Returns the weather today.", SENTENCE)
            is None
        )

    def test_fails_without_punctuation(self):
        message = SENTENCE_QUALITY.evaluate("Returns the weather", SENTENCE)

        assert message == (
            "Must be a descriptive sentence with at least 3 words "
            "and end in punctuation."
        )

    def test_fails_too_few_words(self):
        assert SENTENCE_QUALITY.evaluate("Weather.", SENTENCE) is not None

    def test_punctuation_not_required(self):
        parameter = {"minWords": 2, "endWithPunctuation": False}

        assert SENTENCE_QUALITY.evaluate("Get weather", parameter) is None
        assert SENTENCE_QUALITY.evaluate("Weather", parameter) == (
            "Must be a descriptive sentence with at least 2 words."
        )

    def test_bad_parameter_reported(self):
        assert SENTENCE_QUALITY.parameter_errors({"minWords": 3})
        assert SENTENCE_QUALITY.parameter_errors(SENTENCE) == []


class TestCapitalizedStart:
    @pytest.mark.parametrize("value", ["Contoso", "A", "Z-order"])
    def test_passes(self, value):
        assert CAPITALIZED_START.evaluate(value, True) is None

    @pytest.mark.parametrize("value", ["contoso", "", "1Contoso", " Contoso"])
    def test_fails(self, value):
        assert CAPITALIZED_START.evaluate(value, True) == (
            "String must start with a capital letter."
        )

    def test_false_parameter_disables_check(self):
        assert CAPITALIZED_START.evaluate("contoso", False) is None


class TestForbiddenWords:
    def test_fails_on_substring(self):
        message = FORBIDDEN_WORDS.evaluate(
            "Contoso API Connector", ["API", "Connector"]
        )

        assert message == (
            "The string must not include any of the following words: "
            "API, Connector"
        )

    def test_passes_without_forbidden_word(self):
        assert FORBIDDEN_WORDS.evaluate("Contoso Weather", ["API"]) is None


class TestAsciiEnglishCharset:
    @pytest.mark.parametrize(
        "value", ["Contoso Weather", "Get (current) weather, now!", "a/b-c"]
    )
    def test_passes(self, value):
        assert ASCII_ENGLISH_CHARSET.evaluate(value, True) is None

    @pytest.mark.parametrize("value", ["Café", "天气", "", "tab\there"])
    def test_fails(self, value):
        assert ASCII_ENGLISH_CHARSET.evaluate(value, True) == (
            "The string must be in English"
        )


class TestEnumMembership:
    def test_passes_member(self):
        assert ENUM_MEMBERSHIP.evaluate("actions", {"enum": ["actions"]}) is None

    def test_fails_non_member(self):
        assert ENUM_MEMBERSHIP.evaluate(
            "sideways", {"enum": ["actions", "triggers"]}
        ) == "The value must be one of the following: actions, triggers"

    def test_empty_enum_is_a_bad_parameter(self):
        assert ENUM_MEMBERSHIP.parameter_errors({"enum": []})


class TestOperationIdCasing:
    @pytest.mark.parametrize("value", ["GetWeather", "ListItems2", "Send"])
    def test_passes(self, value):
        assert OPERATION_ID_CASING.evaluate(value, True) is None

    @pytest.mark.parametrize(
        "value", ["getWeather", "Get_Weather", "Get-Weather", "GET"]
    )
    def test_fails(self, value):
        assert OPERATION_ID_CASING.evaluate(value, True) == (
            "OperationId must be in PascalCase without hyphens or underscores"
        )


class TestCategoryMembership:
    def _metadata(self, categories):
        return [
            {"propertyName": "Website", "propertyValue": "https://contoso.com"},
            {"propertyName": "Categories", "propertyValue": categories},
        ]

    def test_passes_allowed_categories(self):
        metadata = self._metadata("AI; Productivity")

        assert CATEGORY_MEMBERSHIP.evaluate(metadata, True) is None

    def test_fails_unknown_category(self):
        message = CATEGORY_MEMBERSHIP.evaluate(
            self._metadata("Data;Gaming"), True
        )

        assert message.startswith("Categories must be one of the following: ")
        assert all(name in message for name in ALLOWED_CATEGORIES)

    def test_passes_without_categories_entry(self):
        metadata = [{"propertyName": "Website", "propertyValue": "x"}]

        assert CATEGORY_MEMBERSHIP.evaluate(metadata, True) is None

    def test_only_first_categories_entry_checked(self):
        metadata = [
            *self._metadata("Data"),
            {"propertyName": "Categories", "propertyValue": "Gaming"},
        ]

        assert CATEGORY_MEMBERSHIP.evaluate(metadata, True) is None


def test_wrong_type_passes():
    assert CAPITALIZED_START.evaluate(42, True) is None
    assert CATEGORY_MEMBERSHIP.evaluate("Data", True) is None


def test_catalog_contains_every_keyword():
    assert set(PREDICATES) == {
        "validSentenceWithPunctuation",
        "startsWithCapital",
        "forbiddenWords",
        "isEnglish",
        "dynamicEnumCheck",
        "validateOperationId",
        "validateCategories",
    }
    assert set(keyword_validators()) == set(PREDICATES)


class TestIterKeywordUses:
    def test_finds_nested_keywords_with_pointers(self):
        schema = {
            "properties": {
                "title": {"isEnglish": True},
                "items": {"items": {"dynamicEnumCheck": {"enum": ["a"]}}},
            },
            "allOf": [{"startsWithCapital": True}],
        }

        uses = {
            (predicate.keyword, pointer)
            for predicate, _, pointer in iter_keyword_uses(schema)
        }

        assert uses == {
            ("isEnglish", "/properties/title/isEnglish"),
            ("dynamicEnumCheck", "/properties/items/items/dynamicEnumCheck"),
            ("startsWithCapital", "/allOf/0/startsWithCapital"),
        }

    def test_property_named_like_keyword_is_not_a_use(self):
        schema = {
            "properties": {"isEnglish": {"type": "boolean"}},
            "default": {"startsWithCapital": True},
        }

        assert list(iter_keyword_uses(schema)) == []
