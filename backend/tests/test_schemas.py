"""
Schema Tests
============

Tests for the business profile boundary and rule definition parsing.
"""

import pytest
from pydantic import ValidationError

from regmatch.core.enums import ConditionMode, Jurisdiction
from regmatch.models.schemas.business import BusinessInput
from regmatch.models.schemas.rule import (
    CatalogItem,
    CustomPredicate,
    FieldPredicate,
    RuleDefinition,
)


class TestBusinessInput:
    """Tests for business profile validation."""

    def test_state_is_required(self):
        with pytest.raises(ValidationError):
            BusinessInput.model_validate({"city": "Austin"})

    def test_state_must_be_two_letters(self):
        with pytest.raises(ValidationError):
            BusinessInput.model_validate({"state": "Cal"})
        with pytest.raises(ValidationError):
            BusinessInput.model_validate({"state": "1A"})

    def test_state_is_uppercased(self):
        assert BusinessInput.model_validate({"state": "ny"}).state == "NY"

    def test_booleans_default_to_false(self):
        business = BusinessInput.model_validate({"state": "TX"})

        assert business.has_employees is False
        assert business.handles_phi is False
        assert business.outdoor_work is False

    def test_accepts_wire_names_and_attribute_names(self):
        by_alias = BusinessInput.model_validate(
            {"state": "CA", "revenueUSD": 10, "handlesPHI": True, "publicFacing": True}
        )
        by_name = BusinessInput(state="CA", revenue_usd=10, handles_phi=True, public_facing=True)

        assert by_alias == by_name

    def test_negative_counts_are_rejected(self):
        with pytest.raises(ValidationError):
            BusinessInput.model_validate({"state": "CA", "employees": -1})
        with pytest.raises(ValidationError):
            BusinessInput.model_validate({"state": "CA", "revenueUSD": -5})

    def test_blank_strings_are_not_provided(self):
        business = BusinessInput.model_validate({"state": "CA", "city": "  ", "zip": ""})

        assert business.city is None
        assert business.zip is None

    def test_padding_is_stripped_before_length_checks(self):
        business = BusinessInput.model_validate(
            {"state": "CA", "naics": " 722511 ", "zip": "  94103  "}
        )

        assert business.naics == "722511"
        assert business.zip == "94103"

    def test_overlong_naics_is_rejected(self):
        with pytest.raises(ValidationError):
            BusinessInput.model_validate({"state": "CA", "naics": "7225111"})

    def test_is_immutable(self):
        business = BusinessInput.model_validate({"state": "CA"})

        with pytest.raises(ValidationError):
            business.state = "NY"

    def test_dumps_wire_names(self):
        business = BusinessInput.model_validate({"state": "CA", "revenueUSD": 5, "collectsPII": True})

        dumped = business.model_dump(by_alias=True)

        assert dumped["revenueUSD"] == 5
        assert dumped["collectsPII"] is True
        assert dumped["hasEmployees"] is False


class TestRuleDefinition:
    """Tests for parsing catalog-shaped rule definitions."""

    def test_predicates_parse_by_kind(self):
        rule = RuleDefinition.model_validate(
            {
                "jurisdiction": "state",
                "conditions": {
                    "mode": "any",
                    "predicates": [
                        {"custom": "hasEmployees"},
                        {"field": "revenueUSD", "op": "gte", "value": 25000000},
                    ],
                },
            }
        )

        assert rule.jurisdiction == Jurisdiction.STATE
        assert rule.conditions.mode == ConditionMode.ANY
        assert isinstance(rule.conditions.predicates[0], CustomPredicate)
        assert isinstance(rule.conditions.predicates[1], FieldPredicate)
        assert rule.conditions.predicates[1].value == 25000000

    def test_scope_uses_catalog_keys(self):
        rule = RuleDefinition.model_validate(
            {
                "jurisdiction": "local",
                "scope": {
                    "geography": {"country": "us", "states": ["ca"], "cities": ["San Francisco"]},
                    "industries": [{"naicsPrefix": "722", "label": "Food Services"}],
                    "minEmployees": 1,
                },
                "conditions": {"mode": "all", "predicates": []},
            }
        )

        assert rule.scope.geography.country == "US"
        assert rule.scope.geography.states == ["CA"]
        assert rule.scope.industries[0].naics_prefix == "722"
        assert rule.scope.min_employees == 1

    def test_unknown_names_survive_parsing(self):
        rule = RuleDefinition.model_validate(
            {
                "jurisdiction": "federal",
                "conditions": {
                    "mode": "all",
                    "predicates": [{"custom": "isBank"}, {"field": "x", "op": "between"}],
                },
            }
        )

        assert rule.conditions.predicates[0].custom == "isBank"
        assert rule.conditions.predicates[1].op == "between"

    def test_invalid_mode_is_rejected(self):
        with pytest.raises(ValidationError):
            RuleDefinition.model_validate(
                {"jurisdiction": "federal", "conditions": {"mode": "most", "predicates": []}}
            )

    def test_conditions_are_required(self):
        with pytest.raises(ValidationError):
            RuleDefinition.model_validate({"jurisdiction": "federal"})


class TestCatalogItem:
    """Tests for catalog entries."""

    def test_bundled_catalog_parses(self, catalog_data):
        items = [CatalogItem.model_validate(entry) for entry in catalog_data]

        assert len(items) == len(catalog_data)
        assert {item.jurisdiction for item in items} == set(Jurisdiction)

    def test_to_definition_keeps_title(self, catalog_data):
        item = CatalogItem.model_validate(catalog_data[0])

        definition = item.to_definition()

        assert definition.title == item.title
        assert definition.conditions == item.conditions
