# Copyright 2026 EFBuilder Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the entity model, type table and naming helpers."""

import pytest

from efbuilder.model import (
    EntityDefinition,
    PropertyDefinition,
    index_by_name,
    is_implicit_key,
    is_text_type,
    map_type_name,
    pluralize,
    strip_id_suffix,
)

# ###############
# Entities
# ###############


class TestEntityDefinition:
    def test_defaults(self) -> None:
        entity = EntityDefinition(name="Clinic")
        assert entity.base_class is None
        assert entity.properties == []
        assert entity.comments is None

    def test_properties_are_not_shared(self) -> None:
        a = EntityDefinition(name="A")
        b = EntityDefinition(name="B")
        a.properties.append(PropertyDefinition(name="X"))
        assert b.properties == []

    def test_references(self) -> None:
        entity = EntityDefinition(
            name="Patient",
            properties=[
                PropertyDefinition(name="Name", clr_type="string"),
                PropertyDefinition(name="ClinicId", clr_type="int", referenced_entity="Clinic"),
            ],
        )
        assert [p.name for p in entity.references] == ["ClinicId"]

    def test_is_reference(self) -> None:
        assert PropertyDefinition(name="ClinicId", referenced_entity="Clinic").is_reference
        assert not PropertyDefinition(name="Name").is_reference
        assert not PropertyDefinition(name="Name", referenced_entity="").is_reference


class TestIndexByName:
    def test_keys_are_lower_case(self) -> None:
        index = index_by_name([EntityDefinition(name="AppSpecies")])
        assert list(index) == ["appspecies"]

    def test_first_definition_wins(self) -> None:
        first = EntityDefinition(name="Clinic", base_class="A")
        second = EntityDefinition(name="CLINIC", base_class="B")
        assert index_by_name([first, second])["clinic"] is first


# ###############
# Types
# ###############


class TestTypes:
    def test_map_known_types(self) -> None:
        assert map_type_name("string") == "string"
        assert map_type_name("Bool") == "bool"
        assert map_type_name("dateonly") == "DateOnly"

    def test_unknown_types_pass_through(self) -> None:
        assert map_type_name("Money") == "Money"

    def test_is_text_type(self) -> None:
        assert is_text_type("string")
        assert not is_text_type("int")
        assert not is_text_type(None)


# ###############
# Naming
# ###############


class TestNaming:
    @pytest.mark.parametrize(
        ("name", "plural"),
        [
            ("Breed", "Breeds"),
            ("Species", "Species"),
            ("Status", "Status"),
            ("CLASS", "CLASS"),
            ("Category", "Categorys"),
        ],
    )
    def test_pluralize(self, name: str, plural: str) -> None:
        assert pluralize(name) == plural

    def test_is_implicit_key(self) -> None:
        assert is_implicit_key("ClinicId")
        assert not is_implicit_key("Id")
        assert not is_implicit_key("Clinicid")
        assert not is_implicit_key("Name")

    def test_strip_id_suffix(self) -> None:
        assert strip_id_suffix("OwnerClientId") == "OwnerClient"
        assert strip_id_suffix("ParentID") == "Parent"
        assert strip_id_suffix("Id") == "Id"
        assert strip_id_suffix("Name") == "Name"
