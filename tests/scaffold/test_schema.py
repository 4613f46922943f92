# Copyright 2026 EFBuilder Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for scaffolding entity sources from table metadata."""

import pytest

from efbuilder.compiler.build import parse_entities
from efbuilder.scaffold.schema import (
    ColumnInfo,
    ForeignKeyInfo,
    SchemaSourceProvider,
    TableSchema,
    map_sql_type,
    parse_default_value,
    render_table_source,
)

# ###############
# Type mapping
# ###############


class TestTypeMapping:
    @pytest.mark.parametrize(
        ("sql_type", "clr_type"),
        [
            ("nvarchar", "string"),
            ("bigint", "long"),
            ("bit", "bool"),
            ("float", "double"),
            ("real", "float"),
            ("date", "DateOnly"),
            ("datetime2", "DateTime"),
            ("uniqueidentifier", "Guid"),
            ("varbinary", "byte[]"),
            ("NVARCHAR", "string"),
        ],
    )
    def test_known_types(self, sql_type: str, clr_type: str) -> None:
        assert map_sql_type(sql_type) == clr_type

    def test_unknown_type(self) -> None:
        assert map_sql_type("geography") == "object"


# ###############
# Default values
# ###############


class TestParseDefaultValue:
    def test_bit(self) -> None:
        assert parse_default_value("((1))", "bit") == "true"
        assert parse_default_value("((0))", "bit") == "false"

    def test_numeric(self) -> None:
        assert parse_default_value("((42))", "int") == "42"
        assert parse_default_value("((0.5))", "decimal") == "0.5"

    def test_text(self) -> None:
        assert parse_default_value("('open')", "varchar") == '"open"'

    def test_unicode_text(self) -> None:
        assert parse_default_value("(N'open')", "nvarchar") == '"open"'

    def test_date_functions_are_dropped(self) -> None:
        assert parse_default_value("(getdate())", "datetime") is None
        assert parse_default_value("(GETUTCDATE())", "datetime2") is None

    def test_other_types_are_dropped(self) -> None:
        assert parse_default_value("(newid())", "uniqueidentifier") is None

    def test_missing(self) -> None:
        assert parse_default_value(None, "int") is None
        assert parse_default_value("  ", "int") is None


# ###############
# Source rendering
# ###############


def _patient() -> TableSchema:
    return TableSchema(
        name="Patient",
        columns=[
            ColumnInfo("Id", "int", is_identity=True),
            ColumnInfo("ClinicId", "int"),
            ColumnInfo("Number", "int"),
            ColumnInfo("Name", "nvarchar", max_length=50),
            ColumnInfo("Notes", "nvarchar", is_nullable=True, max_length=-1),
            ColumnInfo("IsActive", "bit", default_value="((1))"),
            ColumnInfo("OwnerClientId", "int", is_nullable=True),
            ColumnInfo("VolumeClientId", "int", is_nullable=True),
        ],
        foreign_keys=[
            ForeignKeyInfo("ClinicId", "Clinic"),
            ForeignKeyInfo("OwnerClientId", "Client"),
            ForeignKeyInfo("VolumeClientId", "Client"),
        ],
        primary_keys=["Id"],
        unique_columns=["Number"],
    )


class TestRenderTableSource:
    def test_patient(self) -> None:
        assert render_table_source(_patient()) == (
            "Patient : BaseTable\n"
            "ClinicId Clinic <Patients\n"
            "#Number int\n"
            "Name string(50)\n"
            "Notes string?\n"
            "IsActive bool = true\n"
            "OwnerClientId Client? <OwnerPatients\n"
            "VolumeClientId Client? <VolumePatients\n"
        )

    def test_without_base_class(self) -> None:
        table = TableSchema("Tag", [ColumnInfo("Id", "int"), ColumnInfo("Label", "varchar", max_length=20)], [], ["Id"])
        assert render_table_source(table, base_class=None) == "Tag\nLabel string(20)\n"

    def test_non_standard_primary_key_is_kept(self) -> None:
        table = TableSchema(
            "AspNetUsers",
            [ColumnInfo("UserId", "int", is_identity=True)],
            primary_keys=["UserId"],
            unique_columns=["UserId"],
        )
        assert render_table_source(table) == "AspNetUsers : BaseTable\nUserId int++\n"

    def test_composite_primary_key_keeps_id(self) -> None:
        table = TableSchema("Link", [ColumnInfo("Id", "int"), ColumnInfo("Seq", "int")], primary_keys=["Id", "Seq"])
        assert render_table_source(table) == "Link : BaseTable\nId int\nSeq int\n"

    def test_scaffolded_source_compiles(self) -> None:
        entities, errors = parse_entities([("Patient", render_table_source(_patient()))])
        assert errors == []
        patient = entities[0]
        assert not any(p.parse_error for p in patient.properties)
        owner = next(p for p in patient.properties if p.name == "OwnerClientId")
        assert owner.referenced_entity == "Client"
        assert owner.is_nullable
        assert owner.child_collection == "OwnerPatients"
        is_active = next(p for p in patient.properties if p.name == "IsActive")
        assert is_active.default_value == "true"


# ###############
# Provider
# ###############


def test_schema_provider_orders_tables_by_name() -> None:
    provider = SchemaSourceProvider([_patient(), TableSchema("Clinic", [ColumnInfo("Name", "nvarchar")])])
    sources = provider.get_sources()
    assert [s.name for s in sources] == ["Clinic", "Patient"]
    assert sources[0].content == "Clinic : BaseTable\nName string\n"
