"""
Schema type mapper tests.

Covers constraint copying per type tag, read/write flag inversion and the
type-guarded coercion of enum/const/default values.
"""

import pytest

from converters.type_mapper import (
    coerce_enum,
    coerce_value,
    data_schema_to_sdf_data,
    map_read_write_only,
    map_readable_writable,
    sdf_data_to_data_schema,
    value_matches_type,
)
from formats.sdf.sdf_models import CommonQualities, DataQualities
from formats.wot.wot_models import DataSchema
from shared.models.schema import SchemaType


@pytest.mark.unit
class TestValueCoercion:
    """coerce_value / coerce_enum."""

    @pytest.mark.parametrize("value,schema_type", [
        (5, SchemaType.INTEGER),
        (5, SchemaType.NUMBER),
        (2.5, SchemaType.NUMBER),
        ("on", SchemaType.STRING),
        (False, SchemaType.BOOLEAN),
        ([1, 2], SchemaType.ARRAY),
        ({"a": 1}, SchemaType.OBJECT),
    ])
    def test_matching_values_kept(self, value, schema_type):
        assert coerce_value(value, schema_type) == value

    @pytest.mark.parametrize("value,schema_type", [
        (True, SchemaType.INTEGER),
        (2.5, SchemaType.INTEGER),
        ("5", SchemaType.INTEGER),
        (True, SchemaType.NUMBER),
        (1, SchemaType.BOOLEAN),
        (1, SchemaType.STRING),
        ({"a": 1}, SchemaType.ARRAY),
        ([1], SchemaType.OBJECT),
    ])
    def test_mismatching_values_dropped(self, value, schema_type):
        assert coerce_value(value, schema_type) is None

    def test_untyped_schema_accepts_nothing(self):
        assert coerce_value(3, None) is None
        assert value_matches_type("x", None) is False

    def test_null_type(self):
        assert value_matches_type(None, SchemaType.NULL) is True
        assert value_matches_type(0, SchemaType.NULL) is False

    def test_null_const_reads_as_absent(self):
        assert coerce_value(None, SchemaType.NULL) is None

    def test_null_enum_member_kept(self):
        assert coerce_enum([None], SchemaType.NULL) == [None]
        assert coerce_enum([None, 0], SchemaType.NULL) is None

    def test_enum_kept_when_all_members_match(self):
        assert coerce_enum([1, 2, 3], SchemaType.INTEGER) == [1, 2, 3]

    def test_enum_dropped_on_any_mismatch(self):
        assert coerce_enum([1, "two"], SchemaType.INTEGER) is None

    def test_absent_enum(self):
        assert coerce_enum(None, SchemaType.STRING) is None


@pytest.mark.unit
class TestReadWriteFlags:
    """readable/writable <-> writeOnly/readOnly."""

    def test_forward_inversion(self):
        assert map_readable_writable(False, True) == (True, False)
        assert map_readable_writable(True, False) == (False, True)

    def test_forward_absent_stays_absent(self):
        assert map_readable_writable(None, None) == (None, None)
        assert map_readable_writable(False, None) == (True, None)

    def test_reverse_inversion(self):
        assert map_read_write_only(True, None) == (None, False)
        assert map_read_write_only(None, True) == (False, None)

    def test_schema_omits_false_flags(self):
        schema = sdf_data_to_data_schema(DataQualities(readable=False, writable=True))

        assert schema.write_only is True
        assert schema.read_only is None
        assert "readOnly" not in schema.to_dict()

    def test_schema_without_flags(self):
        schema = sdf_data_to_data_schema(DataQualities(type=SchemaType.STRING))

        assert schema.to_dict() == {"type": "string"}


@pytest.mark.unit
class TestSDFToDataSchema:
    """SDF data qualities -> WoT data schema."""

    def test_numeric_constraints_copied(self):
        data = DataQualities(type=SchemaType.NUMBER, minimum=-1.5, maximum=2, multiple_of=0.5)

        assert sdf_data_to_data_schema(data).to_dict() == {
            "type": "number", "minimum": -1.5, "maximum": 2, "multipleOf": 0.5,
        }

    def test_string_constraints_and_format(self):
        data = DataQualities(type=SchemaType.STRING, min_length=1, max_length=8,
                             pattern="^[a-z]+$", format="date-time")

        assert sdf_data_to_data_schema(data).to_dict() == {
            "type": "string", "minLength": 1, "maxLength": 8,
            "pattern": "^[a-z]+$", "format": "date-time",
        }

    def test_constraints_of_other_types_not_copied(self):
        data = DataQualities(type=SchemaType.STRING, minimum=3, max_items=2)

        assert sdf_data_to_data_schema(data).to_dict() == {"type": "string"}

    def test_untyped_schema_copies_no_constraints(self):
        data = DataQualities(minimum=3, unit="m")

        assert sdf_data_to_data_schema(data).to_dict() == {"unit": "m"}

    def test_generic_values_copied_unchanged(self):
        data = DataQualities(type=SchemaType.INTEGER, enum=[1, 2], const=1, default="x")

        schema = sdf_data_to_data_schema(data)
        assert schema.enum == [1, 2]
        assert schema.const == 1
        assert schema.default == "x"

    def test_single_items_schema(self):
        data = DataQualities(
            type=SchemaType.ARRAY, min_items=1,
            items=DataQualities(type=SchemaType.INTEGER,
                                common_qualities=CommonQualities(label="n")),
        )

        assert sdf_data_to_data_schema(data).to_dict() == {
            "type": "array", "minItems": 1, "items": {"title": "n", "type": "integer"},
        }

    def test_items_list(self):
        data = DataQualities(
            type=SchemaType.ARRAY,
            items=[DataQualities(type=SchemaType.STRING), DataQualities(type=SchemaType.BOOLEAN)],
        )

        assert sdf_data_to_data_schema(data).to_dict()["items"] == [
            {"type": "string"}, {"type": "boolean"},
        ]

    def test_object_members(self):
        data = DataQualities(
            type=SchemaType.OBJECT,
            required=["x"],
            properties={"x": DataQualities(type=SchemaType.NUMBER, writable=False)},
        )

        assert sdf_data_to_data_schema(data).to_dict() == {
            "type": "object",
            "required": ["x"],
            "properties": {"x": {"type": "number", "readOnly": True}},
        }

    def test_label_only_on_nested_schemas(self):
        data = DataQualities(common_qualities=CommonQualities(label="L", description="D"))

        assert sdf_data_to_data_schema(data).to_dict() == {}
        assert sdf_data_to_data_schema(data, nested=True).to_dict() == {"title": "L", "description": "D"}

    def test_resolver_applies_to_members(self):
        base = DataQualities(type=SchemaType.INTEGER, maximum=5)
        data = DataQualities(type=SchemaType.ARRAY,
                             items=DataQualities(common_qualities=CommonQualities(sdf_ref="#/sdfData/b")))

        schema = sdf_data_to_data_schema(data, resolve=lambda item: base if item.common_qualities.sdf_ref else item)

        assert schema.items.to_dict() == {"type": "integer", "maximum": 5}


@pytest.mark.unit
class TestDataSchemaToSDF:
    """WoT data schema -> SDF data qualities."""

    def test_round_trip_of_numeric_constraints(self):
        data = DataQualities(type=SchemaType.INTEGER, minimum=0, maximum=9002,
                             exclusive_minimum=0, exclusive_maximum=9000, multiple_of=2)

        assert data_schema_to_sdf_data(sdf_data_to_data_schema(data)).to_dict() == data.to_dict()

    def test_flags_inverted(self):
        data = data_schema_to_sdf_data(DataSchema(read_only=True, write_only=False))

        assert data.writable is False
        assert data.readable is True

    def test_generic_values_coerced(self):
        schema = DataSchema(type=SchemaType.INTEGER, enum=[1, 2], const="one", default=True)

        data = data_schema_to_sdf_data(schema)
        assert data.enum == [1, 2]
        assert data.const is None
        assert data.default is None

    def test_title_only_on_nested_schemas(self):
        schema = DataSchema(title="T", description="D", type=SchemaType.STRING)

        assert data_schema_to_sdf_data(schema).to_dict() == {"type": "string"}
        assert data_schema_to_sdf_data(schema, nested=True).to_dict() == {
            "label": "T", "description": "D", "type": "string",
        }

    def test_nested_members(self):
        schema = DataSchema(
            type=SchemaType.OBJECT,
            properties={"c": DataSchema(type=SchemaType.ARRAY, items=DataSchema(type=SchemaType.NUMBER, title="v"))},
        )

        assert data_schema_to_sdf_data(schema).to_dict() == {
            "type": "object",
            "properties": {"c": {"type": "array", "items": {"label": "v", "type": "number"}}},
        }
