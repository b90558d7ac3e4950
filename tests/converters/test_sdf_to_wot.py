"""
SDF to WoT converter tests.

Covers context and metadata, hierarchy flattening, key collisions, sdfRef
resolution and the Thing Description variant.
"""

import json

import pytest

from converters import (
    SDFToWoTConverter,
    convert_sdf_to_thing_description,
    convert_sdf_to_thing_model,
    first_letter_to_upper_case,
    get_prefixed_key,
    merge_common_qualities,
    resolve_sdf_ref,
)
from formats.sdf import CommonQualities, SDFModel, SDFParser
from formats.wot import ThingDescription, ThingModel

from fixtures import CONSTRAINED_PROPERTY_SDF, NESTED_THING_SDF, SWITCH_SDF


def convert(content, description=False):
    model = SDFParser().parse(content)
    converter = SDFToWoTConverter()
    if description:
        return converter.convert_to_thing_description(model).to_dict()
    return converter.convert_to_thing_model(model).to_dict()


@pytest.mark.unit
class TestKeyComposition:
    """Key helpers."""

    @pytest.mark.parametrize("text,expected", [
        ("value", "Value"),
        ("aB", "AB"),
        ("Switch", "Switch"),
        ("", ""),
        ("1st", "1st"),
    ])
    def test_first_letter_to_upper_case(self, text, expected):
        assert first_letter_to_upper_case(text) == expected

    def test_prefixed_key_without_prefix(self):
        assert get_prefixed_key("", "value") == "value"
        assert get_prefixed_key(None, "value") == "value"

    def test_prefixed_key_with_prefix(self):
        assert get_prefixed_key("Switch", "value") == "SwitchValue"


@pytest.mark.unit
class TestMetadata:
    """Context, title, version, description and links."""

    def test_empty_model_identity(self, empty_sdf):
        assert convert(empty_sdf) == {
            "@context": ["https://www.w3.org/2019/wot/td/v1"],
            "@type": "Thing",
        }

    def test_info_block(self, switch_sdf):
        tm = convert(switch_sdf)

        assert tm["title"] == SWITCH_SDF["info"]["title"]
        assert tm["version"] == {"instance": "2019-04-24"}
        assert tm["description"] == SWITCH_SDF["info"]["copyright"]
        assert tm["links"] == [{"href": "https://example.com/license", "rel": "license"}]

    def test_namespace_becomes_one_context_entry(self, switch_sdf):
        tm = convert(switch_sdf)

        assert tm["@context"] == [
            "https://www.w3.org/2019/wot/td/v1",
            {"cap": "https://example.com/capability/cap"},
        ]

    def test_empty_namespace_not_added(self):
        tm = convert(json.dumps({"namespace": {}}))

        assert tm["@context"] == ["https://www.w3.org/2019/wot/td/v1"]

    def test_convert_alias(self):
        thing_model = SDFToWoTConverter().convert(SDFModel())

        assert isinstance(thing_model, ThingModel)
        assert SDFToWoTConverter().get_format_name() == "SDF→TM"


@pytest.mark.unit
class TestFlattening:
    """Hierarchy flattening."""

    def test_object_prefix(self, switch_sdf):
        tm = convert(switch_sdf)

        assert list(tm["properties"]) == ["SwitchValue"]
        assert set(tm["actions"]) == {"SwitchOn", "SwitchOff", "SwitchToggle"}
        assert list(tm["events"]) == ["SwitchSwitched"]

    def test_root_affordances_unprefixed(self, nested_thing_sdf):
        tm = convert(nested_thing_sdf)

        assert "status" in tm["properties"]

    def test_lower_case_object_key_capitalized(self, nested_thing_sdf):
        tm = convert(nested_thing_sdf)

        assert tm["properties"]["OutletPower"] == {"type": "number", "unit": "W"}

    def test_nested_things(self, nested_thing_sdf):
        tm = convert(nested_thing_sdf)

        assert tm["actions"] == {"HouseLampToggle": {"title": "Toggle lamp"}}
        assert tm["properties"]["HouseFloorSensorTemperature"] == {"type": "number", "unit": "Cel"}
        assert tm["events"] == {"HouseFloorSensorAlarm": {"title": "Alarm"}}

    def test_all_affordances_present(self, nested_thing_sdf):
        tm = convert(nested_thing_sdf)

        assert set(tm["properties"]) == {"status", "OutletPower", "HouseFloorSensorTemperature"}

    def test_collision_last_writer_wins(self, colliding_keys_sdf):
        tm = convert(colliding_keys_sdf)

        assert tm["properties"] == {"LampSwitchValue": {"title": "from thing object"}}

    def test_empty_maps_omitted(self):
        tm = convert(json.dumps({"sdfObject": {"Empty": {"sdfProperty": {}}}}))

        assert "properties" not in tm
        assert "actions" not in tm

    def test_repeatable_and_order_independent(self):
        first = convert(json.dumps(NESTED_THING_SDF))
        second = convert(json.dumps(NESTED_THING_SDF))
        reordered = dict(reversed(list(NESTED_THING_SDF.items())))

        assert first == second
        assert convert(json.dumps(reordered)) == first

    def test_source_model_not_mutated(self, sdf_parser, reference_sdf):
        model = sdf_parser.parse(reference_sdf)
        before = model.to_dict()

        SDFToWoTConverter().convert_to_thing_model(model)

        assert model.to_dict() == before


@pytest.mark.unit
class TestAffordanceMapping:
    """Per-affordance field mapping."""

    def test_property_fields(self, switch_sdf):
        value = convert(switch_sdf)["properties"]["SwitchValue"]

        assert value == {
            "description": "The state of the switch; false for off and true for on.",
            "type": "boolean",
            "observable": True,
        }

    def test_constraints_survive(self, constrained_property_sdf):
        foo = convert(constrained_property_sdf)["properties"]["foo"]

        assert foo == CONSTRAINED_PROPERTY_SDF["sdfProperty"]["foo"]

    def test_read_write_inversion(self):
        tm = convert(json.dumps({"sdfProperty": {
            "setOnly": {"readable": False, "writable": True},
            "plain": {"type": "string"},
        }}))

        assert tm["properties"]["setOnly"] == {"writeOnly": True}
        assert tm["properties"]["plain"] == {"type": "string"}

    def test_action_labels(self, switch_sdf):
        actions = convert(switch_sdf)["actions"]

        assert actions["SwitchOn"] == {
            "title": "Turn on",
            "description": "Turn the switch on; equivalent to setting value to true.",
        }

    def test_event_output(self, switch_sdf):
        event = convert(switch_sdf)["events"]["SwitchSwitched"]

        assert event == {"title": "Switched", "data": {"type": "boolean"}}

    def test_action_input_and_output(self, nested_data_sdf):
        action = convert(nested_data_sdf)["actions"]["setColor"]

        assert action["input"] == {
            "title": "Color",
            "type": "object",
            "required": ["red"],
            "properties": {
                "red": {"type": "integer", "minimum": 0, "maximum": 255},
                "name": {"type": "string", "maxLength": 32, "format": "uri"},
            },
        }
        # only common qualities are inherited through sdfRef
        assert action["output"] == {"title": "Temperature"}

    def test_array_property(self, nested_data_sdf):
        history = convert(nested_data_sdf)["properties"]["history"]

        assert history == {
            "type": "array",
            "minItems": 1,
            "maxItems": 10,
            "items": {"title": "Entry", "type": "string"},
        }

    def test_enum_and_default(self, nested_data_sdf):
        mode = convert(nested_data_sdf)["properties"]["mode"]

        assert mode == {"type": "string", "enum": ["auto", "manual"], "default": "auto", "writeOnly": True}


@pytest.mark.unit
class TestReferenceResolution:
    """sdfRef lookup and merge."""

    def test_reference_merge_precedence(self, reference_sdf):
        actions = convert(reference_sdf)["actions"]

        assert actions["foobaz"] == {"title": "hi"}
        assert actions["foobaz"] == actions["foobar"]

    def test_own_value_wins(self, reference_sdf):
        assert convert(reference_sdf)["actions"]["override"] == {"title": "own label"}

    def test_unresolved_reference_is_not_an_error(self, reference_sdf):
        assert convert(reference_sdf)["actions"]["dangling"] == {"description": "kept"}

    def test_wrong_category_not_resolved(self, reference_sdf):
        assert convert(reference_sdf)["actions"]["wrongCategory"] == {}

    def test_property_reference_keeps_own_schema(self, reference_sdf):
        level_copy = convert(reference_sdf)["properties"]["levelCopy"]

        assert level_copy == {
            "title": "Level",
            "description": "Brightness level",
            "type": "integer",
            "maximum": 10,
        }

    def test_event_reference(self, reference_sdf):
        assert convert(reference_sdf)["events"]["changedAgain"] == {"title": "Changed"}

    def test_resolve_sdf_ref_helper(self, sdf_parser, reference_sdf):
        model = sdf_parser.parse(reference_sdf)

        assert resolve_sdf_ref(model, "#/sdfAction/foobar", "sdfAction") is model.sdf_action["foobar"]
        assert resolve_sdf_ref(model, "#/sdfAction/foobar", "sdfEvent") is None
        assert resolve_sdf_ref(model, "#/sdfAction/missing", "sdfAction") is None
        assert resolve_sdf_ref(model, "#/sdfObject/x/sdfAction/foobar", "sdfAction") is None
        assert resolve_sdf_ref(model, "other:/sdfAction/foobar", "sdfAction") is None

    def test_reference_into_other_document_not_resolved(self):
        tm = convert(json.dumps({"sdfAction": {
            "a": {"label": "hi"},
            "b": {"sdfRef": "other:/sdfAction/a"},
        }}))

        assert tm["actions"]["b"] == {}

    def test_merge_common_qualities(self):
        base = CommonQualities(label="base", description="base description", comment="c")
        overriding = CommonQualities(label="own", sdf_ref="#/sdfData/x")

        merged = merge_common_qualities(base, overriding)

        assert merged == CommonQualities(
            label="own", description="base description", comment="c", sdf_ref="#/sdfData/x",
        )

    def test_reference_resolution_is_single_hop(self):
        tm = convert(json.dumps({"sdfAction": {
            "a": {"label": "A"},
            "b": {"sdfRef": "#/sdfAction/a"},
            "c": {"sdfRef": "#/sdfAction/b"},
        }}))

        assert tm["actions"]["c"] == {}


@pytest.mark.unit
class TestThingDescriptionVariant:
    """SDF -> Thing Description."""

    def test_empty_model_gets_placeholder_and_nosec(self, sdf_parser, empty_sdf):
        td = SDFToWoTConverter().convert_to_thing_description(sdf_parser.parse(empty_sdf))

        assert isinstance(td, ThingDescription)
        assert td.to_dict() == {
            "@context": ["https://www.w3.org/2019/wot/td/v1"],
            "title": "No Title given.",
            "security": "nosec_sc",
            "securityDefinitions": {"nosec_sc": {"scheme": "nosec"}},
        }

    def test_info_title_replaces_placeholder(self, switch_sdf):
        td = convert(switch_sdf, description=True)

        assert td["title"] == SWITCH_SDF["info"]["title"]
        assert "SwitchValue" in td["properties"]


@pytest.mark.unit
class TestTextHelpers:
    """JSON text in, JSON text out."""

    def test_convert_sdf_to_thing_model(self):
        result = json.loads(convert_sdf_to_thing_model("{}"))

        assert result == {"@context": ["https://www.w3.org/2019/wot/td/v1"], "@type": "Thing"}

    def test_convert_sdf_to_thing_description(self, switch_sdf):
        result = json.loads(convert_sdf_to_thing_description(switch_sdf))

        assert result["security"] == "nosec_sc"
