import pytest

from campus_catalog.core.constants import COURSE_ATTRIBUTE_DESCRIPTIONS
from campus_catalog.eav.descriptions import AttributeDescriber
from campus_catalog.eav.model import EavTables


def test_known_name_uses_lookup_table():
    describer = AttributeDescriber(COURSE_ATTRIBUTE_DESCRIPTIONS)
    assert describer.describe("max_enrollment") == "Maximum enrollment capacity"


def test_pattern_rules_apply_before_fallback():
    describer = AttributeDescriber()
    assert describer.describe("equipment_3_quantity") == "Quantity of equipment item"
    assert describer.describe("amenity_12") == "Amenity available"


def test_unknown_name_falls_back_to_template():
    describer = AttributeDescriber(fallback_template="Course attribute: {words}")
    assert describer.describe("zoom_room_id") == "Course attribute: zoom room id"


def test_extend_returns_a_new_describer():
    base = AttributeDescriber({"credits": "Credit hours"})
    extended = base.extend({"studio_hours": "Studio hours per week"})

    assert extended.describe("studio_hours") == "Studio hours per week"
    assert extended.describe("credits") == "Credit hours"
    assert base.describe("studio_hours") == "Attribute: studio hours"


def test_table_names_must_be_plain_identifiers():
    with pytest.raises(ValueError):
        EavTables(entities="courses; DROP TABLE x", attributes="a", values="v")


def test_prefix_builds_the_three_table_names():
    tables = EavTables.with_prefix("rooms")
    assert (tables.entities, tables.attributes, tables.values) == (
        "rooms_eav_entities",
        "rooms_eav_attributes",
        "rooms_eav_values",
    )
