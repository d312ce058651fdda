import datetime
from enum import Enum

from neo4j_model_service.domain.utils.neo4j_helpers import (
    prepare_properties_for_neo4j,
    restore_properties_from_neo4j,
)


class Color(Enum):
    RED = "red"


def test_none_source_gives_empty_bag():
    assert prepare_properties_for_neo4j(None) == {}


def test_drops_none_and_converts_scalars():
    props = prepare_properties_for_neo4j(
        {
            "name": "Ada",
            "nickname": None,
            "color": Color.RED,
            "colors": [Color.RED],
            "seen": datetime.datetime(2024, 1, 2, 3, 4, 5),
            "ids": {1, 2},
        }
    )
    assert props == {
        "name": "Ada",
        "color": "red",
        "colors": ["red"],
        "seen": "2024-01-02T03:04:05",
        "ids": [1, 2],
    }


def test_nested_values_are_stored_as_json():
    props = prepare_properties_for_neo4j({"meta": {"a": 1}, "items": [{"b": 2}]})
    assert props == {"meta_json": '{"a": 1}', "items_json": '[{"b": 2}]'}
    assert restore_properties_from_neo4j(props) == {"meta": {"a": 1}, "items": [{"b": 2}]}


def test_restore_leaves_plain_properties_alone():
    assert restore_properties_from_neo4j({"name": "Ada", "count_json": 3}) == {
        "name": "Ada",
        "count_json": 3,
    }


def test_restore_with_fields_only_decodes_known_json_properties():
    bag = {"raw_json": "not json", "meta_json": '{"a": 1}', "extra_json": "[1]"}
    assert restore_properties_from_neo4j(bag, fields={"raw_json", "meta"}) == {
        "raw_json": "not json",
        "meta": {"a": 1},
        "extra_json": "[1]",
    }
