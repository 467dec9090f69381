import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

from meta_marketing_mcp.core.naming import camelize_key, camelize_keys, decamelize_key, decamelize_keys


def test_nested_mapping_keys_are_converted():
    assert decamelize_keys({"a": {"bC": 1}}) == {"a": {"b_c": 1}}


def test_list_container_is_preserved_and_elements_renamed():
    assert decamelize_keys({"list": [{"xY": 1}]}) == {"list": [{"x_y": 1}]}


def test_list_scalars_and_values_are_untouched():
    payload = {"geoLocations": {"countries": ["US", "CA"]}, "ageMin": 18, "genders": [1, 2]}
    assert decamelize_keys(payload) == {
        "geo_locations": {"countries": ["US", "CA"]},
        "age_min": 18,
        "genders": [1, 2],
    }


def test_snake_and_lowercase_keys_pass_through():
    assert decamelize_keys({"geo_locations": {"age_min": 1}, "name": "x"}) == {
        "geo_locations": {"age_min": 1},
        "name": "x",
    }


@pytest.mark.parametrize(
    "key",
    ["ageMin", "geoLocations", "publisherPlatforms", "specialAdCategories", "age2Min", "name"],
)
def test_camel_keys_round_trip(key):
    assert camelize_key(decamelize_key(key)) == key


def test_acronym_run_is_one_boundary_and_lossy():
    assert decamelize_key("pageID") == "page_id"
    assert camelize_key("page_id") == "pageId"


@pytest.mark.parametrize(
    "key, expected",
    [("HTMLBody", "html_body"), ("ABTestGroup", "ab_test_group"), ("adURLTags", "ad_url_tags")],
)
def test_acronym_run_is_split_from_following_word(key, expected):
    assert decamelize_key(key) == expected


def test_camelize_keys_recurses_into_lists():
    assert camelize_keys({"flexible_spec": [{"interests": [{"id": "1"}], "work_positions": []}]}) == {
        "flexibleSpec": [{"interests": [{"id": "1"}], "workPositions": []}]
    }


def test_input_is_not_mutated():
    payload = {"outerKey": {"innerKey": [1, {"deepKey": True}]}}
    decamelize_keys(payload)
    assert payload == {"outerKey": {"innerKey": [1, {"deepKey": True}]}}
