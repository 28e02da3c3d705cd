"""
Name: Taggable Configuration Tests

Responsibilities:
  - Defaults and validation of TaggableConfig
  - derive() overrides and registration option parsing
"""

import pytest
from pydantic import ValidationError

from taggable.core.errors import NotConfigured
from taggable.core.taggable import build_config, get_taggable_config, is_taggable
from taggable.models.tag_meta import TagWeight
from taggable.models.taggable_config import TaggableConfig

from sample_documents import Article, Draft, Editorial, MyModel, Note


def test_defaults():
    config = TaggableConfig()
    assert config.tags_field == "tags"
    assert config.separator == ","
    assert config.aggregation is False
    assert config.aggregation_options == {}
    assert config.aggregation_mode == "inline"


def test_config_is_frozen():
    config = TaggableConfig()
    with pytest.raises(ValidationError):
        config.separator = ";"


def test_derive_returns_new_config():
    base = TaggableConfig(tags_field="keywords")
    derived = base.derive(separator=" ", aggregation=True)
    assert derived.tags_field == "keywords"
    assert derived.separator == " "
    assert derived.aggregation is True
    assert base.separator == ","
    assert base.aggregation is False


def test_derive_validates():
    with pytest.raises(ValidationError):
        TaggableConfig().derive(separator="")
    with pytest.raises(ValidationError):
        TaggableConfig().derive(aggregation_mode="later")


def test_build_config_forwards_field_options():
    config = build_config("keywords", separator=";", aggregation=True, sparse=True)
    assert config.tags_field == "keywords"
    assert config.separator == ";"
    assert config.aggregation is True
    assert config.field_options == {"sparse": True, "index": True}


def test_build_config_index_can_be_disabled():
    assert build_config(index=False).field_options == {"index": False}


def test_registered_types():
    assert get_taggable_config(MyModel).tags_field == "tags"
    assert get_taggable_config(Article).tags_field == "keywords"
    assert get_taggable_config(Editorial).separator == " "
    assert is_taggable(Editorial)
    assert not is_taggable(Draft)
    assert not is_taggable(Note)


def test_unregistered_type_raises():
    with pytest.raises(NotConfigured):
        get_taggable_config(Draft)


@pytest.mark.parametrize("accessor", ["all_tags", "tags_with_weight", "aggregation_collection_name"])
def test_unregistered_type_read_accessors_raise(accessor):
    with pytest.raises(NotConfigured):
        getattr(Draft, accessor)()


def test_tag_weight_alias():
    weight = TagWeight(**{"_id": "food", "value": 3})
    assert weight.tag == "food"
    assert weight.as_tuple() == ("food", 3)
    assert weight.model_dump() == {"tag": "food", "value": 3}
