"""
Name: Taggable Document Tests

Responsibilities:
  - Tag field assignment always normalizes
  - Pre-save de-duplication runs only when the tag field changed
  - Custom tag field names and separators
"""

from unittest import mock

import pytest

from taggable.core.errors import InvalidInputKind, NotConfigured

from sample_documents import Article, Draft, Editorial, MyModel


def test_default_tags_is_empty_list():
    assert MyModel().tags == []
    assert MyModel().get_tags() == []


def test_sets_tags_from_string():
    model = MyModel()
    model.tags = "some,new,tag"
    assert model.tags == ["some", "new", "tag"]


def test_strips_tags():
    model = MyModel()
    model.tags = "now ,  with, some spaces  , in places "
    assert model.tags == ["now", "with", "some spaces", "in places"]


def test_rejects_blank_tags():
    model = MyModel(tags="repetitive,, commas, shouldn't cause,,, empty tags")
    assert model.tags == ["repetitive", "commas", "shouldn't cause", "empty tags"]


def test_sets_tags_from_list():
    model = MyModel()
    model.tags = ["some", "", "new", "", "tag"]
    assert model.tags == ["some", "new", "tag"]
    model.tags = ["favorite", "colors", "blue, green"]
    assert model.tags == ["favorite", "colors", "blue", "green"]


def test_set_tags_normalizes():
    model = MyModel()
    model.set_tags(" a , b ,A")
    assert model.get_tags() == ["a", "b"]


def test_get_tags_returns_copy():
    model = MyModel(tags="a,b")
    model.get_tags().append("c")
    assert model.tags == ["a", "b"]


def test_dedups_case_insensitively_on_save(database):
    model = MyModel()
    model.tags = "sometimes, Sometimes, I, repeat, myself"
    model.save()
    assert model.tags == ["sometimes", "I", "repeat", "myself"]
    stored = database["my_models"].find_one({"_id": model.id})
    assert stored["tags"] == ["sometimes", "I", "repeat", "myself"]


def test_preserves_case_of_first_used_duplicate():
    model = MyModel.create(tags=["repeat"])
    model.tags.append("RePeat")
    model.save()
    assert model.tags == ["repeat"]
    assert MyModel.find(model.id).tags == ["repeat"]


def test_skips_dedup_when_tags_unchanged():
    model = MyModel.create(tags="a")
    with mock.patch.object(MyModel, "dedup_tags") as dedup:
        model.update_attributes(attr="changed")
    dedup.assert_not_called()


def test_dedup_runs_when_tags_changed():
    model = MyModel.create(tags="a")
    with mock.patch.object(MyModel, "dedup_tags") as dedup:
        model.update_attributes(tags="a,b")
    dedup.assert_called_once()


def test_invalid_assignment_raises():
    model = MyModel()
    with pytest.raises(InvalidInputKind):
        model.tags = 42
    assert model.tags == []


def test_invalid_direct_mutation_raises_on_save():
    model = MyModel(tags="a")
    model.tags.append(7)
    with pytest.raises(InvalidInputKind):
        model.save()


def test_custom_tag_field_name():
    article = Article()
    article.keywords = "some,new,tag"
    assert article.keywords == ["some", "new", "tag"]
    assert article.get_tags() == ["some", "new", "tag"]


def test_custom_separator(reconfigure):
    reconfigure(MyModel, separator=";")
    model = MyModel()
    model.tags = "some;other;separator"
    assert model.tags == ["some", "other", "separator"]


def test_subclass_uses_its_own_separator():
    editorial = Editorial()
    editorial.keywords = "opinion politics"
    assert editorial.keywords == ["opinion", "politics"]
    article = Article(keywords="opinion politics")
    assert article.keywords == ["opinion politics"]


def test_tag_field_is_indexed():
    MyModel.create(tags="a")
    assert "tags_1" in MyModel.collection().index_information()


def test_unregistered_taggable_type_raises():
    with pytest.raises(NotConfigured):
        Draft(body="text")
