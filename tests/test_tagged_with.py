"""
Name: Tagged-With Query Tests

Responsibilities:
  - AND semantics across requested tags
  - String and list input forms
  - Chaining with further criteria
"""

import pytest

from taggable.core.criteria import Criteria
from taggable.services import tag_manager

from sample_documents import Article, Editorial, MyModel


@pytest.fixture
def models():
    return [
        MyModel.create(tags="tag1,tag2,tag3"),
        MyModel.create(tags="tag2"),
        MyModel.create(tags="tag1", attr="value"),
    ]


def _ids(documents):
    return sorted(str(document.id) for document in documents)


def test_single_tag(models):
    assert _ids(MyModel.tagged_with("tag2")) == _ids([models[0], models[1]])


def test_tags_list(models):
    assert MyModel.tagged_with(["tag2", "tag1"]).to_list() == [models[0]]


def test_tags_string(models):
    assert MyModel.tagged_with("tag2, tag1").to_list() == [models[0]]


def test_chained_with_other_criteria(models):
    assert MyModel.tagged_with("tag1").where(attr="value").to_list() == [models[2]]


def test_returns_lazy_criteria(models):
    criteria = tag_manager.find_tagged_with_all(MyModel, ["tag1", "tag2"])
    assert isinstance(criteria, Criteria)
    assert criteria.selector == {"tags": {"$all": ["tag1", "tag2"]}}
    assert criteria.count() == 1


def test_no_match(models):
    assert MyModel.tagged_with("tag3, missing").to_list() == []


def test_uses_type_separator():
    Editorial.create(keywords="satire politics")
    assert Editorial.tagged_with("politics satire").count() == 1


def test_shared_collection_is_queried_by_parent_and_subclass():
    Article.create(keywords="shared, parent")
    Editorial.create(keywords="shared child")
    assert Article.tagged_with("shared").count() == 2
    assert Editorial.tagged_with(["shared"]).count() == 2


def test_where_merges_overlapping_keys(models):
    criteria = MyModel.tagged_with("tag1").where(tags={"$all": ["tag3"]})
    assert criteria.to_list() == [models[0]]
    assert "$and" in criteria.selector


def test_first(models):
    assert MyModel.tagged_with("tag1, tag2").first() == models[0]
    assert MyModel.tagged_with("missing").first() is None
