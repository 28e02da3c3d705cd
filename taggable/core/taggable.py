# ----------------------
# file   : taggable/core/taggable.py
# function: 문서 타입에 태깅 기능 부여
#           (태그 필드 선언, 할당 시 정규화, 저장 전 중복 제거, 생명주기별 태그 집계)
# ----------------------

from typing import Any, Dict, List, Optional, Tuple

from taggable.core.background_worker import get_aggregation_worker
from taggable.core.criteria import Criteria
from taggable.core.document import Document
from taggable.core.errors import NotConfigured
from taggable.db.mongo_sync import get_database
from taggable.models.taggable_config import TaggableConfig
from taggable.services import tag_aggregator
from taggable.services.tag_normalizer import TagInput, dedup_tags, normalize, split_tags
from taggable.utils.logger import logger

# ----------------------
# 타입별 설정 / 집계 컬렉션 이름 캐시 / 컬렉션 이름 → 타입
# ----------------------
_configs: Dict[type, TaggableConfig] = {}
_aggregation_names: Dict[type, str] = {}
_types_by_collection: Dict[str, type] = {}

_CONFIG_OPTIONS = ("separator", "aggregation", "aggregation_options", "aggregation_mode")


# ----------------------
# param   : cls - 문서 타입
# function: MRO 를 따라 가장 가까운 태깅 설정 조회
# return  : TaggableConfig (없으면 NotConfigured)
# ----------------------
def get_taggable_config(cls) -> TaggableConfig:
    for klass in getattr(cls, "__mro__", ()):
        config = _configs.get(klass)
        if config is not None:
            return config
    raise NotConfigured(cls)


def is_taggable(cls) -> bool:
    try:
        get_taggable_config(cls)
    except NotConfigured:
        return False
    return True


# ----------------------
# param   : cls - 문서 타입
# param   : config - 적용할 설정
# function: 설정을 타입에 붙이고 태그 필드 선언 (index 등 field_options 전달)
# ----------------------
def set_taggable_config(cls, config: TaggableConfig):
    if not (isinstance(cls, type) and issubclass(cls, Taggable) and issubclass(cls, Document)):
        raise TypeError(f"{cls!r} 는 Taggable, Document 를 모두 상속해야 합니다")

    _configs[cls] = config
    cls.declare_field(config.tags_field, default=list, **config.field_options)
    _types_by_collection.setdefault(cls.collection_name, cls)
    logger.debug(f"[TAG] taggable 설정: {cls.__name__} {config}")


# ----------------------
# param   : cls - 문서 타입
# param   : overrides - 바꿀 설정값
# function: 상속받은(또는 현재) 설정에서 일부만 바꾼 설정을 cls 에 적용
# return  : 이전 설정 (되돌릴 때 set_taggable_config 에 전달)
# ----------------------
def configure_taggable(cls, **overrides: Any) -> TaggableConfig:
    previous = get_taggable_config(cls)
    set_taggable_config(cls, previous.derive(**overrides))
    return previous


def build_config(field: Optional[str] = None, **options: Any) -> TaggableConfig:
    values = {key: options.pop(key) for key in _CONFIG_OPTIONS if key in options}
    # 남은 옵션은 필드 선언으로 전달 (원래처럼 태그 필드는 기본 인덱스)
    options.setdefault("index", True)
    return TaggableConfig(tags_field=field or "tags", field_options=options, **values)


def taggable(field: Any = None, **options: Any):
    """Class decorator declaring a document type as taggable.

    ``@taggable``, ``@taggable("keywords")`` and
    ``@taggable(separator=" ", aggregation=True)`` are all accepted. Options
    other than ``separator``, ``aggregation``, ``aggregation_options`` and
    ``aggregation_mode`` go to the tag field declaration.
    """
    if isinstance(field, type):
        set_taggable_config(field, build_config())
        return field

    def decorator(cls):
        set_taggable_config(cls, build_config(field, **options))
        return cls

    return decorator


# ----------------------
# param   : overrides - 하위 타입에서 바꿀 설정값
# function: 부모 설정을 복사해 일부만 바꾸는 하위 타입용 데코레이터
# ----------------------
def override_taggable(**overrides: Any):
    def decorator(cls):
        configure_taggable(cls, **overrides)
        return cls

    return decorator


# ----------------------
# param   : collection_name - 문서 컬렉션 이름
# function: 컬렉션 이름으로 등록된 태깅 문서 타입 조회
# return  : 문서 타입 (없으면 NotConfigured)
# ----------------------
def find_taggable_type(collection_name: str):
    cls = _types_by_collection.get(collection_name)
    if cls is None:
        raise NotConfigured(collection_name)
    return cls


class Taggable:
    """Mixin adding tags to a :class:`Document`.

    Use together with :func:`taggable`::

        @taggable("keywords", aggregation=True)
        class Article(Taggable, Document):
            fields = {"title": None}
    """

    @classmethod
    def taggable_config(cls) -> TaggableConfig:
        return get_taggable_config(cls)

    @classmethod
    def tags_field(cls) -> str:
        return get_taggable_config(cls).tags_field

    @classmethod
    def aggregate_tags_enabled(cls) -> bool:
        return get_taggable_config(cls).aggregation

    @classmethod
    def aggregation_collection_name(cls) -> str:
        get_taggable_config(cls)
        name = _aggregation_names.get(cls)
        if name is None:
            name = tag_aggregator.aggregation_collection_for(cls.collection_name)
            _aggregation_names[cls] = name
        return name

    # ----------------------
    # function: 컬렉션 전체 태그 집계를 즉시 재계산 (하위 타입 문서 포함)
    # ----------------------
    @classmethod
    def aggregate_tags(cls):
        config = get_taggable_config(cls)
        tag_aggregator.aggregate_tags(
            cls.collection(),
            config.tags_field,
            cls.aggregation_collection_name(),
            config.aggregation_options,
        )

    # ----------------------
    # function: 설정된 방식(inline / background)으로 집계 실행
    # ----------------------
    @classmethod
    def trigger_aggregation(cls):
        if get_taggable_config(cls).aggregation_mode == "background":
            get_aggregation_worker().submit(cls)
        else:
            cls.aggregate_tags()

    @classmethod
    def all_tags(cls) -> List[str]:
        return tag_aggregator.list_tags(get_database(), cls.aggregation_collection_name())

    @classmethod
    def tags_with_weight(cls) -> List[Tuple[str, int]]:
        return tag_aggregator.list_tags_with_weight(get_database(), cls.aggregation_collection_name())

    # ----------------------
    # param   : tags - 문자열(구분자로 분리) 또는 태그 리스트(그대로 사용)
    # function: 모든 태그를 가진 문서만 찾는 쿼리 (추가 체이닝 가능)
    # return  : Criteria
    # ----------------------
    @classmethod
    def tagged_with(cls, tags: TagInput) -> Criteria:
        config = get_taggable_config(cls)
        if isinstance(tags, str):
            tags = split_tags(tags, config.separator)
        return Criteria(cls).all_in(config.tags_field, tags or [])

    # ----------------------
    # 태그 필드 할당은 항상 정규화를 거침
    # ----------------------
    def assign_attribute(self, name: str, value: Any):
        config = get_taggable_config(type(self))
        if name == config.tags_field:
            value = normalize(value, config.separator)
        super().assign_attribute(name, value)

    def get_tags(self) -> List[str]:
        return list(self._read_attribute(self.tags_field()) or [])

    def set_tags(self, value: TagInput):
        self.assign_attribute(self.tags_field(), value)

    # ----------------------
    # function: 대소문자 무시 중복 제거 (처음 나온 표기 유지, 재분리 없음)
    # ----------------------
    def dedup_tags(self):
        field = self.tags_field()
        self._write_attribute(field, dedup_tags(self._read_attribute(field) or []))

    def before_save(self, changes: Dict[str, Tuple[Any, Any]]):
        super().before_save(changes)
        if self.tags_field() in changes:
            self.dedup_tags()

    def after_create(self):
        super().after_create()
        if self.aggregate_tags_enabled():
            type(self).trigger_aggregation()

    def after_save(self, changes: Dict[str, Tuple[Any, Any]]):
        super().after_save(changes)
        if self.tags_field() in changes and self.aggregate_tags_enabled():
            type(self).trigger_aggregation()

    def after_destroy(self):
        super().after_destroy()
        if self.aggregate_tags_enabled():
            type(self).trigger_aggregation()
