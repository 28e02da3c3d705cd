# ----------------------
# file   : taggable/core/document.py
# function: 태깅 믹스인이 올라가는 최소 문서 클래스
#           (컬렉션 바인딩, 변경 추적, create / save / destroy 생명주기 훅)
# ----------------------

import copy
import re
from typing import Any, Dict, Optional, Set, Tuple

from pymongo.collection import Collection

from taggable.core.criteria import Criteria
from taggable.db.mongo_sync import get_database
from taggable.utils.logger import logger

Changes = Dict[str, Tuple[Any, Any]]


# ----------------------
# param   : class_name - 문서 클래스 이름 (예: MyModel)
# function: 클래스 이름으로 기본 컬렉션 이름 생성 (snake_case + 복수형)
# return  : 예) "my_models"
# ----------------------
def collection_name_for(class_name: str) -> str:
    name = re.sub(r"(?<!^)(?=[A-Z])", "_", class_name).lower()
    if re.search(r"[^aeiou]y$", name):
        return name[:-1] + "ies"
    if name.endswith(("s", "x", "z", "ch", "sh")):
        return name + "es"
    return name + "s"


class Document:
    """Minimal MongoDB document: declared fields, dirty tracking and hooks.

    ``fields`` maps field name to default. A subclass of a concrete document
    keeps its parent's ``collection_name``. ``save()`` on a new document
    fires :meth:`after_create`, later saves fire :meth:`after_save`.
    """

    collection_name: Optional[str] = None
    fields: Dict[str, Any] = {}

    _defaults: Dict[str, Any] = {}
    _indexes: Dict[str, Dict[str, Any]] = {}
    _indexed_databases: Set[int] = set()

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        cls._defaults = {**cls._defaults, **cls.__dict__.get("fields", {})}
        cls._indexes = dict(cls._indexes)
        cls._indexed_databases = set()
        if cls.collection_name is None:
            cls.collection_name = collection_name_for(cls.__name__)

    # ----------------------
    # param   : name - 필드 이름
    # param   : default - 기본값 (callable 이면 호출 결과 사용)
    # param   : index - True 면 인덱스 생성, 나머지 옵션은 create_index 로 전달
    # ----------------------
    @classmethod
    def declare_field(cls, name: str, default: Any = None, index: bool = False, **options: Any):
        cls._defaults = {**cls._defaults, name: default}
        cls._indexes = {key: value for key, value in cls._indexes.items() if key != name}
        if index:
            cls._indexes[name] = options
        cls._indexed_databases = set()

    # ----------------------
    # function: 현재 DB 의 컬렉션 반환. DB 마다 처음 한 번 인덱스 생성
    # ----------------------
    @classmethod
    def collection(cls) -> Collection:
        database = get_database()
        collection = database[cls.collection_name]
        if id(database) not in cls._indexed_databases:
            cls._indexed_databases.add(id(database))
            for name, options in cls._indexes.items():
                collection.create_index(name, **options)
        return collection

    @classmethod
    def where(cls, conditions: Optional[Dict[str, Any]] = None, **kwargs: Any) -> Criteria:
        return Criteria(cls).where(conditions, **kwargs)

    @classmethod
    def find(cls, document_id):
        return cls.where(_id=document_id).first()

    @classmethod
    def create(cls, **attributes: Any):
        return cls(**attributes).save()

    # ----------------------
    # param   : raw - DB 에서 읽은 dict
    # function: 할당 훅을 거치지 않고 문서 객체로 변환
    # ----------------------
    @classmethod
    def from_mongo(cls, raw: Dict[str, Any]):
        document = cls.__new__(cls)
        document._init_state(raw.get("_id"))
        document._data.update({key: value for key, value in raw.items() if key != "_id"})
        document._snapshot()
        return document

    def __init__(self, **attributes: Any):
        self._init_state(None)
        self._snapshot()
        for name, value in attributes.items():
            setattr(self, name, value)

    def _init_state(self, document_id):
        object.__setattr__(self, "_id", document_id)
        object.__setattr__(self, "_destroyed", False)
        object.__setattr__(self, "_data", {
            name: default() if callable(default) else copy.deepcopy(default)
            for name, default in type(self)._defaults.items()
        })

    def _snapshot(self):
        object.__setattr__(self, "_original", copy.deepcopy(self._data))

    # ----------------------
    # 선언된 필드는 속성처럼 읽고 쓰기 (쓰기는 assign_attribute 를 거침)
    # ----------------------
    def __getattr__(self, name: str):
        if not name.startswith("_") and name in type(self)._defaults:
            return self._data.get(name)
        raise AttributeError(f"{type(self).__name__} 에 '{name}' 필드가 없습니다")

    def __setattr__(self, name: str, value: Any):
        if name not in type(self)._defaults:
            raise AttributeError(f"{type(self).__name__} 에 '{name}' 필드가 없습니다")
        self.assign_attribute(name, value)

    @property
    def id(self):
        return self._id

    def _read_attribute(self, name: str) -> Any:
        return self._data.get(name)

    def _write_attribute(self, name: str, value: Any):
        self._data[name] = value

    def assign_attribute(self, name: str, value: Any):
        self._write_attribute(name, value)

    # ----------------------
    # function: 마지막 로드 / 저장 이후 바뀐 필드
    # return  : {필드: (이전 값, 현재 값)}
    # ----------------------
    def changes(self) -> Changes:
        return {
            name: (self._original.get(name), value)
            for name, value in self._data.items()
            if name not in self._original or self._original[name] != value
        }

    # ----------------------
    # 생명주기 훅 (믹스인이 override 후 super() 호출)
    # ----------------------
    def before_save(self, changes: Changes):
        pass

    def after_save(self, changes: Changes):
        pass

    def after_create(self):
        pass

    def after_destroy(self):
        pass

    # ----------------------
    # function: 새 문서면 insert, 기존 문서면 바뀐 필드만 $set
    # return  : self
    # ----------------------
    def save(self):
        if self._destroyed:
            raise RuntimeError(f"삭제된 문서는 저장할 수 없습니다: {self._id}")

        is_new = self._id is None
        self.before_save(self.changes())
        changes = self.changes()
        collection = type(self).collection()

        if is_new:
            object.__setattr__(self, "_id", collection.insert_one(dict(self._data)).inserted_id)
            logger.debug(f"[DOCUMENT] 생성: {collection.name} {self._id}")
        elif changes:
            collection.update_one({"_id": self._id}, {"$set": {name: self._data[name] for name in changes}})
            logger.debug(f"[DOCUMENT] 수정: {collection.name} {self._id} {list(changes)}")

        self._snapshot()
        if is_new:
            self.after_create()
        else:
            self.after_save(changes)
        return self

    def update_attributes(self, **attributes: Any):
        for name, value in attributes.items():
            setattr(self, name, value)
        return self.save()

    # ----------------------
    # function: 실제로 DB 에서 지웠을 때만 after_destroy 실행
    # return  : 삭제 여부
    # ----------------------
    def destroy(self) -> bool:
        if self._id is None or self._destroyed:
            return False
        result = type(self).collection().delete_one({"_id": self._id})
        object.__setattr__(self, "_destroyed", True)
        if not result.deleted_count:
            logger.warning(f"[DOCUMENT] 이미 삭제된 문서: {type(self).collection_name} {self._id}")
            return False
        logger.debug(f"[DOCUMENT] 삭제: {type(self).collection_name} {self._id}")
        self.after_destroy()
        return True

    def __eq__(self, other):
        if not isinstance(other, Document) or self._id is None:
            return self is other
        return self.collection_name == other.collection_name and self._id == other._id

    def __hash__(self):
        return hash((self.collection_name, self._id)) if self._id is not None else id(self)

    def __repr__(self):
        return f"<{type(self).__name__} {self._id} {self._data}>"
