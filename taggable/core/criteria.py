# ----------------------
# file   : taggable/core/criteria.py
# function: 체이닝 가능한 지연 실행 쿼리 객체 (find 필터 누적 → 반복 시 실행)
# ----------------------

from typing import Any, Dict, Iterable, Iterator, List, Optional


class Criteria:
    def __init__(self, document_type, selector: Optional[Dict[str, Any]] = None):
        self.document_type = document_type
        self.selector: Dict[str, Any] = dict(selector or {})

    # ----------------------
    # param   : conditions - 추가할 필터
    # function: 기존 필터와 AND 결합. 같은 키가 겹치면 $and 로 묶어서 덮어쓰기 방지
    # return  : 새 Criteria
    # ----------------------
    def _merge(self, conditions: Dict[str, Any]) -> "Criteria":
        if not self.selector or not conditions:
            return Criteria(self.document_type, self.selector or conditions)
        if set(conditions) & set(self.selector):
            return Criteria(self.document_type, {"$and": [self.selector, conditions]})
        return Criteria(self.document_type, {**self.selector, **conditions})

    def where(self, conditions: Optional[Dict[str, Any]] = None, **kwargs: Any) -> "Criteria":
        return self._merge({**(conditions or {}), **kwargs})

    def all_in(self, field: str, values: Iterable[Any]) -> "Criteria":
        return self._merge({field: {"$all": list(values)}})

    def __iter__(self) -> Iterator[Any]:
        for raw in self.document_type.collection().find(self.selector):
            yield self.document_type.from_mongo(raw)

    def to_list(self) -> List[Any]:
        return list(self)

    def first(self):
        raw = self.document_type.collection().find_one(self.selector)
        return self.document_type.from_mongo(raw) if raw is not None else None

    def count(self) -> int:
        return self.document_type.collection().count_documents(self.selector)

    def __repr__(self):
        return f"<Criteria {self.document_type.__name__} {self.selector}>"
