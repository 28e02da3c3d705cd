# ----------------------
# file   : taggable/services/tag_normalizer.py
# function: 문자열 / 리스트 형태의 태그 입력을 정규화된 태그 리스트로 변환
# ----------------------

from typing import Iterable, List, Sequence, Union

from taggable.core.errors import InvalidInputKind

DEFAULT_SEPARATOR = ","

TagInput = Union[str, Sequence[str], None]


# ----------------------
# param   : raw - 구분자로 이어진 태그 문자열
# param   : separator - 구분자 (정규식이 아닌 문자열 그대로 분리)
# function: 구분자로 분리 후 각 태그의 연속 공백을 하나로 합치고 앞뒤 공백 제거, 빈 태그 제외
# return  : List[str]
# ----------------------
def split_tag_string(raw: str, separator: str = DEFAULT_SEPARATOR) -> List[str]:
    result = []
    for part in raw.split(separator):
        tag = " ".join(part.split())
        if tag:
            result.append(tag)
    return result


# ----------------------
# param   : value - 문자열 또는 문자열 리스트
# param   : separator - 구분자
# function: 분리만 수행 (중복 제거 없음). 리스트의 각 요소도 구분자로 다시 분리됨
# return  : List[str]
# ----------------------
def split_tags(value: TagInput, separator: str = DEFAULT_SEPARATOR) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return split_tag_string(value, separator)
    if not isinstance(value, (list, tuple)):
        raise InvalidInputKind(value)

    result = []
    for item in value:
        if not isinstance(item, str):
            raise InvalidInputKind(item)
        result.extend(split_tag_string(item, separator))
    return result


# ----------------------
# param   : tags - 태그 리스트
# function: 대소문자 구분 없이 중복 제거. 처음 나온 태그의 표기와 순서를 유지
# return  : List[str]
# ----------------------
def dedup_tags(tags: Iterable[str]) -> List[str]:
    uniques = []
    seen = set()
    for tag in tags:
        if not isinstance(tag, str):
            raise InvalidInputKind(tag)
        key = tag.lower()
        if key in seen:
            continue
        seen.add(key)
        uniques.append(tag)
    return uniques


def normalize(value: TagInput, separator: str = DEFAULT_SEPARATOR) -> List[str]:
    """Split, trim and case-insensitively de-duplicate a raw tag value.

    Strings are split on the literal ``separator``; list elements are split
    the same way and concatenated in order. ``None`` gives an empty list,
    anything else raises :class:`InvalidInputKind`.
    """
    return dedup_tags(split_tags(value, separator))
