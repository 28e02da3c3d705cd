# ----------------------
# file   : taggable/core/errors.py
# function: 태깅 관련 예외 정의
# ----------------------


class TaggableError(Exception):
    pass


# ----------------------
# class   : InvalidInputKind
# function: 태그 필드에 문자열 / 문자열 시퀀스가 아닌 값이 들어온 경우
# ----------------------
class InvalidInputKind(TaggableError, TypeError):
    def __init__(self, value):
        self.value = value
        super().__init__(f"태그는 문자열 또는 문자열 리스트여야 합니다: {type(value).__name__}")


# ----------------------
# class   : AggregationFailed
# function: 태그 집계(group / $out) 실패. 원인 예외는 __cause__ 로 연결됨
# ----------------------
class AggregationFailed(TaggableError):
    def __init__(self, collection_name: str, reason: str = ""):
        self.collection_name = collection_name
        message = f"태그 집계 실패: {collection_name}"
        if reason:
            message = f"{message} - {reason}"
        super().__init__(message)


# ----------------------
# class   : NotConfigured
# function: taggable 로 등록되지 않은 타입에 태깅 기능을 호출한 경우
# ----------------------
class NotConfigured(TaggableError):
    def __init__(self, target):
        self.target = target
        name = getattr(target, "__name__", str(target))
        super().__init__(f"taggable 로 등록되지 않은 타입입니다: {name}")
