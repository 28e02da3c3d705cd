# ----------------------
# file   : taggable/models/taggable_config.py
# function: 문서 타입별 태깅 설정 스키마 정의
# ----------------------

from typing import Any, Dict, Literal
from pydantic import BaseModel, Field

from taggable.services.tag_normalizer import DEFAULT_SEPARATOR


class TaggableConfig(BaseModel):
    tags_field: str = Field(default="tags", min_length=1)
    separator: str = Field(default=DEFAULT_SEPARATOR, min_length=1)
    aggregation: bool = False
    aggregation_options: Dict[str, Any] = Field(default_factory=dict)
    aggregation_mode: Literal["inline", "background"] = "inline"
    field_options: Dict[str, Any] = Field(default_factory=dict)

    # ----------------------
    # 등록 이후 설정 변경은 derive() 로만 가능
    # ----------------------
    model_config = {
        "frozen": True,
    }

    # ----------------------
    # param   : overrides - 바꿀 설정값
    # function: 현재 설정을 복사하고 일부 값만 덮어쓴 새 설정 생성 (검증 포함)
    # return  : TaggableConfig
    # ----------------------
    def derive(self, **overrides: Any) -> "TaggableConfig":
        data = self.model_dump()
        data.update(overrides)
        return TaggableConfig(**data)
