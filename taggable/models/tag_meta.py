# ----------------------
# file   : taggable/models/tag_meta.py
# function: 태그 집계 컬렉션의 한 항목 (태그 이름 + 태그를 가진 문서 수)
# ----------------------

from typing import Tuple
from pydantic import BaseModel, Field


class TagWeight(BaseModel):
    tag: str = Field(alias="_id")
    value: int = 0

    # ----------------------
    # _id 별칭과 필드 이름 모두로 생성 허용
    # ----------------------
    model_config = {
        "populate_by_name": True,
    }

    def as_tuple(self) -> Tuple[str, int]:
        return self.tag, self.value
