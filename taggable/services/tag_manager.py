# ----------------------
# file   : taggable/services/tag_manager.py
# function: 등록된 문서 타입 단위의 태그 처리 (집계 실행, 태그 / 가중치 조회, 태그 검색)
# ----------------------

from typing import List, Tuple

from motor.motor_asyncio import AsyncIOMotorDatabase

from taggable.core.criteria import Criteria
from taggable.core.taggable import get_taggable_config
from taggable.services import tag_aggregator
from taggable.services.tag_normalizer import TagInput
from taggable.utils.logger import logger


# ----------------------
# param   : document_type - taggable 로 등록된 문서 타입
# function: 컬렉션 전체 태그 집계 재계산 (집계 설정 여부와 무관하게 즉시 실행)
# return  : None
# ----------------------
def aggregate(document_type):
    get_taggable_config(document_type)
    logger.info(f"[TAG] 태그 집계 실행: {document_type.__name__}")
    document_type.aggregate_tags()


def list_tags(document_type) -> List[str]:
    get_taggable_config(document_type)
    return document_type.all_tags()


def list_tags_with_weight(document_type) -> List[Tuple[str, int]]:
    get_taggable_config(document_type)
    return document_type.tags_with_weight()


# ----------------------
# param   : document_type - taggable 로 등록된 문서 타입
# param   : tags - 문자열 또는 태그 리스트
# function: 주어진 태그를 모두 가진 문서 검색 쿼리 생성
# return  : Criteria (where 등으로 추가 조건 가능)
# ----------------------
def find_tagged_with_all(document_type, tags: TagInput) -> Criteria:
    get_taggable_config(document_type)
    return document_type.tagged_with(tags)


# ----------------------
# param   : db - motor DB 세션
# param   : document_type - taggable 로 등록된 문서 타입
# function: 비동기 motor 버전 태그 집계
# return  : None
# ----------------------
async def aggregate_async(db: AsyncIOMotorDatabase, document_type):
    config = get_taggable_config(document_type)
    await tag_aggregator.aggregate_tags_async(
        db,
        document_type.collection_name,
        config.tags_field,
        document_type.aggregation_collection_name(),
        config.aggregation_options,
    )
