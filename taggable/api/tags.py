# ----------------------
# file   : taggable/api/tags.py
# function: 등록된 문서 컬렉션의 태그 목록 / 가중치 조회 및 집계 재실행 API
# ----------------------

from fastapi import APIRouter, Depends, HTTPException
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import PyMongoError

from taggable.core.errors import AggregationFailed, NotConfigured
from taggable.core.taggable import find_taggable_type
from taggable.db.mongo import get_db
from taggable.services import tag_aggregator, tag_manager
from taggable.utils.logger import logger

router = APIRouter()


# ----------------------
# param   : collection_name - 문서 컬렉션 이름
# function: 컬렉션 이름으로 태깅 문서 타입 조회, 미등록이면 404
# ----------------------
def resolve_document_type(collection_name: str):
    try:
        return find_taggable_type(collection_name)
    except NotConfigured:
        raise HTTPException(status_code=404, detail=f"태깅이 설정되지 않은 컬렉션입니다: {collection_name}")


# ----------------------
# param   : collection_name - 문서 컬렉션 이름
# function: 집계된 태그를 사전순으로 반환
# return  : {"collection": str, "tags": [str]}
# ----------------------
@router.get("/{collection_name}")
async def get_tags(collection_name: str, db: AsyncIOMotorDatabase = Depends(get_db)):
    document_type = resolve_document_type(collection_name)
    try:
        tags = await tag_aggregator.list_tags_async(db, document_type.aggregation_collection_name())
    except PyMongoError:
        logger.exception(f"[TAGS] 태그 목록 조회 실패: {collection_name}")
        raise HTTPException(status_code=500, detail="태그 목록 조회 중 오류 발생")
    return {"collection": collection_name, "tags": tags}


# ----------------------
# param   : collection_name - 문서 컬렉션 이름
# function: 태그와 태그별 문서 수 반환 (태그 클라우드용)
# return  : {"collection": str, "items": [{"tag": str, "value": int}]}
# ----------------------
@router.get("/{collection_name}/weight")
async def get_tags_with_weight(collection_name: str, db: AsyncIOMotorDatabase = Depends(get_db)):
    document_type = resolve_document_type(collection_name)
    try:
        weights = await tag_aggregator.load_tag_weights_async(db, document_type.aggregation_collection_name())
    except PyMongoError:
        logger.exception(f"[TAGS] 태그 가중치 조회 실패: {collection_name}")
        raise HTTPException(status_code=500, detail="태그 가중치 조회 중 오류 발생")
    return {
        "collection": collection_name,
        "items": [weight.model_dump() for weight in weights],
    }


# ----------------------
# param   : collection_name - 문서 컬렉션 이름
# function: 태그 집계 수동 재실행
# return  : {"collection": str, "aggregation": 집계 컬렉션 이름}
# ----------------------
@router.post("/{collection_name}/aggregate")
async def run_aggregation(collection_name: str, db: AsyncIOMotorDatabase = Depends(get_db)):
    document_type = resolve_document_type(collection_name)
    try:
        await tag_manager.aggregate_async(db, document_type)
    except AggregationFailed:
        logger.exception(f"[TAGS] 태그 집계 실패: {collection_name}")
        raise HTTPException(status_code=500, detail="태그 집계 중 오류 발생")
    return {
        "collection": collection_name,
        "aggregation": document_type.aggregation_collection_name(),
    }
