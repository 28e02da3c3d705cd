# ----------------------
# file   : taggable/services/tag_aggregator.py
# function: 컬렉션 전체의 태그별 문서 수 집계 및 집계 컬렉션 조회 (pymongo 동기 / motor 비동기)
# ----------------------

from typing import Any, Dict, List, Optional, Tuple
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.collection import Collection
from pymongo.database import Database
from pymongo.errors import PyMongoError

from taggable.core.errors import AggregationFailed
from taggable.models.tag_meta import TagWeight
from taggable.utils.logger import logger

AGGREGATION_SUFFIX = "_tags_aggregation"


# ----------------------
# param   : collection_name - 원본 문서 컬렉션 이름
# function: 집계 결과를 저장할 컬렉션 이름 생성
# return  : "<collection>_tags_aggregation"
# ----------------------
def aggregation_collection_for(collection_name: str) -> str:
    return f"{collection_name}{AGGREGATION_SUFFIX}"


# ----------------------
# param   : tags_field - 태그 필드 이름
# param   : out - 결과를 덮어쓸 컬렉션 이름
# param   : query - (선택) 집계 대상 문서 필터
# function: unwind → group → $out 파이프라인 구성. $out 은 대상 컬렉션을 통째로 교체
# return  : pipeline (list)
# ----------------------
def build_pipeline(tags_field: str, out: str, query: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
    pipeline: List[Dict[str, Any]] = []
    if query:
        pipeline.append({"$match": query})
    pipeline.extend([
        {"$unwind": f"${tags_field}"},
        {"$group": {"_id": f"${tags_field}", "value": {"$sum": 1}}},
        {"$out": out},
    ])
    return pipeline


def _split_options(options: Optional[Dict[str, Any]]) -> Tuple[Optional[Dict[str, Any]], Dict[str, Any]]:
    # "query" 는 $match 로, 나머지는 aggregate() 인자로 그대로 전달
    kwargs = dict(options or {})
    query = kwargs.pop("query", None)
    # 결과 컬렉션은 항상 <collection>_tags_aggregation (조회 쪽이 이 이름만 읽음)
    if "out" in kwargs:
        logger.warning(f"[TAG] aggregation_options 의 out 무시: {kwargs.pop('out')}")
    return query, kwargs


# ----------------------
# param   : collection - 원본 문서 컬렉션 (pymongo)
# param   : tags_field - 태그 필드 이름
# param   : out - 집계 컬렉션 이름
# param   : options - aggregation_options (query / allowDiskUse / maxTimeMS 등)
# function: 태그 집계 전체 재계산 후 집계 컬렉션 교체
# return  : None
# ----------------------
def aggregate_tags(collection: Collection, tags_field: str, out: str, options: Optional[Dict[str, Any]] = None):
    query, kwargs = _split_options(options)
    pipeline = build_pipeline(tags_field, out, query)
    try:
        collection.aggregate(pipeline, **kwargs)
    except PyMongoError as e:
        logger.exception(f"[AGGREGATE] 태그 집계 실패: {collection.name} → {out}")
        raise AggregationFailed(out, str(e)) from e
    logger.info(f"[AGGREGATE] 태그 집계 완료: {collection.name}.{tags_field} → {out}")


# ----------------------
# param   : database - pymongo DB
# param   : out - 집계 컬렉션 이름
# function: 집계된 태그를 사전순으로 조회
# return  : List[TagWeight]
# ----------------------
def load_tag_weights(database: Database, out: str) -> List[TagWeight]:
    cursor = database[out].find().sort("_id", 1)
    return [TagWeight(**doc) for doc in cursor]


def list_tags(database: Database, out: str) -> List[str]:
    return [weight.tag for weight in load_tag_weights(database, out)]


def list_tags_with_weight(database: Database, out: str) -> List[Tuple[str, int]]:
    return [weight.as_tuple() for weight in load_tag_weights(database, out)]


# ----------------------
# param   : db - motor DB 세션
# param   : collection_name - 원본 문서 컬렉션 이름
# param   : tags_field / out / options - aggregate_tags 와 동일
# function: 비동기 motor 버전 태그 집계
# return  : None
# ----------------------
async def aggregate_tags_async(
    db: AsyncIOMotorDatabase,
    collection_name: str,
    tags_field: str,
    out: str,
    options: Optional[Dict[str, Any]] = None,
):
    query, kwargs = _split_options(options)
    pipeline = build_pipeline(tags_field, out, query)
    try:
        cursor = db[collection_name].aggregate(pipeline, **kwargs)
        # $out 은 커서를 소비해야 실행됨
        await cursor.to_list(length=None)
    except PyMongoError as e:
        logger.exception(f"[AGGREGATE] 태그 집계 실패 (async): {collection_name} → {out}")
        raise AggregationFailed(out, str(e)) from e
    logger.info(f"[AGGREGATE] 태그 집계 완료 (async): {collection_name}.{tags_field} → {out}")


async def load_tag_weights_async(db: AsyncIOMotorDatabase, out: str) -> List[TagWeight]:
    cursor = db[out].find().sort("_id", 1)
    docs = await cursor.to_list(length=None)
    return [TagWeight(**doc) for doc in docs]


async def list_tags_async(db: AsyncIOMotorDatabase, out: str) -> List[str]:
    return [weight.tag for weight in await load_tag_weights_async(db, out)]


async def list_tags_with_weight_async(db: AsyncIOMotorDatabase, out: str) -> List[Tuple[str, int]]:
    return [weight.as_tuple() for weight in await load_tag_weights_async(db, out)]
