# taggable/main.py

import importlib
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI

from taggable.api import tags
from taggable.core import background_worker
from taggable.utils.logger import logger


# ----------------------
# function: TAGGABLE_MODELS 에 지정된 모듈을 import 해서 문서 타입 등록
#           (예: TAGGABLE_MODELS="blog.models,shop.models")
# ----------------------
def load_models():
    modules = os.getenv("TAGGABLE_MODELS", "")
    for module_name in filter(None, (name.strip() for name in modules.split(","))):
        importlib.import_module(module_name)
        logger.info(f"[INIT] 문서 모듈 로드: {module_name}")


# ----------------------
# 모델 로드 및 백그라운드 집계 워커 시작 (서버 시작 시)
# ----------------------
@asynccontextmanager
async def lifespan(app: FastAPI):
    load_models()
    logger.info("[INIT] 집계 워커 초기화 시작")
    background_worker.start_workers()
    logger.info("[INIT] 집계 워커 초기화 완료")
    yield


app = FastAPI(lifespan=lifespan)

# ----------------------
# function: API 라우터 등록
# ----------------------
app.include_router(tags.router, prefix="/api/tags")
