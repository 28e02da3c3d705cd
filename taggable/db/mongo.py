# ----------------------
# file   : taggable/db/mongo.py
# function: MongoDB 비동기(motor) 연결 객체 생성
# ----------------------

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from dotenv import load_dotenv
import os

from taggable.utils.logger import logger

# .env 로드
load_dotenv()

# ----------------------
# param   : MONGO_URI - 환경변수에서 가져옴 (기본값 포함)
# param   : MONGO_DB_NAME - 사용할 DB 이름
# function: MongoDB 클라이언트 및 DB 객체 생성
# return  : db (AsyncIOMotorDatabase)
# ----------------------
MONGO_URI = os.getenv("MONGO_URI", "mongodb://localhost:27017")
MONGO_DB_NAME = os.getenv("MONGO_DB_NAME", "taggable_db")

logger.debug(f"[DB] motor 클라이언트 생성: db={MONGO_DB_NAME}")
client = AsyncIOMotorClient(MONGO_URI)
db = client[MONGO_DB_NAME]


# ----------------------
# function: FastAPI 의존성 주입용 DB 반환 (테스트에서 override)
# return  : AsyncIOMotorDatabase
# ----------------------
def get_db() -> AsyncIOMotorDatabase:
    return db
