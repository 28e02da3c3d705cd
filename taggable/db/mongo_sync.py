# ----------------------
# file   : taggable/db/mongo_sync.py
# function: pymongo 기반 동기 MongoDB 클라이언트
# ----------------------

from typing import Optional
from pymongo import MongoClient
from pymongo.database import Database
from dotenv import load_dotenv
import os

load_dotenv()

MONGO_URI = os.getenv("MONGO_URI", "mongodb://localhost:27017")
MONGO_DB_NAME = os.getenv("MONGO_DB_NAME", "taggable_db")

client = MongoClient(MONGO_URI)
sync_db = client[MONGO_DB_NAME]

# ----------------------
# Document 클래스들이 사용하는 DB 참조 관리 (테스트에서 교체 가능)
# ----------------------
_database: Optional[Database] = None


def set_database(database: Optional[Database]):
    global _database
    _database = database


def get_database() -> Database:
    return _database if _database is not None else sync_db
