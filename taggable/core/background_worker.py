# ----------------------
# file   : taggable/core/background_worker.py
# function: 태그 집계를 백그라운드 스레드에서 실행
#           (컬렉션별로 실행 중 1개 + 대기 1개까지만 유지, 나머지 요청은 합침)
# ----------------------

import os
import queue
import threading
from typing import Dict, List, Optional, Set

from loguru import logger

# ----------------------
# 워커 스레드 수
# ----------------------
NUM_WORKERS = int(os.getenv("TAGGABLE_AGGREGATION_WORKERS", "1"))


# ----------------------
# class   : AggregationWorker
# function: 집계 요청 큐 + 워커 스레드 풀
# ----------------------
class AggregationWorker:
    def __init__(self, num_workers: int = NUM_WORKERS):
        self.task_queue = queue.Queue()
        self.lock = threading.Lock()
        self.pending: Set[str] = set()
        self.running_locks: Dict[str, threading.Lock] = {}
        self.threads: List[threading.Thread] = []

        for _ in range(num_workers):
            thread = threading.Thread(target=self._worker_loop, daemon=True)  # 앱 종료 시 자동 종료
            thread.start()
            self.threads.append(thread)

    # ----------------------
    # param   : document_type - aggregate_tags() / aggregation_collection_name() 을 가진 문서 타입
    # function: 집계 요청 등록. 같은 컬렉션 요청이 이미 대기 중이면 합침
    # return  : 새로 큐에 들어갔으면 True
    # ----------------------
    def submit(self, document_type) -> bool:
        key = document_type.aggregation_collection_name()
        with self.lock:
            if key in self.pending:
                logger.debug(f"[WORKER] 대기 중인 집계와 합침: {key}")
                return False
            self.pending.add(key)
            self.running_locks.setdefault(key, threading.Lock())
        self.task_queue.put((key, document_type))
        logger.debug(f"[WORKER] 집계 요청 등록: {key}")
        return True

    # ----------------------
    # function: 큐에서 요청을 꺼내 집계 실행. 같은 컬렉션은 동시에 실행하지 않음
    # ----------------------
    def _worker_loop(self):
        while True:
            key, document_type = self.task_queue.get()
            try:
                with self.lock:
                    run_lock = self.running_locks[key]
                with run_lock:
                    # 실행 시작 시점부터 새 요청은 다시 대기열에 들어갈 수 있음
                    with self.lock:
                        self.pending.discard(key)
                    document_type.aggregate_tags()
                    logger.info(f"[WORKER] 집계 완료: {key}")
            except Exception:
                logger.exception(f"[WORKER] 집계 처리 중 예외 발생: {key}")
            finally:
                self.task_queue.task_done()

    # ----------------------
    # function: 큐에 쌓인 집계가 모두 끝날 때까지 대기
    # ----------------------
    def join(self):
        self.task_queue.join()


# ----------------------
# 글로벌 워커 참조 관리
# ----------------------
_aggregation_worker: Optional[AggregationWorker] = None
_worker_lock = threading.Lock()


def set_aggregation_worker(worker: Optional[AggregationWorker]):
    global _aggregation_worker
    _aggregation_worker = worker


def get_aggregation_worker() -> AggregationWorker:
    global _aggregation_worker
    with _worker_lock:
        if _aggregation_worker is None:
            _aggregation_worker = AggregationWorker()
        return _aggregation_worker


# ----------------------
# function: 서버 시작 시 워커 스레드 미리 생성
# ----------------------
def start_workers():
    worker = get_aggregation_worker()
    logger.info(f"[WORKER] 집계 워커 {len(worker.threads)}개 실행 중")
