"""
인메모리 벡터 저장소
=========================
Author: Jin
Date: 2026.03.02
Version: 1.0

Description:
numpy 배열에 임베딩을 보관하고 코사인 유사도로 검색하는 벡터 저장소입니다.
코퍼스는 프로세스 시작 시 한 번 적재되며 이후에는 읽기 전용으로 사용됩니다.
"""
import uuid
from typing import Any, Dict, List, Optional

import numpy as np

from base.rag.vector_store_base import VectorHit, VectorStoreBase
from config.logging_config import logger


class MemoryVectorStore(VectorStoreBase):
    """numpy 기반 인메모리 벡터 저장소"""

    def __init__(self, dimension: int, name: Optional[str] = None):
        super().__init__(dimension=dimension, name=name or "MemoryVectorStore")

        self._ids: List[str] = []
        self._metadata: List[Dict[str, Any]] = []
        self._matrix = np.empty((0, dimension), dtype=np.float32)

        logger.info(f"[{self.name}] 인메모리 저장소 초기화 완료 (dim={dimension})")

    def add_vectors(
        self,
        vectors: List[List[float]],
        metadata: Optional[List[Dict[str, Any]]] = None,
        ids: Optional[List[str]] = None
    ) -> List[str]:
        """
        벡터를 저장소에 추가

        Raises:
            ValueError: 차원 또는 길이가 맞지 않는 경우
        """
        if not vectors:
            return []

        matrix = np.asarray(vectors, dtype=np.float32)
        if matrix.ndim != 2 or matrix.shape[1] != self.dimension:
            raise ValueError(
                f"[{self.name}] 벡터 차원 불일치: 기대={self.dimension}, 실제={matrix.shape}"
            )

        metadata = metadata or [{} for _ in vectors]
        ids = ids or [str(uuid.uuid4()) for _ in vectors]
        if not len(metadata) == len(ids) == len(vectors):
            raise ValueError(f"[{self.name}] vectors/metadata/ids 길이가 다릅니다.")

        self._matrix = np.vstack([self._matrix, matrix])
        self._metadata.extend(dict(item) for item in metadata)
        self._ids.extend(ids)
        self.vector_count = len(self._ids)

        logger.debug(f"[{self.name}] 벡터 {len(ids)}개 추가 (총 {self.vector_count}개)")
        return list(ids)

    def search(
        self,
        query_vector: List[float],
        top_k: int = 5,
        filter_dict: Optional[Dict[str, Any]] = None
    ) -> List[VectorHit]:
        """
        코사인 유사도 상위 top_k 검색

        Returns:
            유사도 내림차순 (ID, 점수, 메타데이터) 리스트
        """
        if self.vector_count == 0 or top_k <= 0:
            return []

        query = np.asarray(query_vector, dtype=np.float32)
        query_norm = np.linalg.norm(query)
        if query_norm == 0:
            return []

        row_norms = np.linalg.norm(self._matrix, axis=1)
        # 0 벡터 행은 유사도 0으로 처리
        safe_norms = np.where(row_norms == 0, 1.0, row_norms)
        scores = (self._matrix @ query) / (safe_norms * query_norm)
        scores = np.where(row_norms == 0, 0.0, scores)

        candidates = [
            idx for idx in range(self.vector_count)
            if not filter_dict or all(self._metadata[idx].get(k) == v for k, v in filter_dict.items())
        ]
        candidates.sort(key=lambda idx: float(scores[idx]), reverse=True)

        return [
            (self._ids[idx], float(scores[idx]), dict(self._metadata[idx]))
            for idx in candidates[:top_k]
        ]

    def delete(self, ids: List[str]) -> bool:
        """
        벡터 삭제

        Returns:
            하나라도 삭제되었으면 True
        """
        targets = set(ids)
        keep = [idx for idx, doc_id in enumerate(self._ids) if doc_id not in targets]
        removed = self.vector_count - len(keep)

        self._matrix = self._matrix[keep] if keep else np.empty((0, self.dimension), dtype=np.float32)
        self._ids = [self._ids[idx] for idx in keep]
        self._metadata = [self._metadata[idx] for idx in keep]
        self.vector_count = len(self._ids)

        return removed > 0
