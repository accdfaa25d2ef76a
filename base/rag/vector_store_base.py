"""
벡터 저장소 베이스 클래스
=========================
Author: Jin
Date: 2026.03.02
Version: 2.0

Description:
고정 차원 벡터를 ID, 메타데이터와 함께 보관하고 유사도로 조회하는 저장소 인터페이스입니다.
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Tuple

# (ID, 유사도, 메타데이터)
VectorHit = Tuple[str, float, Dict[str, Any]]


class VectorStoreBase(ABC):
    """벡터 저장소 베이스 클래스"""

    def __init__(self, dimension: int, name: Optional[str] = None):
        self.dimension = dimension
        self.name = name or self.__class__.__name__
        self.vector_count = 0

    @abstractmethod
    def add_vectors(
        self,
        vectors: List[List[float]],
        metadata: Optional[List[Dict[str, Any]]] = None,
        ids: Optional[List[str]] = None
    ) -> List[str]:
        """
        벡터 적재

        Args:
            vectors: dimension 길이의 벡터들
            metadata: 벡터별 메타데이터 (없으면 빈 dict)
            ids: 벡터별 ID (없으면 자동 생성)

        Returns:
            적재된 ID 리스트 (입력 순서)
        """

    @abstractmethod
    def search(
        self,
        query_vector: List[float],
        top_k: int = 5,
        filter_dict: Optional[Dict[str, Any]] = None
    ) -> List[VectorHit]:
        """유사도 상위 top_k개를 내림차순으로 반환"""

    @abstractmethod
    def delete(self, ids: List[str]) -> bool:
        """ID로 삭제, 하나라도 지워졌으면 True"""

    def __repr__(self) -> str:
        return f"{self.name}[dim={self.dimension}, count={self.vector_count}]"
