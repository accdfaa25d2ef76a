"""
검색기 베이스 클래스
=========================
Author: Jin
Date: 2026.03.02
Version: 2.0

Description:
질문과 의미가 가까운 코퍼스 청크를 찾아 주는 검색기의 베이스 클래스입니다.
검색과 적재 모두 비동기이며, 임베딩 호출이 이벤트 루프를 막지 않아야 합니다.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class SearchResult:
    """검색된 청크와 유사도"""
    content: str
    score: float
    metadata: Dict[str, Any] = field(default_factory=dict)
    doc_id: Optional[str] = None


class RetrieverBase(ABC):
    """검색기 베이스 클래스"""

    def __init__(self, top_k: int = 4, name: Optional[str] = None):
        self.top_k = top_k
        self.name = name or self.__class__.__name__
        self.search_count = 0

    @abstractmethod
    async def retrieve(
        self,
        query: str,
        top_k: Optional[int] = None,
        filter_dict: Optional[Dict[str, Any]] = None
    ) -> List[SearchResult]:
        """
        쿼리와 가장 가까운 청크 검색

        Args:
            query: 검색 쿼리
            top_k: 결과 개수 (None이면 self.top_k)
            filter_dict: 메타데이터가 모두 일치해야 하는 조건

        Returns:
            유사도 내림차순 결과
        """

    @abstractmethod
    async def add_documents(
        self,
        contents: List[str],
        metadata_list: Optional[List[Dict[str, Any]]] = None
    ) -> List[str]:
        """문서를 임베딩하여 적재하고 ID 리스트 반환"""

    def __repr__(self) -> str:
        return f"{self.name}[top_k={self.top_k}]"
