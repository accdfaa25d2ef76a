"""
기본 Retriever 구현체
=========================
Author: Jin
Date: 2026.03.02
Version: 2.0

Description:
임베딩 모델과 벡터 저장소를 조합한 기본 검색기 구현체입니다.
쿼리를 임베딩하고 벡터 저장소에서 유사한 청크를 검색합니다.
임베딩 API 호출은 스레드에서 실행하여 이벤트 루프를 막지 않습니다.
"""
from typing import List, Dict, Any, Optional

from base.rag.retriever_base import RetrieverBase, SearchResult
from base.rag.embedding_base import EmbeddingBase
from base.rag.vector_store_base import VectorStoreBase
from config.logging_config import logger


class Retriever(RetrieverBase):
    """기본 검색기 구현체"""

    def __init__(
        self,
        embedder: EmbeddingBase,
        vector_store: VectorStoreBase,
        top_k: int = 4,
        name: Optional[str] = None
    ):
        """
        Args:
            embedder: 임베딩 모델
            vector_store: 벡터 저장소
            top_k: 반환할 결과 개수
            name: 검색기 이름
        """
        super().__init__(top_k=top_k, name=name)

        self.embedder = embedder
        self.vector_store = vector_store

        if self.embedder.dimension != self.vector_store.dimension:
            logger.warning(
                f"[{self.name}] 임베더 차원({self.embedder.dimension})과 "
                f"벡터 저장소 차원({self.vector_store.dimension})이 일치하지 않습니다."
            )

        logger.info(
            f"[{self.name}] 검색기 초기화 완료 "
            f"(embedder={embedder.model_name}, store={vector_store.name}, top_k={top_k})"
        )

    @property
    def document_count(self) -> int:
        return self.vector_store.vector_count

    async def retrieve(
        self,
        query: str,
        top_k: Optional[int] = None,
        filter_dict: Optional[Dict[str, Any]] = None
    ) -> List[SearchResult]:
        """
        쿼리에 대한 관련 청크 검색

        Args:
            query: 검색 쿼리
            top_k: 반환할 결과 개수 (None이면 기본값 사용)
            filter_dict: 메타데이터 필터링 조건

        Returns:
            검색 결과 리스트
        """
        if not query or not query.strip():
            logger.warning(f"[{self.name}] 빈 쿼리가 입력되었습니다.")
            return []

        k = top_k if top_k is not None else self.top_k

        logger.debug(f"[{self.name}] 쿼리 임베딩 중: '{query[:50]}...'")
        query_vector = await self.embedder.aembed_text(query)

        raw_results = self.vector_store.search(
            query_vector=query_vector,
            top_k=k,
            filter_dict=filter_dict
        )

        search_results = [
            SearchResult(
                content=metadata.get('content', metadata.get('text', '')),
                score=score,
                metadata=metadata,
                doc_id=doc_id
            )
            for doc_id, score, metadata in raw_results
        ]

        self.search_count += 1
        logger.info(f"[{self.name}] 검색 완료: {len(search_results)}개 결과 (검색 횟수: {self.search_count})")

        return search_results

    async def add_documents(
        self,
        contents: List[str],
        metadata_list: Optional[List[Dict[str, Any]]] = None
    ) -> List[str]:
        """
        문서를 임베딩하여 벡터 저장소에 추가

        Args:
            contents: 문서 내용 리스트
            metadata_list: 각 문서의 메타데이터 리스트

        Returns:
            추가된 문서의 ID 리스트
        """
        if not contents:
            logger.warning(f"[{self.name}] 추가할 문서가 없습니다.")
            return []

        metadata_list = [dict(item) for item in (metadata_list or [{} for _ in contents])]
        for idx, content in enumerate(contents):
            metadata_list[idx].setdefault('content', content)

        logger.info(f"[{self.name}] {len(contents)}개 문서 임베딩 중...")
        vectors = await self.embedder.aembed_texts(contents)

        doc_ids = self.vector_store.add_vectors(vectors=vectors, metadata=metadata_list)
        logger.info(f"[{self.name}] 문서 추가 완료: {len(doc_ids)}개")

        return doc_ids
