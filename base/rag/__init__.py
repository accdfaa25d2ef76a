"""
코퍼스 검색 인터페이스
=========================
Author: Jin
Date: 2026.03.02
Version: 2.0

Description:
corpus 답변 모드가 사용하는 임베딩, 전처리, 벡터 저장소, 검색기 인터페이스입니다.
"""

from base.rag.embedding_base import EmbeddingBase
from base.rag.preprocessor_base import PreprocessorBase, Chunk
from base.rag.vector_store_base import VectorStoreBase, VectorHit
from base.rag.retriever_base import RetrieverBase, SearchResult


__all__ = [
    'EmbeddingBase',
    'PreprocessorBase',
    'VectorStoreBase',
    'RetrieverBase',
    'Chunk',
    'SearchResult',
    'VectorHit',
]
