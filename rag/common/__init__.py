"""
RAG Common 모듈
=========================
Author: Jin
Date: 2026.03.02
Version: 1.1

Description:
코퍼스 검색 증강의 공통 구현체들을 제공하는 모듈입니다.
임베딩, 인메모리 벡터 저장소, 검색기, 전처리기, 코퍼스 인덱서를 포함합니다.
"""

# 임베딩 구현체
from rag.common.openai_embedder import OpenAIEmbedder

# 저장소, 검색기, 전처리기
from rag.common.memory_vector_store import MemoryVectorStore
from rag.common.retriever import Retriever
from rag.common.processor import Processor
from rag.common.corpus_indexer import CorpusIndexer


__all__ = [
    # 임베딩
    'OpenAIEmbedder',

    # 저장 및 검색
    'MemoryVectorStore',
    'Retriever',
    'Processor',
    'CorpusIndexer',
]
