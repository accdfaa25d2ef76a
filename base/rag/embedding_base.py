"""
임베딩 베이스 클래스
=========================
Author: Jin
Date: 2026.03.02
Version: 2.0

Description:
텍스트를 고정 차원 벡터로 바꾸는 임베딩 모델의 베이스 클래스입니다.
구현체는 동기 API만 작성하면 되고, 비동기 호출은 스레드로 위임됩니다.
"""
import asyncio
from abc import ABC, abstractmethod
from typing import List, Optional


class EmbeddingBase(ABC):
    """임베딩 베이스 클래스"""

    def __init__(self, model_name: Optional[str] = None, dimension: Optional[int] = None):
        """
        Args:
            model_name: 임베딩 모델 이름
            dimension: 벡터 차원 (벡터 저장소 차원과 같아야 함)
        """
        self.model_name = model_name or self.__class__.__name__
        self.dimension = dimension
        self.embedding_count = 0

    @abstractmethod
    def embed_text(self, text: str) -> List[float]:
        """텍스트 하나를 벡터로 변환"""

    @abstractmethod
    def embed_texts(self, texts: List[str]) -> List[List[float]]:
        """여러 텍스트를 입력 순서대로 벡터로 변환"""

    async def aembed_text(self, text: str) -> List[float]:
        return await asyncio.to_thread(self.embed_text, text)

    async def aembed_texts(self, texts: List[str]) -> List[List[float]]:
        return await asyncio.to_thread(self.embed_texts, texts)

    def __repr__(self) -> str:
        return f"{self.model_name}[dim={self.dimension}]"
