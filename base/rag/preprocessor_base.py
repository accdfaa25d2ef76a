"""
전처리기 베이스 클래스
=========================
Author: Jin
Date: 2026.03.02
Version: 2.0

Description:
코퍼스 텍스트를 정규화하고 고정 크기 창(window)으로 나누는 전처리기의 베이스 클래스입니다.
창 크기와 겹침은 생성 시점에 검증되며, 구현체는 정규화와 분할 방식만 정의합니다.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from config.logging_config import logger


@dataclass
class Chunk:
    """코퍼스 조각"""
    content: str
    metadata: Dict[str, Any] = field(default_factory=dict)


class PreprocessorBase(ABC):
    """전처리기 베이스 클래스"""

    def __init__(self, chunk_size: int = 200, chunk_overlap: int = 100, name: Optional[str] = None):
        """
        Args:
            chunk_size: 창 크기 (문자 수)
            chunk_overlap: 이웃한 창이 겹치는 문자 수

        Raises:
            ValueError: chunk_size가 0 이하이거나 겹침이 창 크기 이상인 경우
        """
        if chunk_size <= 0:
            raise ValueError(f"chunk_size는 0보다 커야 합니다: {chunk_size}")
        if not 0 <= chunk_overlap < chunk_size:
            raise ValueError(
                f"chunk_overlap({chunk_overlap})은 0 이상이고 chunk_size({chunk_size})보다 작아야 합니다."
            )

        self.chunk_size = chunk_size
        self.chunk_overlap = chunk_overlap
        self.name = name or self.__class__.__name__

    @abstractmethod
    def preprocess(self, text: str) -> str:
        """원문 정규화"""

    @abstractmethod
    def split_text(self, text: str) -> List[str]:
        """정규화된 텍스트를 창 단위로 분할"""

    def create_chunks(self, text: str, metadata: Optional[Dict[str, Any]] = None) -> List[Chunk]:
        """
        정규화 → 분할 → 메타데이터 부착

        각 청크 메타데이터에는 chunk_index(0부터)와 chunk_size가 추가됩니다.
        """
        pieces = self.split_text(self.preprocess(text))

        chunks = [
            Chunk(content=piece, metadata={**(metadata or {}), 'chunk_index': idx, 'chunk_size': len(piece)})
            for idx, piece in enumerate(pieces)
        ]
        logger.info(f"[{self.name}] 청크 생성 완료: {len(chunks)}개")

        return chunks

    def __repr__(self) -> str:
        return f"{self.name}[size={self.chunk_size}, overlap={self.chunk_overlap}]"
