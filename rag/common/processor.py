"""
기본 Preprocessor 구현체
=========================
Author: Jin
Date: 2026.03.02
Version: 2.0

Description:
코퍼스 텍스트를 고정 크기 창(window)으로 분할하는 전처리기입니다.
chunk_size 문자 단위로 자르고, 이웃한 청크가 chunk_overlap 문자만큼 겹치도록
(chunk_size - chunk_overlap) 간격으로 창을 이동합니다. 기본값은 200/100입니다.
"""
import re
from typing import List, Optional

from base.rag.preprocessor_base import PreprocessorBase
from config.logging_config import logger


class Processor(PreprocessorBase):
    """고정 크기/겹침 전처리기"""

    def __init__(
        self,
        chunk_size: int = 200,
        chunk_overlap: int = 100,
        name: Optional[str] = None
    ):
        """
        Args:
            chunk_size: 청크 크기 (문자 수)
            chunk_overlap: 청크 간 겹침 크기
            name: 전처리기 이름
        """
        super().__init__(
            chunk_size=chunk_size,
            chunk_overlap=chunk_overlap,
            name=name
        )

        logger.info(
            f"[{self.name}] 전처리기 초기화 완료 "
            f"(chunk_size={chunk_size}, overlap={chunk_overlap})"
        )

    def preprocess(self, text: str) -> str:
        """
        텍스트 전처리 (정제, 정규화 등)

        Args:
            text: 전처리할 텍스트

        Returns:
            전처리된 텍스트
        """
        if not text:
            return ""

        # 1. 특수 제어 문자 제거 (탭/줄바꿈 제외)
        text = re.sub(r'[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]', '', text)

        # 2. 줄 안의 연속 공백을 하나로
        text = re.sub(r'[ \t]+', ' ', text)

        # 3. 세 줄 이상 빈 줄은 문단 구분 하나로
        text = re.sub(r'\n\s*\n+', '\n\n', text)

        return text.strip()

    def split_text(self, text: str) -> List[str]:
        """
        텍스트를 고정 크기 청크로 분할

        Args:
            text: 분할할 텍스트

        Returns:
            분할된 텍스트 청크 리스트
        """
        if not text:
            return []

        step = self.chunk_size - self.chunk_overlap
        chunks = []

        for start in range(0, len(text), step):
            chunk = text[start:start + self.chunk_size]
            if chunk.strip():
                chunks.append(chunk)
            # 마지막 창이 텍스트 끝에 닿으면 중단
            if start + self.chunk_size >= len(text):
                break

        logger.debug(f"[{self.name}] 텍스트 분할 완료: {len(chunks)}개 청크")

        return chunks
