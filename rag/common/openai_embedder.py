"""
OpenAI 임베딩 구현체
=========================
Author: Jin
Date: 2026.03.02
Version: 1.1

Description:
OpenAI의 임베딩 API를 사용하는 구현체입니다.
text-embedding-3-small, text-embedding-3-large 등의 모델을 지원합니다.
"""
from typing import Any, Dict, List, Optional

from openai import OpenAI

from base.rag.embedding_base import EmbeddingBase
from base.exceptions import ConfigurationError
from config.logging_config import logger


class OpenAIEmbedder(EmbeddingBase):
    """OpenAI 임베딩 구현체"""

    DEFAULT_DIMENSIONS = {
        "text-embedding-3-small": 1536,
        "text-embedding-3-large": 3072,
        "text-embedding-ada-002": 1536
    }

    def __init__(
        self,
        model_name: str = "text-embedding-3-small",
        api_key: Optional[str] = None,
        dimension: Optional[int] = None,
        client: Optional[OpenAI] = None
    ):
        """
        OpenAI 임베딩 모델 초기화

        Args:
            model_name: 사용할 OpenAI 임베딩 모델명
            api_key: OpenAI API 키
            dimension: 임베딩 차원 (text-embedding-3 모델은 차원 축소 지원)
            client: 주입할 OpenAI 클라이언트

        Raises:
            ConfigurationError: API 키와 클라이언트가 모두 없는 경우
        """
        if dimension is None:
            dimension = self.DEFAULT_DIMENSIONS.get(model_name, 1536)

        super().__init__(model_name=model_name, dimension=dimension)

        if client is None and not api_key:
            raise ConfigurationError("OpenAI 임베딩에는 OPENAI_APIKEY가 필요합니다.")

        self.client = client or OpenAI(api_key=api_key, max_retries=0)

        logger.info(f"[{self.model_name}] OpenAI 임베더 초기화 완료 (dimension={self.dimension})")

    def _request_kwargs(self) -> Dict[str, Any]:
        kwargs: Dict[str, Any] = {"model": self.model_name}
        if "text-embedding-3" in self.model_name:
            kwargs["dimensions"] = self.dimension
        return kwargs

    def embed_text(self, text: str) -> List[float]:
        """
        단일 텍스트를 벡터로 변환

        Args:
            text: 임베딩할 텍스트

        Returns:
            임베딩 벡터 (리스트 형태)
        """
        if not text or not text.strip():
            logger.warning(f"[{self.model_name}] 빈 텍스트가 입력되었습니다. 0 벡터를 반환합니다.")
            return [0.0] * self.dimension

        try:
            response = self.client.embeddings.create(input=text, **self._request_kwargs())
        except Exception as e:
            logger.error(f"[{self.model_name}] 임베딩 실패: {str(e)}")
            raise

        self.embedding_count += 1
        return response.data[0].embedding

    def embed_texts(self, texts: List[str], batch_size: int = 500) -> List[List[float]]:
        """
        여러 텍스트를 벡터로 변환 (배치 처리)

        Args:
            texts: 임베딩할 텍스트 리스트
            batch_size: 한 번에 처리할 배치 크기 (최대 2048)

        Returns:
            입력 순서와 같은 임베딩 벡터 리스트 (빈 텍스트는 0 벡터)
        """
        if not texts:
            logger.warning(f"[{self.model_name}] 빈 텍스트 리스트가 입력되었습니다.")
            return []

        # 빈 텍스트 필터링 및 인덱스 추적
        valid_indices = [idx for idx, text in enumerate(texts) if text and text.strip()]
        valid_texts = [texts[idx] for idx in valid_indices]

        embeddings = [[0.0] * self.dimension for _ in texts]
        if not valid_texts:
            return embeddings

        total_batches = (len(valid_texts) + batch_size - 1) // batch_size
        logger.info(f"[{self.model_name}] 총 {len(valid_texts)}개 텍스트 임베딩 시작 ({total_batches}개 배치)")

        all_embeddings: List[List[float]] = []
        try:
            for batch_idx in range(0, len(valid_texts), batch_size):
                batch_texts = valid_texts[batch_idx:batch_idx + batch_size]
                response = self.client.embeddings.create(input=batch_texts, **self._request_kwargs())
                all_embeddings.extend(item.embedding for item in response.data)
                logger.debug(
                    f"[{self.model_name}] 배치 {batch_idx // batch_size + 1}/{total_batches} 완료"
                )
        except Exception as e:
            logger.error(f"[{self.model_name}] 배치 임베딩 실패: {str(e)}")
            raise

        # 결과를 원래 순서에 맞게 재구성
        for position, valid_idx in enumerate(valid_indices):
            embeddings[valid_idx] = all_embeddings[position]

        self.embedding_count += len(valid_texts)
        logger.info(f"[{self.model_name}] 전체 임베딩 완료: {len(valid_texts)}개 텍스트 처리됨")

        return embeddings
