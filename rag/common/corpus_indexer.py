"""
코퍼스 인덱서
=========================
Author: Jin
Date: 2026.03.02
Version: 1.0

Description:
정적 텍스트 코퍼스 파일을 읽어 청크로 나누고 임베딩하여 검색기에 적재하는 파이프라인입니다.
서버 시작 시 한 번 실행됩니다.
"""
from pathlib import Path
from typing import Any, Dict, Optional

from base.rag.preprocessor_base import PreprocessorBase
from base.rag.retriever_base import RetrieverBase
from config.logging_config import logger


class CorpusIndexer:
    """텍스트 코퍼스 인덱서"""

    def __init__(
        self,
        retriever: RetrieverBase,
        processor: PreprocessorBase,
        name: Optional[str] = None
    ):
        """
        Args:
            retriever: 문서를 적재할 검색기
            processor: 청크 분할 전처리기
            name: 인덱서 이름
        """
        self.retriever = retriever
        self.processor = processor
        self.name = name or "CorpusIndexer"

    async def index_file(self, filepath: str, encoding: str = "utf-8") -> Dict[str, Any]:
        """
        코퍼스 파일 인덱싱

        Args:
            filepath: UTF-8 텍스트 파일 경로
            encoding: 파일 인코딩

        Returns:
            {'source', 'chunks_count', 'doc_ids'}

        Raises:
            FileNotFoundError: 파일이 없는 경우
        """
        path = Path(filepath)
        if not path.is_file():
            raise FileNotFoundError(f"코퍼스 파일을 찾을 수 없습니다: {filepath}")

        logger.info(f"[{self.name}] 코퍼스 인덱싱 시작: {path}")
        text = path.read_text(encoding=encoding)

        return await self.index_text(text, source=path.name)

    async def index_text(self, text: str, source: str = "inline") -> Dict[str, Any]:
        """
        텍스트 인덱싱

        Args:
            text: 코퍼스 원문
            source: 메타데이터에 남길 출처 이름

        Returns:
            {'source', 'chunks_count', 'doc_ids'}
        """
        chunks = self.processor.create_chunks(text, metadata={'source': source})
        if not chunks:
            logger.warning(f"[{self.name}] 인덱싱할 청크가 없습니다: {source}")
            return {'source': source, 'chunks_count': 0, 'doc_ids': []}

        doc_ids = await self.retriever.add_documents(
            contents=[chunk.content for chunk in chunks],
            metadata_list=[chunk.metadata for chunk in chunks]
        )

        logger.info(f"[{self.name}] 코퍼스 인덱싱 완료: {len(doc_ids)}개 청크 ({source})")
        return {'source': source, 'chunks_count': len(doc_ids), 'doc_ids': doc_ids}
