"""
서비스 팩토리 클래스
=========================
Author: Jin
Date: 2026.03.02
Version: 2.0

Description:
AnswerService와 그 의존성(LLM, Tool 레지스트리, 코퍼스 검색기)을 조립하는 팩토리 클래스입니다.
Tool 레지스트리는 조립이 끝나면 동결되어 요청 처리 중에는 읽기 전용으로만 쓰입니다.
"""
from typing import Optional

from base.agent.llm_base import LLMBase
from base.rag.retriever_base import RetrieverBase

from factories.llm_factory import LLMFactory
from models.answer_model import AnswerMode
from rag.common import CorpusIndexer, MemoryVectorStore, OpenAIEmbedder, Processor, Retriever
from services.answer.answer_service import AnswerService
from tools.tool_registry import ToolRegistry
from tools.wikipedia.wikipedia_tool import WikipediaTool

from config.settings import Settings, settings as default_settings
from config.logging_config import logger


class ServiceFactory:
    """서비스 조립 팩토리"""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or default_settings
        self.llm_factory = LLMFactory(self.settings)

    def create_registry(self) -> ToolRegistry:
        """
        기본 Tool 레지스트리 생성 (동결됨)

        Returns:
            Wikipedia Tool이 등록된 읽기 전용 레지스트리
        """
        registry = ToolRegistry()
        registry.register_tool(
            WikipediaTool(
                top_k=self.settings.wikipedia_top_k,
                max_content_length=self.settings.wikipedia_max_content_length
            )
        )
        return registry.freeze()

    async def create_retriever(self) -> Optional[RetrieverBase]:
        """
        코퍼스 검색기 생성 및 인덱싱

        CORPUS_PATH가 없으면 None을 반환합니다.

        Returns:
            코퍼스가 적재된 검색기 또는 None
        """
        if not self.settings.corpus_enabled:
            return None

        embedder = OpenAIEmbedder(
            model_name=self.settings.embedding_model,
            api_key=self.settings.openai_api_key
        )
        retriever = Retriever(
            embedder=embedder,
            vector_store=MemoryVectorStore(dimension=embedder.dimension),
            top_k=self.settings.retrieval_top_k
        )
        processor = Processor(
            chunk_size=self.settings.chunk_size,
            chunk_overlap=self.settings.chunk_overlap
        )

        await CorpusIndexer(retriever, processor).index_file(self.settings.corpus_path)
        return retriever

    async def create_answer_service(self, llm: Optional[LLMBase] = None) -> AnswerService:
        """
        AnswerService 조립

        Args:
            llm: 사용할 LLM (None이면 설정에 따라 생성)

        Returns:
            조립된 AnswerService
        """
        llm = llm or self.llm_factory.create_llm()
        registry = self.create_registry()
        retriever = await self.create_retriever()

        service = AnswerService(
            llm=llm,
            registry=registry,
            retriever=retriever,
            default_mode=AnswerMode(self.settings.answer_mode),
            retrieval_top_k=self.settings.retrieval_top_k
        )
        logger.info(
            f"AnswerService 조립 완료: tools={registry.get_all_tool_names()}, "
            f"corpus={'on' if retriever is not None else 'off'}"
        )
        return service
