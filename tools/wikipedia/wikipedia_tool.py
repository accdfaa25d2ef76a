"""
Wikipedia Search Tool
=========================
Author: Jin
Date: 2026.03.02
Version: 1.0

Description:
MediaWiki API를 사용하여 질문과 관련된 Wikipedia 문서 요약을 가져오는 도구입니다.
검색 상위 top_k개 문서의 도입부를 'Page: / Summary:' 형식으로 이어 붙이고,
전체 길이를 max_content_length로 자릅니다.
"""
from typing import Any, Dict, Optional, Type

import httpx
from langchain_core.callbacks import (
    AsyncCallbackManagerForToolRun,
    CallbackManagerForToolRun,
)
from langchain_core.tools import BaseTool
from pydantic import BaseModel, Field

from config.logging_config import logger
from models.tool_model import ToolParameter, ToolSchema

NO_RESULT_MESSAGE = "No good Wikipedia Search Result was found"


class WikipediaInput(BaseModel):
    """Wikipedia Tool 입력"""
    question: str = Field(description="The search query for Wikipedia")


class WikipediaTool(BaseTool):
    """Wikipedia 검색 Tool"""

    name: str = "callWikipediaTool"
    description: str = (
        "Search Wikipedia for factual information about people, places, "
        "organizations, events and general topics."
    )
    args_schema: Type[BaseModel] = WikipediaInput

    api_url: str = "https://en.wikipedia.org/w/api.php"
    top_k: int = 3
    max_content_length: int = 4000
    timeout: float = 10.0
    client: Any = None

    def __init__(
        self,
        top_k: int = 3,
        max_content_length: int = 4000,
        client: Optional[httpx.AsyncClient] = None,
        **kwargs: Any
    ):
        """
        Tool 초기화

        Args:
            top_k: 가져올 최대 문서 수
            max_content_length: 결과 텍스트 최대 길이
            client: 주입할 비동기 HTTP 클라이언트 (테스트용)
        """
        super().__init__(top_k=top_k, max_content_length=max_content_length, **kwargs)
        self.client = client
        logger.info(f"[{self.name}] 초기화 완료 (top_k={top_k}, max_len={max_content_length})")

    def _build_params(self, query: str) -> Dict[str, Any]:
        """검색 + 도입부 추출을 한 번에 요청하는 파라미터"""
        return {
            "action": "query",
            "format": "json",
            "formatversion": "2",
            "generator": "search",
            "gsrsearch": query,
            "gsrlimit": self.top_k,
            "prop": "extracts",
            "exintro": 1,
            "explaintext": 1,
            "exlimit": "max",
            "redirects": 1,
        }

    def _format_pages(self, data: Dict[str, Any]) -> str:
        """API 응답을 텍스트 블롭으로 변환"""
        pages = data.get("query", {}).get("pages", [])
        pages = sorted(pages, key=lambda page: page.get("index", 0))

        summaries = [
            f"Page: {page['title']}\nSummary: {page['extract'].strip()}"
            for page in pages
            if page.get("title") and page.get("extract")
        ]
        if not summaries:
            return NO_RESULT_MESSAGE

        return "\n\n".join(summaries)[: self.max_content_length]

    @property
    def _headers(self) -> Dict[str, str]:
        return {"User-Agent": "my-gpt/1.0 (wikipedia tool)"}

    def _run(
        self,
        question: str,
        run_manager: Optional[CallbackManagerForToolRun] = None
    ) -> str:
        """동기 검색 실행"""
        logger.info(f"[{self.name}] 검색 요청: {question}")
        with httpx.Client(timeout=self.timeout) as client:
            response = client.get(self.api_url, params=self._build_params(question), headers=self._headers)
        response.raise_for_status()
        return self._format_pages(response.json())

    async def _arun(
        self,
        question: str,
        run_manager: Optional[AsyncCallbackManagerForToolRun] = None
    ) -> str:
        """비동기 검색 실행"""
        logger.info(f"[{self.name}] 검색 요청: {question}")
        params = self._build_params(question)

        if self.client is not None:
            response = await self.client.get(self.api_url, params=params, headers=self._headers)
        else:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.get(self.api_url, params=params, headers=self._headers)

        response.raise_for_status()
        return self._format_pages(response.json())

    def get_schema(self) -> ToolSchema:
        return ToolSchema(
            name=self.name,
            description=self.description,
            parameters=(
                ToolParameter(
                    name="question",
                    type="string",
                    description="The search query for Wikipedia"
                ),
            )
        )
