"""
Watsonx LLM 구현체
=========================
Author: Jin
Date: 2026.03.02
Version: 1.0

Description:
IBM watsonx.ai 텍스트 생성 REST API를 httpx로 호출하는 구현체입니다.
IBM Cloud API 키를 IAM 액세스 토큰으로 교환한 뒤
/ml/v1/text/generation 엔드포인트에 프롬프트를 전달합니다.
temperature가 0이면 greedy 디코딩을 사용합니다.
"""
import time
from typing import Any, Dict, Optional

import httpx

from base.agent.llm_base import LLMBase
from base.exceptions import ProviderError
from config.logging_config import logger


class LLMWatsonx(LLMBase):
    """watsonx.ai LLM 구현체"""

    IAM_URL = "https://iam.cloud.ibm.com/identity/token"
    API_VERSION = "2023-05-29"

    def __init__(
        self,
        model_name: str = "ibm/granite-13b-instruct-v2",
        api_key: Optional[str] = None,
        project_id: Optional[str] = None,
        base_url: str = "https://us-south.ml.cloud.ibm.com",
        temperature: float = 0.0,
        max_tokens: int = 512,
        request_timeout: float = 30.0,
        max_retries: int = 0,
        client: Optional[httpx.AsyncClient] = None
    ):
        """
        Args:
            model_name: watsonx 모델 ID
            api_key: IBM Cloud API 키
            project_id: watsonx 프로젝트 ID
            base_url: watsonx.ai 리전 엔드포인트
            temperature: 생성 온도
            max_tokens: 최대 생성 토큰 수 (max_new_tokens)
            request_timeout: 호출당 제한 시간(초)
            max_retries: 추가 재시도 횟수
            client: 주입할 HTTP 클라이언트 (테스트용)
        """
        super().__init__(
            model_name=model_name,
            provider="watsonx",
            temperature=temperature,
            max_tokens=max_tokens,
            request_timeout=request_timeout,
            max_retries=max_retries
        )
        self.api_key = api_key
        self.project_id = project_id
        self.base_url = base_url.rstrip("/")
        self.client = client or httpx.AsyncClient(timeout=request_timeout or None)

        self._access_token: Optional[str] = None
        self._token_expires_at: float = 0.0

    def is_available(self) -> bool:
        """
        watsonx 사용 가능 여부 확인

        Returns:
            API 키와 프로젝트 ID가 모두 설정된 경우 True
        """
        return bool(self.api_key and self.project_id)

    async def _get_access_token(self) -> str:
        """IAM 액세스 토큰 발급 (만료 1분 전까지 재사용)"""
        if self._access_token and time.time() < self._token_expires_at - 60:
            return self._access_token

        if not self.api_key:
            raise ProviderError("WATSONX_APIKEY가 설정되지 않았습니다.", provider=self.provider)

        response = await self.client.post(
            self.IAM_URL,
            data={
                "grant_type": "urn:ibm:params:oauth:grant-type:apikey",
                "apikey": self.api_key
            },
            headers={"Accept": "application/json"}
        )
        self._raise_for_status(response, "IAM 토큰 발급")

        payload = response.json()
        self._access_token = payload["access_token"]
        self._token_expires_at = float(payload.get("expiration", time.time() + 3600))
        logger.debug("[LLMWatsonx] IAM 토큰 발급 완료")

        return self._access_token

    async def _invoke(
        self,
        prompt: str,
        system_prompt: Optional[str],
        temperature: float,
        max_tokens: int
    ) -> str:
        token = await self._get_access_token()

        text = f"{system_prompt}\n\n{prompt}" if system_prompt else prompt
        parameters: Dict[str, Any] = {
            "decoding_method": "greedy" if temperature == 0 else "sample",
            "max_new_tokens": max_tokens
        }
        if temperature > 0:
            parameters["temperature"] = temperature

        response = await self.client.post(
            f"{self.base_url}/ml/v1/text/generation",
            params={"version": self.API_VERSION},
            json={
                "model_id": self.model_name,
                "project_id": self.project_id,
                "input": text,
                "parameters": parameters
            },
            headers={
                "Authorization": f"Bearer {token}",
                "Accept": "application/json"
            }
        )
        self._raise_for_status(response, "텍스트 생성")

        results = response.json().get("results") or []
        if not results:
            raise ProviderError(
                "watsonx 응답에 results가 없습니다.",
                provider=self.provider,
                status_code=response.status_code
            )
        return results[0].get("generated_text", "")

    def _raise_for_status(self, response: httpx.Response, action: str) -> None:
        """2xx가 아닌 응답을 ProviderError로 변환"""
        if response.is_success:
            return
        if response.status_code in (401, 403):
            # 인증 실패 시 캐시된 토큰 폐기
            self._access_token = None
        raise ProviderError(
            f"watsonx {action} 실패: {response.text[:200]}",
            provider=self.provider,
            status_code=response.status_code
        )

    async def close(self):
        """
        HTTP 클라이언트 리소스 정리
        """
        await self.client.aclose()
