"""
예외 계층 정의
=========================
Author: Jin
Date: 2026.03.02
Version: 1.0

Description:
프로젝트 전역에서 사용하는 예외 클래스입니다.
예상 가능한 실패(제공자 오류, Tool 실패, 파싱 실패)는 호출 경계에서
자리표시 값이나 고정 실패 메시지로 변환되므로, 각 예외는 로그에 남길
구조화된 컨텍스트(kind, provider, status, tool)를 함께 보관합니다.
"""
from typing import Any, Dict, Optional, Sequence


class MyGPTError(Exception):
    """프로젝트 예외 베이스 클래스"""

    def log_context(self) -> Dict[str, Any]:
        """로그용 구조화 컨텍스트"""
        return {"kind": self.__class__.__name__}

    def to_log(self) -> str:
        """
        로그 한 줄용 key=value 문자열

        Returns:
            'kind=ProviderError provider=openai status=401' 형태의 문자열
        """
        return " ".join(
            f"{key}={value}" for key, value in self.log_context().items() if value is not None
        )


class ConfigurationError(MyGPTError):
    """설정 누락/오류 - 시작 시점에 치명적"""


class ProviderError(MyGPTError):
    """원격 LLM 호출 실패"""

    def __init__(
        self,
        message: str,
        provider: Optional[str] = None,
        status_code: Optional[int] = None
    ):
        super().__init__(message)
        self.provider = provider
        self.status_code = status_code

    def log_context(self) -> Dict[str, Any]:
        context = super().log_context()
        context.update({"provider": self.provider, "status": self.status_code})
        return context


class ModelTimeoutError(ProviderError):
    """원격 LLM이 제한 시간 내에 응답하지 않음"""


class ToolInvocationError(MyGPTError):
    """단일 Tool 실행 실패"""

    def __init__(self, tool_name: str, message: str):
        super().__init__(message)
        self.tool_name = tool_name

    def log_context(self) -> Dict[str, Any]:
        context = super().log_context()
        context["tool"] = self.tool_name
        return context


class PromptParseError(MyGPTError):
    """Tool 선택 응답이 올바른 JSON이 아님"""

    def __init__(self, message: str, raw_text: str):
        super().__init__(message)
        self.raw_text = raw_text


class MissingVariableError(MyGPTError):
    """프롬프트 템플릿 변수 누락"""

    def __init__(self, template_id: str, missing: Sequence[str]):
        super().__init__(f"템플릿 '{template_id}'에 필요한 변수가 없습니다: {', '.join(missing)}")
        self.template_id = template_id
        self.missing = list(missing)

    def log_context(self) -> Dict[str, Any]:
        context = super().log_context()
        context.update({"template": self.template_id, "missing": ",".join(self.missing)})
        return context
