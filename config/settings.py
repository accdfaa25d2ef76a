"""
프로젝트 설정 관리자
=========================
Author: Jin
Date: 2026.03.02
Version: 2.0

Description:
프로젝트 전체의 설정값들을 관리하는 모듈입니다.
LLM 제공자 인증 정보, 샘플링 옵션, 코퍼스 청킹, Wikipedia 검색 한도,
로그 레벨, 서버 바인딩 등 운영에 필요한 모든 설정을 환경 변수(.env 포함)에서
한 번 읽어 하나의 설정 객체로 모읍니다.
"""
import os
from pathlib import Path
from dataclasses import dataclass, field
from typing import List, Optional

from dotenv import load_dotenv

from base.exceptions import ConfigurationError

load_dotenv()

SUPPORTED_PROVIDERS = ("openai", "watsonx")
SUPPORTED_ANSWER_MODES = ("direct", "corpus", "wikipedia", "tools", "recommendation")


def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value.strip()


def _env_int(name: str, default: int) -> int:
    value = _env(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        raise ConfigurationError(f"{name} 값이 정수가 아닙니다: {value}")


def _env_float(name: str, default: float) -> float:
    value = _env(name)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        raise ConfigurationError(f"{name} 값이 실수가 아닙니다: {value}")


@dataclass
class Settings:
    """환경 변수 기반 설정 클래스"""

    # 기본 경로
    project_root: Path = Path(__file__).parent.parent
    logs_path: Path = project_root / "logs"

    # LLM 제공자
    llm_provider: str = field(default_factory=lambda: (_env("LLM_PROVIDER", "openai") or "openai").lower())
    openai_api_key: Optional[str] = field(default_factory=lambda: _env("OPENAI_APIKEY"))
    openai_model: str = field(default_factory=lambda: _env("OPENAI_MODEL", "gpt-4"))
    watsonx_api_key: Optional[str] = field(default_factory=lambda: _env("WATSONX_APIKEY"))
    watsonx_project_id: Optional[str] = field(default_factory=lambda: _env("WATSONX_PROJECT_ID"))
    watsonx_model_id: str = field(default_factory=lambda: _env("WATSONX_MODEL_ID", "ibm/granite-13b-instruct-v2"))
    watsonx_url: str = field(default_factory=lambda: _env("WATSONX_URL", "https://us-south.ml.cloud.ibm.com"))

    # 샘플링 및 호출 정책 (temperature 0 = greedy)
    temperature: float = field(default_factory=lambda: _env_float("LLM_TEMPERATURE", 0.0))
    max_tokens: int = field(default_factory=lambda: _env_int("LLM_MAX_TOKENS", 512))
    request_timeout: float = field(default_factory=lambda: _env_float("LLM_TIMEOUT", 30.0))
    max_retries: int = field(default_factory=lambda: _env_int("LLM_MAX_RETRIES", 0))

    # 답변 모드
    answer_mode: str = field(default_factory=lambda: (_env("ANSWER_MODE", "tools") or "tools").lower())

    # 코퍼스 / 임베딩
    corpus_path: Optional[str] = field(default_factory=lambda: _env("CORPUS_PATH"))
    chunk_size: int = field(default_factory=lambda: _env_int("CHUNK_SIZE", 200))
    chunk_overlap: int = field(default_factory=lambda: _env_int("CHUNK_OVERLAP", 100))
    retrieval_top_k: int = field(default_factory=lambda: _env_int("RETRIEVAL_TOP_K", 4))
    embedding_model: str = field(default_factory=lambda: _env("EMBEDDING_MODEL", "text-embedding-3-small"))

    # Wikipedia Tool
    wikipedia_top_k: int = field(default_factory=lambda: _env_int("WIKIPEDIA_TOP_K", 3))
    wikipedia_max_content_length: int = field(
        default_factory=lambda: _env_int("WIKIPEDIA_MAX_CONTENT_LENGTH", 4000)
    )

    # 로그 설정
    log_level: str = field(default_factory=lambda: (_env("LOG_LEVEL", "INFO") or "INFO").upper())

    # 서버 설정
    host: str = field(default_factory=lambda: _env("HOST", "0.0.0.0"))
    port: int = field(default_factory=lambda: _env_int("PORT", 3000))

    def validate(self) -> "Settings":
        """
        시작 시점 설정 검증

        누락된 인증 정보나 잘못된 값은 실행 중 제공자 오류가 아니라
        시작 시점의 ConfigurationError로 드러나야 합니다.

        Returns:
            검증된 설정 객체 (체이닝용)

        Raises:
            ConfigurationError: 설정이 올바르지 않은 경우
        """
        problems: List[str] = []

        if self.llm_provider not in SUPPORTED_PROVIDERS:
            problems.append(
                f"알 수 없는 LLM_PROVIDER: {self.llm_provider} (가능: {', '.join(SUPPORTED_PROVIDERS)})"
            )
        if self.llm_provider == "openai" and not self.openai_api_key:
            problems.append("OPENAI_APIKEY가 설정되지 않았습니다.")
        if self.llm_provider == "watsonx":
            if not self.watsonx_api_key:
                problems.append("WATSONX_APIKEY가 설정되지 않았습니다.")
            if not self.watsonx_project_id:
                problems.append("WATSONX_PROJECT_ID가 설정되지 않았습니다.")

        if self.answer_mode not in SUPPORTED_ANSWER_MODES:
            problems.append(
                f"알 수 없는 ANSWER_MODE: {self.answer_mode} (가능: {', '.join(SUPPORTED_ANSWER_MODES)})"
            )
        if self.answer_mode == "corpus":
            if not self.corpus_path:
                problems.append("corpus 모드에는 CORPUS_PATH가 필요합니다.")
            elif not Path(self.corpus_path).is_file():
                problems.append(f"코퍼스 파일을 찾을 수 없습니다: {self.corpus_path}")
            if not self.openai_api_key:
                problems.append("코퍼스 임베딩에는 OPENAI_APIKEY가 필요합니다.")

        if self.chunk_size <= 0:
            problems.append("CHUNK_SIZE는 0보다 커야 합니다.")
        if not 0 <= self.chunk_overlap < self.chunk_size:
            problems.append("CHUNK_OVERLAP은 0 이상이고 CHUNK_SIZE보다 작아야 합니다.")
        if self.max_retries < 0:
            problems.append("LLM_MAX_RETRIES는 음수일 수 없습니다.")
        if self.request_timeout < 0:
            problems.append("LLM_TIMEOUT은 음수일 수 없습니다.")

        if problems:
            raise ConfigurationError("; ".join(problems))

        return self

    @property
    def corpus_enabled(self) -> bool:
        """코퍼스 파일이 설정되어 있는지 여부"""
        return bool(self.corpus_path)


# 전역 설정 인스턴스
settings = Settings()
