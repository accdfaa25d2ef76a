"""
Answer 데이터 모델
=========================
Author: Jin
Date: 2026.03.02
Version: 1.0

Description:
HTTP 요청/응답과 답변 모드, 구조화 출력 스키마입니다.
"""
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator

# 모든 예상 가능한 실패를 대신하는 사용자 노출 메시지
FAILURE_MESSAGE = "Something went wrong"


class AnswerMode(str, Enum):
    DIRECT = "direct"
    CORPUS = "corpus"
    WIKIPEDIA = "wikipedia"
    TOOLS = "tools"
    RECOMMENDATION = "recommendation"


class MessageRequest(BaseModel):
    """POST /api/message 요청 본문"""
    question: str = Field(description="사용자 질문")
    mode: Optional[AnswerMode] = Field(default=None, description="답변 모드 (없으면 설정 기본값)")

    @field_validator("question")
    @classmethod
    def question_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("question must not be empty")
        return value


class MessageResponse(BaseModel):
    """POST /api/message 응답 본문"""
    answer: str


class Recommendation(BaseModel):
    """활동 추천 구조화 출력"""
    title: str = Field(description="Name of the recommendation")
    description: str = Field(description="Description in maximum 2 sentences")
    age: Optional[int] = Field(default=None, description="Minimal age for the recommendation")
