"""
Tool 데이터 모델
=========================
Author: Jin
Date: 2026.03.02
Version: 2.0

Description:
Tool 관련 데이터 모델입니다.
- dataclass: Tool 스키마 (정적, 불변)
- Pydantic:  모델 응답에서 파싱하는 Tool 호출 요청
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, Field

# Tool 실행 결과: 문자열 또는 (등록되지 않은 Tool인 경우) None
ToolResult = Optional[str]


@dataclass(frozen=True)
class ToolParameter:
    """Tool 파라미터 정의"""
    name: str
    type: str
    description: str

    def to_dict(self) -> Dict[str, str]:
        """딕셔너리로 변환"""
        return {
            'name': self.name,
            'type': self.type,
            'description': self.description
        }


@dataclass(frozen=True)
class ToolSchema:
    """Tool 스키마 (파라미터 순서 유지)"""
    name: str
    description: str
    parameters: Tuple[ToolParameter, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        """딕셔너리로 변환"""
        return {
            'name': self.name,
            'description': self.description,
            'parameters': [param.to_dict() for param in self.parameters]
        }


class ToolCallRequest(BaseModel):
    """모델이 요청한 Tool 호출"""
    name: str = Field(description="호출할 Tool 이름")
    parameters: Dict[str, Any] = Field(default_factory=dict, description="Tool 파라미터")


@dataclass
class ToolCallOutcome:
    """요청 순서대로 정렬되는 Tool 호출 결과"""
    name: Optional[str]
    result: ToolResult

    def to_dict(self) -> Dict[str, Any]:
        """딕셔너리로 변환"""
        return {'name': self.name, 'result': self.result}


def outcomes_to_dicts(outcomes: List[ToolCallOutcome]) -> List[Dict[str, Any]]:
    """결과 리스트를 JSON 직렬화 가능한 형태로 변환"""
    return [outcome.to_dict() for outcome in outcomes]
