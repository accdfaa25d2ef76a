"""
Data models package for My GPT.

This package provides tool schemas, HTTP request/response models
and structured-output schemas.
"""

__version__ = "1.0.0"

from .answer_model import (
    FAILURE_MESSAGE,
    AnswerMode,
    MessageRequest,
    MessageResponse,
    Recommendation,
)
from .tool_model import ToolParameter, ToolSchema, ToolCallRequest, ToolCallOutcome, ToolResult

__all__ = [
    "FAILURE_MESSAGE",
    "AnswerMode",
    "MessageRequest",
    "MessageResponse",
    "Recommendation",
    "ToolParameter",
    "ToolSchema",
    "ToolCallRequest",
    "ToolCallOutcome",
    "ToolResult",
]
