"""
Tools 패키지

- ToolRegistry: 정적 Tool 레지스트리
- WikipediaTool: Wikipedia 검색 Tool
"""

from tools.tool_registry import ToolRegistry
from tools.wikipedia.wikipedia_tool import WikipediaTool

__all__ = [
    "ToolRegistry",
    "WikipediaTool"
]
