"""
Services package for My GPT.

This package provides the answer service that routes a question
to the direct, corpus, Wikipedia, tool-calling or recommendation flow.
"""

from .answer.answer_service import AnswerService

__all__ = [
    'AnswerService'
]
