from .prompt_formatter import PromptFormatter, PromptTemplateId, PROMPT_TEMPLATES

__all__ = [
    "PromptFormatter",
    "PromptTemplateId",
    "PROMPT_TEMPLATES"
]
