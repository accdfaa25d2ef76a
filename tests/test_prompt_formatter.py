import pytest

from base.exceptions import MissingVariableError
from prompts.prompt_formatter import PromptFormatter, PromptTemplateId


def test_direct_question_is_rendered_as_is():
    formatter = PromptFormatter()

    assert formatter.format(PromptTemplateId.DIRECT_QUESTION, {"question": "Who?"}) == "Who?"


def test_context_template_contains_context_and_question():
    formatter = PromptFormatter()

    prompt = formatter.format(
        PromptTemplateId.CONTEXT_AUGMENTED,
        {"context": "Cats sleep a lot.", "question": "Do cats sleep?"}
    )

    assert "Cats sleep a lot." in prompt
    assert prompt.endswith("Question: Do cats sleep?")


def test_tool_selection_keeps_literal_json_example():
    formatter = PromptFormatter()

    prompt = formatter.format(
        PromptTemplateId.TOOL_SELECTION,
        {"tools": '[{"name": "callWikipediaTool"}]', "question": "q"}
    )

    assert '[{"name": "<tool name>", "parameters": {"<parameter name>": "<value>"}}]' in prompt
    assert '[{"name": "callWikipediaTool"}]' in prompt


def test_values_with_braces_are_not_reinterpreted():
    formatter = PromptFormatter()

    prompt = formatter.format(PromptTemplateId.DIRECT_QUESTION, {"question": "what is {x}?"})

    assert prompt == "what is {x}?"


def test_missing_variable_raises():
    formatter = PromptFormatter()

    with pytest.raises(MissingVariableError) as exc_info:
        formatter.format(PromptTemplateId.RESULT_SUMMARY, {"question": "q"})

    assert exc_info.value.template_id == "result_summary"
    assert exc_info.value.missing == ["results"]


def test_declared_variables_are_checked_at_init():
    with pytest.raises(ValueError):
        PromptFormatter({PromptTemplateId.DIRECT_QUESTION: ("{question} {extra}", frozenset({"question"}))})


def test_variables_of():
    formatter = PromptFormatter()

    assert formatter.variables_of(PromptTemplateId.CONTEXT_AUGMENTED) == frozenset({"context", "question"})
