import pytest

from app.errors import ContextAssemblyError
from app.schemas.chat import ChatMessage
from app.services.context import (
    augment_messages,
    build_context,
    build_grounding_prompt,
    format_source,
)


def test_format_source(make_article):
    block = format_source(make_article(text="Short body."))
    assert block == (
        "Source:\n"
        "Publication: MintPress\n"
        "Title: The LLM boom\n"
        "Date: 2024-05-01\n"
        "Text: Short body."
    )


def test_long_text_truncated_to_500_chars(make_article):
    text = "x" * 499 + "END" + "y" * 300
    block = format_source(make_article(text=text))
    body = block.split("Text: ", 1)[1]
    assert len(body) == 500
    assert body == text[:500]


def test_short_text_untouched(make_article):
    text = "a" * 120
    assert format_source(make_article(text=text)).endswith("Text: " + text)


def test_truncation_ignores_is_truncated_flag(make_article):
    text = "z" * 800
    block = format_source(make_article(text=text, is_truncated=True))
    assert block.endswith("Text: " + "z" * 500)


def test_unknown_publication_uses_raw_id(make_article):
    block = format_source(make_article(publication="some-blog"))
    assert "Publication: some-blog\n" in block


def test_epoch_publication_date(make_article):
    block = format_source(make_article(publication_date=1714521600))
    assert "Date: 2024-05-01\n" in block


def test_missing_date_is_an_error(make_article):
    with pytest.raises(ContextAssemblyError):
        format_source(make_article(publication_date=None))


def test_blocks_joined_by_blank_line(make_article):
    context = build_context([make_article("a1", title="First"), make_article("a2", title="Second")])
    first, second = context.split("\n\n")
    assert "Title: First" in first
    assert "Title: Second" in second


def test_grounding_prompt_rules(make_article):
    prompt = build_grounding_prompt([make_article()], "What is new with LLMs?")
    assert "using ONLY the provided sources" in prompt
    assert "include the publication and title in parentheses at the end of the sentence" in prompt
    assert "enclose the quote in double quotation marks and add the citation" in prompt
    assert "Do not makeup information or use external knowledge." in prompt
    assert "<sources>\nSource:\nPublication: MintPress" in prompt
    assert prompt.rstrip().endswith("Question: What is new with LLMs?")


def test_grounding_prompt_without_sources():
    prompt = build_grounding_prompt([], "Anything?")
    assert "<sources>\n\n</sources>" in prompt


def test_system_prompt_inserted_before_last_message():
    messages = [
        ChatMessage(role="user", content="hi"),
        ChatMessage(role="assistant", content="hello"),
        ChatMessage(role="user", content="question"),
    ]
    augmented = augment_messages(messages, "PROMPT")
    assert augmented == [
        {"role": "user", "content": "hi"},
        {"role": "assistant", "content": "hello"},
        {"role": "system", "content": "PROMPT"},
        {"role": "user", "content": "question"},
    ]


def test_system_prompt_with_single_message():
    augmented = augment_messages([ChatMessage(role="user", content="q")], "PROMPT")
    assert augmented == [{"role": "system", "content": "PROMPT"}, {"role": "user", "content": "q"}]
