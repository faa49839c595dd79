from app.errors import ContextAssemblyError
from app.schemas.article import Article
from app.schemas.chat import ChatMessage
from app.services.publications import display_name

CONTEXT_CHAR_LIMIT = 500

SOURCE_TEMPLATE = """Source:
Publication: {publication}
Title: {title}
Date: {date}
Text: {text}"""

GROUNDING_PROMPT = """
Answer the following question using ONLY the provided sources. Pay close attention to the date of each source to understand the context of the information.

<sources>
{context}
</sources>

When you answer, you MUST follow these guidelines:
1. For every factual claim you make, you must cite the source.
2. To cite a source, include the publication and title in parentheses at the end of the sentence, like this: (The Grayzone, The West's phantom 'moral majority' is a marketing tool for war).
3. If you are quoting directly from a source, enclose the quote in double quotation marks and add the citation, like this: "Direct quote from the article." (MintPress, How America's 'Radical' Foreign Policy Is Paving the Way for a Multipolar World).
4. Do not makeup information or use external knowledge.

Question: {question}
"""


def format_source(article: Article, char_limit: int = CONTEXT_CHAR_LIMIT) -> str:
    if article.publication_date is None:
        raise ContextAssemblyError(f"Article {article.id!r} has no publication_date")
    return SOURCE_TEMPLATE.format(
        publication=display_name(article.publication),
        title=article.title,
        date=article.publication_date.strftime("%Y-%m-%d"),
        text=article.text[:char_limit],
    )


def build_context(articles: list[Article], char_limit: int = CONTEXT_CHAR_LIMIT) -> str:
    return "\n\n".join(format_source(a, char_limit) for a in articles)


def build_grounding_prompt(
    articles: list[Article],
    question: str,
    char_limit: int = CONTEXT_CHAR_LIMIT,
) -> str:
    return GROUNDING_PROMPT.format(context=build_context(articles, char_limit), question=question)


def augment_messages(messages: list[ChatMessage], prompt: str) -> list[dict]:
    """Conversation as sent to the model: the grounding prompt goes right before the last message."""
    history = [m.model_dump() for m in messages]
    return [*history[:-1], {"role": "system", "content": prompt}, history[-1]]
