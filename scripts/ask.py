#!/usr/bin/env python3
"""Ask one question against the configured index and model.

Usage: python -m scripts.ask "What happened in Gaza this week?" [--publication mintpress] [--from 2024-01-01]
"""
import argparse
import datetime as dt
import sys
from pathlib import Path

# Ensure project root on path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from app.clients.deepseek import get_deepseek_client
from app.clients.pinecone_index import get_article_index
from app.config import get_settings
from app.errors import ChatPipelineError
from app.schemas.chat import ChatFilters, ChatMessage, ChatRequest, DateRange
from app.services.chat import prepare_chat
from app.services.publications import display_name
from app.services.streaming import open_answer_stream


def main():
    parser = argparse.ArgumentParser(description="Ask a question grounded in indexed news articles")
    parser.add_argument("question")
    parser.add_argument("--publication", action="append", default=[], help="Publication id, repeatable")
    parser.add_argument("--from", dest="date_from", type=dt.date.fromisoformat)
    parser.add_argument("--to", dest="date_to", type=dt.date.fromisoformat)
    parser.add_argument("--reasoning", action="store_true", help="Use the reasoning model")
    args = parser.parse_args()

    settings = get_settings()
    llm = get_deepseek_client()
    index = get_article_index()
    if llm is None or index is None:
        print("DeepSeek and Pinecone must both be configured (see .env).")
        sys.exit(1)

    date_range = None
    if args.date_from or args.date_to:
        date_range = DateRange(
            from_=dt.datetime.combine(args.date_from, dt.time()) if args.date_from else None,
            to=dt.datetime.combine(args.date_to, dt.time.max) if args.date_to else None,
        )

    request = ChatRequest(
        messages=[ChatMessage(role="user", content=args.question)],
        filters=ChatFilters(publications=args.publication, date_range=date_range),
        use_reasoning_model=args.reasoning,
    )

    try:
        prepared = prepare_chat(request, llm, index, settings)
        stream = open_answer_stream(llm, prepared.messages, prepared.model)
    except ChatPipelineError as e:
        print(f"{e.kind}: {e.detail}")
        sys.exit(1)

    try:
        for chunk in stream:
            if chunk.choices and chunk.choices[0].delta.content:
                print(chunk.choices[0].delta.content, end="", flush=True)
    finally:
        stream.close()

    print("\n\nSources:")
    for i, article in enumerate(prepared.sources, start=1):
        print(f"  [{i}] {display_name(article.publication)}: {article.title} ({article.url})")


if __name__ == "__main__":
    main()
