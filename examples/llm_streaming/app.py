"""LLM token streaming -- async rendering of AI responses.

An async generator of tokens is passed straight in as a template value.
Each token becomes its own escaped chunk as soon as it arrives, so the
page streams progressively instead of being re-rendered per token.

Run:
    python app.py
"""

import asyncio
from collections.abc import AsyncIterator

from trickle import html


async def simulated_llm_stream() -> AsyncIterator[str]:
    """Simulate LLM tokens arriving one at a time.

    In production this would be an API call to a model provider.
    Each yield represents a single token from the language model.
    """
    tokens = [
        "Trickle",
        " streams",
        " HTML",
        " as",
        " <tokens>",
        " arrive.",
    ]
    for token in tokens:
        await asyncio.sleep(0)
        yield token


async def answer_title() -> str:
    await asyncio.sleep(0)
    return "Answer"


def chat(prompt: str):
    return html(
        ('<div class="chat"><p class="prompt">', "</p><h2>", '</h2><p class="answer">', "</p></div>"),
        prompt,
        answer_title(),
        simulated_llm_stream(),
    )


async def render() -> tuple[str, list[str]]:
    """Render the chat template, collecting chunks as they stream."""
    chunks: list[str] = []
    async for chunk in chat("What is Trickle?"):
        chunks.append(chunk)
    return "".join(chunks), chunks


# Run at import time for test access
output, chunks = asyncio.run(render())


def main() -> None:
    print(f"Streamed {len(chunks)} chunks:\n")
    for i, chunk in enumerate(chunks):
        print(f"  [chunk {i}] {chunk!r}")
    print("\n--- Full output ---\n")
    print(output)


if __name__ == "__main__":
    main()
