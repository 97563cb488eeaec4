"""
Chart Generation Example

Demonstrates the two ways a config arrives:

1. Generation - a prompt goes to a provider, the reply is normalized
2. Editing - hand-written source text is classified without a network call

Usage:
    python examples/generate_chart.py [gemini|openai_chat|openai_compatible] [platform]
"""

import asyncio
import sys

from dotenv import load_dotenv

from chartgen import (
    ChartGenError,
    ChartSession,
    GenerationMode,
    GenerationRequest,
    HistoryStore,
    Language,
    ProviderCredentials,
    create_client,
)

load_dotenv()


async def main(provider: str, platform: str = None):
    credentials = ProviderCredentials.from_env(provider, platform)
    client = create_client(provider, platform)
    session = ChartSession(
        client,
        credentials,
        history=HistoryStore("chart_history.json"),
        on_event=lambda event: print(f"[event] {type(event).__name__}"),
        verbose=True,
    )
    session.history.load()

    # =========================================================================
    # Example 1: Generation
    # =========================================================================

    print("=" * 70)
    print("Example 1: Generate from a prompt")
    print("=" * 70)

    request = GenerationRequest(
        prompt="Quarterly revenue and profit for 2024, revenue growing steadily",
        language=Language.EN,
        mode=GenerationMode.STANDARD,
    )
    try:
        config = await session.generate(request)
    except ChartGenError as e:
        print(f"Generation failed: {e}")
    else:
        print(config.to_json())

    # =========================================================================
    # Example 2: Editing the source by hand
    # =========================================================================

    print("\n" + "=" * 70)
    print("Example 2: Edit the source")
    print("=" * 70)

    session.edit("flowchart TD\n")
    session.edit("flowchart TD\n  Prompt --> Model")
    session.edit("flowchart TD\n  Prompt --> Model --> Normalizer --> Chart")
    await asyncio.sleep(session.options.debounce_delay + 0.1)

    print(f"Current kind: {session.current.chart_kind.value}")
    print(session.current.diagram_source)
    print(f"History entries: {len(session.history)}")
    session.close()


if __name__ == "__main__":
    args = sys.argv[1:]
    asyncio.run(main(args[0] if args else "gemini", args[1] if len(args) > 1 else None))
