#!/usr/bin/env python3
"""
Demo script for snippet review.

Sends a few code snippets and chat messages through the review service
against the real Gemini API (GEMINI_API_KEY must be set), then repeats
them to show cache hits.
"""

import asyncio
import time

from snippet_review.logging_config import configure_logging
from snippet_review.repositories import GeminiGenerativeModel, InMemoryResponseStore
from snippet_review.services import ReviewService, classify_prompt

SAMPLE_PROMPTS = [
    "def fib(n):\n    return n if n < 2 else fib(n - 1) + fib(n - 2)",
    "#include <stdio.h>\nint main(){printf(\"hi\");return 0;}",
    "hello, how are you?",
    "What are the things you can't process?",
]


def print_section(title: str) -> None:
    """Print a section header."""
    print("\n" + "=" * 70)
    print(f"  {title}")
    print("=" * 70)


async def demo_first_pass(service: ReviewService) -> None:
    """Resolve every sample prompt once (cache misses)."""
    print_section("First pass (model calls)")

    for prompt in SAMPLE_PROMPTS:
        kind = classify_prompt(prompt)
        start = time.perf_counter()
        text = await service.resolve(prompt)
        elapsed_ms = (time.perf_counter() - start) * 1000

        print(f"\n📝 [{kind.value}] {prompt.splitlines()[0][:60]}")
        print(f"⏱  {elapsed_ms:.0f} ms")
        print(text[:400] + ("..." if len(text) > 400 else ""))


async def demo_second_pass(service: ReviewService) -> None:
    """Resolve the same prompts again (cache hits)."""
    print_section("Second pass (cache hits)")

    for prompt in SAMPLE_PROMPTS:
        start = time.perf_counter()
        await service.resolve(prompt, bypass_safety=True)
        elapsed_ms = (time.perf_counter() - start) * 1000
        print(f"  ✓ {elapsed_ms:.2f} ms  {prompt.splitlines()[0][:60]}")


def demo_stats(service: ReviewService) -> None:
    """Print cache and resolver statistics."""
    print_section("Statistics")

    stats = service.get_stats()
    for section, values in stats.items():
        print(f"\n{section}:")
        for key, value in values.items():
            print(f"  {key}: {value}")


async def main() -> None:
    configure_logging("WARNING")

    service = ReviewService.create(
        model=GeminiGenerativeModel.create(),
        store=InMemoryResponseStore.create(),
    )

    await demo_first_pass(service)
    await demo_second_pass(service)
    demo_stats(service)


if __name__ == "__main__":
    asyncio.run(main())
