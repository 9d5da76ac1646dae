"""Content Guidance - static writing advice appended to every enhanced prompt.

Invariants:
    - Domain detection is a case-insensitive substring check, first match wins:
      blog/article -> BLOG, code/programming -> CODE, story/creative -> CREATIVE
    - Sampling is without replacement and never returns more items than exist
    - Guidance is built from the ORIGINAL prompt, not the sanitized one
    - Section 4 (domain advice) only appears for non-GENERAL domains
"""

import random
from collections.abc import Sequence

from app.core.domain_types import ContentDomain
from app.core.prompt_dictionary import OVERUSED_PHRASES, OVERUSED_WORDS

RULE = "-" * 26
WORDS_TO_AVOID = 3
PHRASES_TO_AVOID = 2

_DOMAIN_KEYWORDS: tuple[tuple[ContentDomain, tuple[str, ...]], ...] = (
    (ContentDomain.BLOG, ("blog", "article")),
    (ContentDomain.CODE, ("code", "programming")),
    (ContentDomain.CREATIVE, ("story", "creative")),
)

DOMAIN_ADVICE: dict[ContentDomain, str] = {
    ContentDomain.BLOG: (
        "Focus on creating a natural narrative flow with varied sentence structures."
    ),
    ContentDomain.CODE: (
        "Prioritize clarity, include practical implementation details, "
        "and use specific examples."
    ),
    ContentDomain.CREATIVE: (
        "Use specific sensory details and avoid predictable plot structures."
    ),
}


def detect_domain(prompt: str) -> ContentDomain:
    lowered = prompt.lower()
    for domain, keywords in _DOMAIN_KEYWORDS:
        if any(k in lowered for k in keywords):
            return domain
    return ContentDomain.GENERAL


def select_random_items(
    items: Sequence[str], count: int, rng: random.Random | None = None,
) -> list[str]:
    """Pick up to `count` distinct items. Empty input gives an empty list."""
    if not items or count <= 0:
        return []
    rng = rng or random.Random()  # nosec B311
    return rng.sample(list(items), min(count, len(items)))


def create_content_guidance(prompt: str, rng: random.Random | None = None) -> str:
    """Build the WRITING GUIDANCE block for a prompt."""
    words = select_random_items(OVERUSED_WORDS, WORDS_TO_AVOID, rng)
    phrases = select_random_items(OVERUSED_PHRASES, PHRASES_TO_AVOID, rng)
    avoid_lines = [f'   - "{item}"' for item in words + phrases]

    lines = [
        "",
        RULE,
        "WRITING GUIDANCE:",
        "",
        "1. SOUND NATURAL:",
        "   - Vary sentence structure",
        "   - Avoid excessive hedging",
        "   - Use concrete language",
        "   - Include specific examples",
        "",
        "2. AVOID OVERUSED LANGUAGE:",
        *avoid_lines,
        "",
        "3. BE SPECIFIC:",
        "   - Provide concrete details",
        "   - Use precise terminology",
        "   - Explain complex ideas clearly",
    ]

    advice = DOMAIN_ADVICE.get(detect_domain(prompt))
    if advice:
        lines += ["", "4. DOMAIN-SPECIFIC ADVICE:", f"   {advice}"]

    lines += [RULE, ""]
    return "\n".join(lines)
