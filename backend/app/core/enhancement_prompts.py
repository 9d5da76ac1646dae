"""Enhancement Prompts - system instructions, user message and fallback text.

Invariants:
    - Same SYSTEM_PROMPT for every provider
    - Fallback message always includes the failure reason and four general guidelines
"""

SYSTEM_PROMPT = """You are an expert prompt engineer. Enhance basic prompts to produce better AI responses by making them more specific, structured, and clear.

ENHANCEMENT GUIDELINES:
- Add clear structure and organization
- Include relevant context
- Specify precise response format
- Request specific, actionable examples
- Define clear constraints and parameters
- Clarify target audience and purpose

AVOID:
- AI-like language
- Corporate jargon
- Vague instructions
- Unnecessary complexity"""

FALLBACK_GUIDELINES = (
    "Be specific about your request",
    "Provide context",
    "Define the desired output format",
    "Include any relevant constraints or requirements",
)


def build_user_message(prompt: str) -> str:
    return f'Enhance this basic prompt to get better AI responses: "{prompt}"'


def build_fallback_message(reason: str) -> str:
    guidelines = "\n".join(
        f"{i}. {g}" for i, g in enumerate(FALLBACK_GUIDELINES, start=1)
    )
    return (
        f"Unable to enhance prompt. Error: {reason}.\n\n"
        f"General Prompt Enhancement Guidelines:\n{guidelines}"
    )
