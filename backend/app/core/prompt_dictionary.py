"""Prompt Dictionary - overused words and phrases that make text sound machine-written.

Sampled by content_guidance to build the AVOID OVERUSED LANGUAGE section.
"""

OVERUSED_WORDS: tuple[str, ...] = (
    "delve",
    "tapestry",
    "leverage",
    "utilize",
    "robust",
    "seamless",
    "synergy",
    "paradigm",
    "holistic",
    "multifaceted",
    "pivotal",
    "realm",
    "landscape",
    "embark",
    "unleash",
    "elevate",
    "navigate",
    "testament",
    "intricate",
    "meticulous",
    "bustling",
    "vibrant",
    "cutting-edge",
    "game-changer",
    "transformative",
)

OVERUSED_PHRASES: tuple[str, ...] = (
    "in today's fast-paced world",
    "it's important to note that",
    "in the ever-evolving landscape of",
    "at the end of the day",
    "a testament to",
    "unlock the full potential",
    "dive deep into",
    "plays a crucial role in",
    "in conclusion",
    "when it comes to",
    "it goes without saying",
    "a wide range of",
    "take it to the next level",
    "stands as a beacon of",
    "navigate the complexities of",
)
