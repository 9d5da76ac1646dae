"""Root conftest - shared test configuration."""

import os

# Ensure tests never reach a real provider or pick up a developer's keys
os.environ["AI_PROVIDER"] = "openai"
os.environ["OPENAI_API_KEY"] = ""
os.environ["MISTRAL_API_KEY"] = ""
os.environ["ANTHROPIC_API_KEY"] = ""
os.environ["API_KEY"] = ""
os.environ.setdefault("LOG_FORMAT", "text")
