"""Global pytest configuration."""

import os

# Set test settings before any imports read them
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ["OPENAI_API_KEY"] = ""
