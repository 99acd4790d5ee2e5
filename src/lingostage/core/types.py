"""Core type definitions."""

from typing import NewType

# URL path for routing (e.g., "/guide", "/es/guide")
# Distinct from filesystem Path to catch type mismatches
URLPath = NewType("URLPath", str)

# Language identifier as declared in configuration (e.g., "en", "pt-BR")
LanguageCode = NewType("LanguageCode", str)
