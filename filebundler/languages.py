# filebundler/languages.py
"""
Fixed extension -> language tag table.
Extensions are stored lower-cased; lookups are case-insensitive.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import List, NamedTuple, Optional


ALL_LANGUAGES = "all"


class ExtensionTag(NamedTuple):
    extension: str
    language: str


EXTENSION_TAGS = (
    ExtensionTag(".cs", "c#"),
    ExtensionTag(".java", "java"),
    ExtensionTag(".js", "javascript"),
    ExtensionTag(".ts", "typescript"),
    ExtensionTag(".py", "python"),
    ExtensionTag(".html", "html"),
    ExtensionTag(".htm", "html"),
    ExtensionTag(".css", "css"),
    ExtensionTag(".scss", "scss"),
    ExtensionTag(".sql", "sql"),
    ExtensionTag(".sh", "bash"),
    ExtensionTag(".ps1", "powershell"),
    ExtensionTag(".json", "json"),
    ExtensionTag(".xml", "xml"),
)

LANGUAGE_EXTENSIONS = MappingProxyType(
    {tag.extension: tag.language for tag in EXTENSION_TAGS}
)


def language_for(extension: str) -> Optional[str]:
    return LANGUAGE_EXTENSIONS.get(extension.lower())


def known_languages() -> List[str]:
    return sorted(set(LANGUAGE_EXTENSIONS.values()))
