"""Entity type classification.

The ``type`` field of a record decides whether an entity takes part in the
language-only ranking. Everything not explicitly listed as a non-language
type (tools, formats, platforms, ...) counts as a language.
"""

NON_LANGUAGE_TYPES: frozenset[str] = frozenset(
    {
        "application",
        "binaryDataFormat",
        "binaryExecutable",
        "characterEncoding",
        "cloud",
        "compiler",
        "computingMachine",
        "dataStructure",
        "decompiler",
        "editor",
        "equation",
        "feature",
        "filesystem",
        "framework",
        "hashFunction",
        "interpreter",
        "library",
        "linter",
        "os",
        "packageManager",
        "standard",
        "vm",
        "webApi",
    }
)


def is_language(entity_type: str | None) -> bool:
    """Check whether an entity type counts as a language.

    Args:
        entity_type: Value of the record's ``type`` field, if any.

    Returns:
        False for known non-language types, True otherwise (including
        records with no type).
    """
    return entity_type not in NON_LANGUAGE_TYPES
