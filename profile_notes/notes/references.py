"""First-mention tracking for organization and institution links."""


class EntityReferenceTable:
    """Names already rendered once in the note being built.

    Only the first mention of a name becomes a ``[[link]]``; later mentions of
    the exact same string are plain text. Matching is exact and case-sensitive.
    One table belongs to one formatting call.
    """

    def __init__(self):
        self._seen: set[str] = set()

    def __contains__(self, name: str) -> bool:
        return name in self._seen

    def __len__(self) -> int:
        return len(self._seen)

    def render(self, name: str) -> str:
        """Return the display text for ``name`` and record it as mentioned."""
        text = name if name in self._seen else f"[[{name}]]"
        self._seen.add(name)
        return text
