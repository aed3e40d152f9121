"""Placeholder match types.

A match type maps the token in ``[token:name]`` to a regular-expression
fragment. Built-ins use possessive quantifiers so a placeholder never
gives characters back to the literal text after it.
"""

from collections.abc import Iterator, Mapping

BUILTIN_MATCH_TYPES: dict[str, str] = {
    "i": r"[0-9]++",
    "a": r"[0-9A-Za-z]++",
    "h": r"[0-9A-Fa-f]++",
    "*": r".+?",
    "**": r".++",
    "": r"[^/\.]++",
}

# Substituted for the default fragment when a block carries the "." marker
ALLOW_DOTS_FRAGMENT = r"[^/]++"


class MatchTypeRegistry(Mapping[str, str]):
    """Token → fragment lookup, seeded with the built-ins.

    ``update`` merges caller types over the current ones; ``version``
    changes on every update so compiled patterns can be invalidated.
    """

    __slots__ = ("_types", "_version")

    def __init__(self, types: Mapping[str, str] | None = None) -> None:
        self._types = dict(BUILTIN_MATCH_TYPES)
        self._version = 0
        if types:
            self.update(types)

    def __getitem__(self, token: str) -> str:
        return self._types[token]

    def __iter__(self) -> Iterator[str]:
        return iter(self._types)

    def __len__(self) -> int:
        return len(self._types)

    @property
    def version(self) -> int:
        return self._version

    @property
    def default(self) -> str:
        """Fragment used by ``[:name]`` blocks."""
        return self._types[""]

    def update(self, types: Mapping[str, str]) -> None:
        # Single rebind so readers never see a half-merged table
        self._types = {**self._types, **types}
        self._version += 1

    def resolve(self, token: str, *, allow_dots: bool = False) -> str:
        """Return the fragment for *token*.

        Unregistered tokens are used verbatim as inline fragments, so
        ``[\\d{4}:year]``-style blocks work without registration.
        """
        fragment = self._types.get(token, token)
        if allow_dots and token in self._types and fragment == self.default:
            return ALLOW_DOTS_FRAGMENT
        return fragment
