from __future__ import annotations

from typing import Iterable, Mapping

from .errors import UnknownPartyError


class PartyResolver:
    """
    Map raw party labels from table headers to canonical party codes.

    Several spellings may share one code (e.g. "Krf"/"KrF" -> "KrF").
    There is no fallback: a label missing from the mapping raises
    UnknownPartyError, because a mislabelled party column would store
    wrong numbers under the wrong party.
    """

    def __init__(self, mapping: Mapping[str, str]) -> None:
        self._mapping = dict(mapping)

    def resolve(self, raw_label: str) -> str:
        label = (raw_label or "").strip()
        try:
            return self._mapping[label]
        except KeyError:
            raise UnknownPartyError(label) from None

    def resolve_all(self, raw_labels: Iterable[str]) -> tuple[str, ...]:
        return tuple(self.resolve(label) for label in raw_labels)
