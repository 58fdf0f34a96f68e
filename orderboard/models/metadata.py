"""Order metadata as an ordered list of key/value entries"""
import json
from typing import Any, Dict, Iterable, Sequence, Tuple


def coerce_text(value: Any) -> str:
    """String form of a metadata value"""
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False)
    return str(value)


class MetadataList:
    """Ordered metadata entries where keys may repeat or be missing.

    Lookups take candidate keys in priority order. For each candidate the
    whole list is scanned for the first entry with exactly that key, so a
    later candidate never wins over an earlier one even if its entry comes
    first in the list.
    """

    def __init__(self, entries: Iterable[Dict[str, Any]] = ()):
        self._entries: Tuple[Tuple[str, Any], ...] = tuple(
            (str(entry.get('key', '')), entry.get('value'))
            for entry in entries or ()
            if isinstance(entry, dict)
        )

    def first(self, key: str) -> Tuple[bool, Any]:
        """Return (found, value) for the first entry with this exact key"""
        for entry_key, value in self._entries:
            if entry_key == key:
                return True, value
        return False, None

    def lookup(self, candidates: Sequence[str]) -> str:
        """Trimmed text of the first candidate key that has a value, or ''"""
        for key in candidates:
            found, value = self.first(key)
            if found and value is not None:
                return coerce_text(value).strip()
        return ''

    def __repr__(self) -> str:
        return f"MetadataList({len(self._entries)} entries)"
