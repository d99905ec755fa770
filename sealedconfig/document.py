from typing import Dict
from typing import Iterable
from typing import List
from typing import Optional
from typing import Tuple


class Document:
    """Ordered sections of ordered key/value string pairs.

    Sections and keys keep insertion order. Setting a value in a missing
    section creates the section at the end. Nothing here is thread safe;
    ConfigStore serializes access.
    """
    def __init__(self, sections: Optional[Iterable[Tuple[str, Iterable[Tuple[str, str]]]]] = None):
        self._sections = {}  # type: Dict[str, Dict[str, str]]
        for name, items in sections or []:
            section = self._sections.setdefault(name, {})
            for key, value in items:
                section[key] = value

    def has_section(self, section: str) -> bool:
        return section in self._sections

    def section_list(self) -> List[str]:
        return list(self._sections)

    def key_list(self, section: str) -> List[str]:
        return list(self._sections.get(section, ()))

    def items(self, section: str) -> List[Tuple[str, str]]:
        return list(self._sections.get(section, {}).items())

    def get_value(self, section: str, key: str) -> Tuple[str, bool]:
        try:
            return self._sections[section][key], True
        except KeyError:
            return "", False

    def set_value(self, section: str, key: str, value: str) -> None:
        self._sections.setdefault(section, {})[key] = value

    def add_section(self, section: str) -> None:
        self._sections.setdefault(section, {})

    def delete_key(self, section: str, key: str) -> bool:
        try:
            del self._sections[section][key]
        except KeyError:
            return False
        return True

    def delete_section(self, section: str) -> bool:
        return self._sections.pop(section, None) is not None

    def to_dict(self) -> Dict[str, Dict[str, str]]:
        return {name: dict(section) for name, section in self._sections.items()}

    @classmethod
    def from_dict(cls, d: Dict[str, Dict[str, str]]) -> "Document":
        return cls((name, section.items()) for name, section in d.items())

    def __len__(self):
        return len(self._sections)

    def __eq__(self, other):
        if not isinstance(other, Document):
            return NotImplemented
        # Order is part of a document's identity.
        return [(n, list(s.items())) for n, s in self._sections.items()] == \
            [(n, list(s.items())) for n, s in other._sections.items()]

    def __repr__(self):
        return "Document(%r)" % self.to_dict()
