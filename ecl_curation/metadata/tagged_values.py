"""
Tagged value access for data elements.

The conversion only needs to read and write named text fields on an
element. Model stores provide their own adapter; DataElement is the
in-memory implementation used by tests and by callers that load elements
themselves.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Protocol

from ..system.error_handling import DataValidationError

VALUE_SETS_TAG = "valueSets"
SNOMED_ECL_TAG = "snomedECL"
ECL_SOURCE_TAG = "eclSource"
ECL_CONVERSION_DATE_TAG = "eclConversionDate"

DATA_ELEMENT_STEREOTYPE = "PRSB DataElement"

MEMO_MARKER = "<memo>"
MAX_INLINE_VALUE_LENGTH = 255


class TaggedElement(Protocol):
    name: str

    def get_tagged_value(self, tag_name: str) -> str: ...

    def set_tagged_value(self, tag_name: str, value: str) -> None: ...


@dataclass
class TaggedValue:
    """A named value; long text lives in notes behind a <memo> marker."""
    name: str
    value: str = ""
    notes: str = ""

    @property
    def text(self) -> str:
        if self.value == MEMO_MARKER:
            return self.notes or ""
        return self.value or ""

    def update(self, text: str) -> None:
        if len(text) > MAX_INLINE_VALUE_LENGTH:
            self.value = MEMO_MARKER
            self.notes = text
        else:
            self.value = text
            self.notes = ""


@dataclass
class DataElement:
    name: str
    stereotypes: str = DATA_ELEMENT_STEREOTYPE
    tagged_values: List[TaggedValue] = field(default_factory=list)

    def has_stereotype(self, stereotype: str) -> bool:
        """Check the comma-separated stereotype list for an exact name."""
        if not self.stereotypes:
            return False
        return any(s.strip() == stereotype for s in self.stereotypes.split(","))

    def find_tagged_value(self, tag_name: str) -> Optional[TaggedValue]:
        for tag in self.tagged_values:
            if tag.name == tag_name:
                return tag
        return None

    def get_tagged_value(self, tag_name: str) -> str:
        """Return the tag text ("" when absent), resolving <memo> values."""
        tag = self.find_tagged_value(tag_name)
        return tag.text if tag else ""

    def set_tagged_value(self, tag_name: str, value: str) -> None:
        """Create or update a tag; values over 255 characters become memos."""
        if not isinstance(value, str):
            raise DataValidationError(
                f"Tagged value '{tag_name}' on '{self.name}' must be text",
                field_name=tag_name,
                value=value,
            )
        tag = self.find_tagged_value(tag_name)
        if tag is None:
            tag = TaggedValue(tag_name)
            self.tagged_values.append(tag)
        tag.update(value)

    @classmethod
    def with_tags(cls, name: str, **tags: str) -> "DataElement":
        element = cls(name)
        for tag_name, value in tags.items():
            element.set_tagged_value(tag_name, value)
        return element


def read_ecl_binding(element: TaggedElement) -> Optional[str]:
    """Return the element's snomedECL, or None when it has no terminology binding."""
    value = element.get_tagged_value(SNOMED_ECL_TAG)
    if value is None:
        return None
    value = value.strip()
    return value or None
