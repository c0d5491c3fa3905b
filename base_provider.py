"""
Provider data model and the base class shared by all request decoders.

A provider recognizes one analytics vendor's collector traffic (check_url)
and turns a matched request into an ordered list of FieldRecords (decode).
"""

import re
from typing import Any, Dict, List, NamedTuple, Optional, Pattern, Union
from urllib.parse import ParseResult, SplitResult, urlsplit

# Internal category codes and their display names
PROVIDER_TYPES: Dict[str, str] = {
    "analytics": "Analytics",
    "customer": "Customer Engagement",
    "testing": "UX Testing",
    "tagmanager": "Tag Manager",
    "visitorid": "Visitor Identification",
    "marketing": "Marketing",
    "replay": "Session Replay/Heat Maps",
}

# Records without an explicit group, such as form-data entries. Not one of a
# provider's declared groups: renderers treat "other" as the implicit trailing
# bucket shown after them.
DEFAULT_GROUP = "other"

URL = Union[str, SplitResult, ParseResult]
PostData = Union[str, Dict[str, Any], None]


class MalformedPayload(ValueError):
    """POST body could not be decoded as JSON."""


class ProviderDescriptor(NamedTuple):
    """Immutable identity of a provider."""
    key: str
    name: str
    type: str
    url_pattern: Pattern
    keywords: List[str]


class FieldGroup(NamedTuple):
    """Display bucket for decoded fields."""
    key: str
    name: str


class KeyDescriptor(NamedTuple):
    """Static metadata for a known raw parameter key."""
    name: Optional[str] = None
    group: Optional[str] = None
    hidden: bool = False


class FieldRecord(NamedTuple):
    """One decoded, labeled datum extracted from a request."""
    key: str
    value: Any
    field: Optional[str]
    group: Optional[str]
    hidden: bool = False

    def as_dict(self) -> Dict[str, Any]:
        return self._asdict()


def split_url(url: URL) -> Union[SplitResult, ParseResult]:
    """Accept either a raw URL string or an already-split URL"""
    if isinstance(url, str):
        return urlsplit(url)
    return url


class BaseProvider:
    """Shared behaviour of all providers; subclasses fill in identity and tables."""

    _key: str = ""
    _name: str = ""
    _type: str = ""
    _pattern: Pattern = re.compile(r"^$")
    _keywords: List[str] = []

    @property
    def key(self) -> str:
        return self._key

    @property
    def name(self) -> str:
        return self._name

    @property
    def type(self) -> str:
        return PROVIDER_TYPES.get(self._type, "Unknown")

    @property
    def pattern(self) -> Pattern:
        return self._pattern

    @property
    def keywords(self) -> List[str]:
        return list(self._keywords)

    @property
    def descriptor(self) -> ProviderDescriptor:
        return ProviderDescriptor(self.key, self.name, self.type, self.pattern, self.keywords)

    @property
    def column_mapping(self) -> Dict[str, str]:
        """Raw keys that populate the summary columns (account, requestType)"""
        return {}

    @property
    def groups(self) -> List[FieldGroup]:
        """Field groups in display order"""
        return []

    @property
    def keys(self) -> Dict[str, KeyDescriptor]:
        """Known raw parameter keys"""
        return {}

    def check_url(self, url: str) -> bool:
        """Check whether a full request URL belongs to this provider."""
        return bool(self._pattern.search(url))

    def parse_post_data(self, post_data: PostData = None) -> List[FieldRecord]:
        """Turn a POST body into field records"""
        return []

    def handle_custom(self, url: Union[SplitResult, ParseResult], post_data: PostData = None) -> List[FieldRecord]:
        """Computed fields appended after the body fields"""
        return []

    def decode(self, url: URL, post_data: PostData = None) -> List[FieldRecord]:
        """
        Decode a matched request into ordered field records.

        Args:
            url: Request URL, raw or already split
            post_data: None, a raw body string, or a form-data mapping

        Returns:
            Body-derived records followed by computed records
        """
        parts = split_url(url)
        records = list(self.parse_post_data(post_data))
        records.extend(self.handle_custom(parts, post_data))
        return records

    def parse_url(self, url: URL, post_data: PostData = None) -> Dict[str, Any]:
        """Build the parsed-request shape consumed by renderers."""
        return {
            "provider": {
                "name": self.name,
                "key": self.key,
                "type": self.type,
                "columns": self.column_mapping,
                "groups": [group._asdict() for group in self.groups],
            },
            "data": [record.as_dict() for record in self.decode(url, post_data)],
        }
