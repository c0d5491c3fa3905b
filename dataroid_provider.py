"""
Dataroid Analytics
https://dataroid.com/

Decodes requests sent to the Dataroid event collector. The POST body is a JSON
batch ({"events": [...]}); only the first event of a batch is surfaced.
"""

import json
import re
from typing import Any, Dict, List, Mapping, Union
from urllib.parse import ParseResult, SplitResult

from base_provider import (
    BaseProvider, FieldGroup, FieldRecord, KeyDescriptor, MalformedPayload, PostData,
    DEFAULT_GROUP
)
from unified_logger import unified_logger

# Labels for the fixed event, attribute and session fields
FIELD_LABELS: Dict[str, str] = {
    "eventName": "Event Name",
    "eventId": "Event ID",
    "customerId": "Customer ID",
    "url": "Page URL",
    "clientCreationDate": "Client Creation Date",
    "sessionId": "Session ID",
    "startDateTime": "Session Start Time",
}

# (key, group) pairs read from the top level of an event, in display order
EVENT_FIELDS = [("eventName", "event"), ("eventId", "event"), ("customerId", "general")]
LEADING_ATTRIBUTES = ["url", "clientCreationDate"]
SESSION_FIELDS = ["sessionId", "startDateTime"]

ATTRIBUTE_NAMES: Dict[str, str] = {
    "pageTitle": "Page Title",
    "pageType": "Page Type",
    "referrer": "Referrer",
    "userAgent": "User Agent",
    "viewport": "Viewport",
    "screenResolution": "Screen Resolution",
    "language": "Language",
    "timezone": "Timezone",
    "timestamp": "Timestamp",
    "userId": "User ID",
    "sessionDuration": "Session Duration",
    "pageLoadTime": "Page Load Time",
    "scrollDepth": "Scroll Depth",
    "clickCount": "Click Count",
    "formField": "Form Field",
    "buttonText": "Button Text",
    "linkText": "Link Text",
    "elementId": "Element ID",
    "elementClass": "Element Class",
    "customData": "Custom Data",
    "metadata": "Metadata",
}

REQUEST_TYPE = "Event Collection"

# Key of the computed host record; earlier provider builds emitted "omnibug_hostname"
HOST_KEY = "hostname"


def friendly_attribute_name(key: str) -> str:
    """Convert an attribute key to a human-friendly name"""
    if key in ATTRIBUTE_NAMES:
        return ATTRIBUTE_NAMES[key]
    return key[:1].upper() + re.sub(r"([A-Z])", r" \1", key[1:])


def _stringify(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list)):
        try:
            return json.dumps(value, ensure_ascii=False, separators=(',', ':'))
        except RecursionError as e:
            raise MalformedPayload("Dataroid postData is nested too deeply") from e
    return str(value)


def _reject_constant(name: str) -> None:
    raise ValueError(f"{name} is not a valid JSON value")


def load_payload(post_data: str) -> Any:
    """Parse a raw JSON body, raising MalformedPayload when it is not JSON."""
    try:
        return json.loads(post_data, parse_constant=_reject_constant)
    except (ValueError, RecursionError) as e:
        raise MalformedPayload(f"Dataroid postData is not valid JSON: {e}") from e


def first_event(payload: Any) -> Dict[str, Any]:
    """Return the first event of a batch, or an empty dict for any other shape"""
    if not isinstance(payload, dict):
        return {}
    events = payload.get("events")
    if not isinstance(events, list) or not events:
        return {}
    event = events[0]
    return event if isinstance(event, dict) else {}


class DataroidProvider(BaseProvider):
    """Dataroid event collector provider"""

    def __init__(self):
        self._key = "DATAROID"
        self._pattern = re.compile(r"//api\.dataroid\.com(?=[:/]).*/collector/collect/event")
        self._name = "Dataroid"
        self._type = "analytics"
        self._keywords = ["dataroid", "analytics", "collector"]

    @property
    def column_mapping(self) -> Dict[str, str]:
        return {
            "account": "eventName",
            "requestType": "requestType"
        }

    @property
    def groups(self) -> List[FieldGroup]:
        return [
            FieldGroup("general", "General"),
            FieldGroup("event", "Event Data"),
            FieldGroup("session", "Session Data"),
            FieldGroup("attributes", "Attributes"),
        ]

    @property
    def keys(self) -> Dict[str, KeyDescriptor]:
        return {
            "eventName": KeyDescriptor("Event Name", "event"),
            "eventId": KeyDescriptor("Event ID", "event"),
            "url": KeyDescriptor("URL", "attributes"),
            "clientCreationDate": KeyDescriptor("Client Creation Date", "attributes"),
            "sessionId": KeyDescriptor("Session ID", "session"),
            "startDateTime": KeyDescriptor("Session Start Date/Time", "session"),
            "customerId": KeyDescriptor("Customer ID", "general"),
            "requestType": KeyDescriptor(hidden=True),
        }

    def get_friendly_attribute_name(self, key: str) -> str:
        return friendly_attribute_name(key)

    def parse_post_data(self, post_data: PostData = None) -> List[FieldRecord]:
        """
        Parse POST data into field records.

        A JSON string is read as an event batch; a mapping is treated as
        form data with one record per entry.
        """
        if not post_data:
            return []

        try:
            if isinstance(post_data, Mapping):
                return [
                    FieldRecord(str(key), _stringify(value), str(key), DEFAULT_GROUP)
                    for key, value in post_data.items()
                ]
            return self._extract_event(first_event(load_payload(post_data)))
        except MalformedPayload as e:
            unified_logger.log_warning(str(e))
            return []

    def _extract_event(self, event: Dict[str, Any]) -> List[FieldRecord]:
        params: List[FieldRecord] = []

        for key, group in EVENT_FIELDS:
            if event.get(key) is not None:
                params.append(self._record(key, event[key], FIELD_LABELS[key], group))

        attributes = event.get("attributes")
        if isinstance(attributes, dict):
            for key in LEADING_ATTRIBUTES:
                if attributes.get(key) is not None:
                    params.append(self._record(key, attributes[key], FIELD_LABELS[key], "attributes"))
            for key, value in attributes.items():
                if key in LEADING_ATTRIBUTES or value is None:
                    continue
                params.append(self._record(key, value, friendly_attribute_name(key), "attributes"))

        session = event.get("clientSession")
        if isinstance(session, dict):
            for key in SESSION_FIELDS:
                if session.get(key) is not None:
                    params.append(self._record(key, session[key], FIELD_LABELS[key], "session"))

        return params

    def _record(self, key: str, value: Any, label: str, group: str) -> FieldRecord:
        return FieldRecord(key, _stringify(value), label, group)

    def handle_custom(self, url: Union[SplitResult, ParseResult], post_data: PostData = None) -> List[FieldRecord]:
        return [
            FieldRecord(HOST_KEY, url.hostname or "", f"{self.name} Host", "general"),
            FieldRecord("requestType", REQUEST_TYPE, None, None, hidden=True),
        ]
