"""Global enums: values are the wire values the backend stores."""

from enum import Enum


class OrderStatus(str, Enum):
    """Workflow stages in forward order."""
    ACCEPTANCE = "acceptance"
    COMPLETION = "completion"
    TRANSLATING = "translating"
    EDITING = "editing"
    OFFICE = "office"
    READY = "ready"
    ARCHIVED = "archived"


class ClientType(str, Enum):
    PERSON = "person"
    COMPANY = "company"


class TranslationType(str, Enum):
    CERTIFIED = "certified"
    SIMPLE = "simple"
    SWORN = "sworn"
    NOTARIZED = "notarized"


class Urgency(str, Enum):
    NORMAL = "normal"
    URGENT = "urgent"
    VERY_URGENT = "very_urgent"
