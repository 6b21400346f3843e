from enum import Enum


class NodeStatus(str, Enum):
    HEALTHY = "healthy"
    DEGRADED = "degraded"
    DOWN = "down"


class InfraType(str, Enum):
    DNS = "dns"
    CDN = "cdn"
    CLOUD = "cloud"
    SAAS = "saas"
    FINANCE = "finance"
    SOCIAL = "social"
    GOVERNMENT = "government"
    USER = "user"                 # End-user sink, never weighted as a service


class Severity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class MessageType(str, Enum):
    """Category of a narrative log line."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    SUCCESS = "success"
    ANALYSIS = "analysis"
