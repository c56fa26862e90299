import json
import logging
from datetime import UTC

# audit kwargs that could carry key material or a sealed cookie
REDACTED_FIELDS = frozenset({"auth_key", "encrypt_key", "token", "cookie_value"})


class StructuredFormatter(logging.Formatter):
    """JSON structured logging keyed by session cookie name."""

    def format(self, record):
        log_data = {
            "ts": self.formatTime(record),
            "level": record.levelname,
            "cookie": getattr(record, "cookie", "-"),
            "msg": record.getMessage(),
            "module": record.module,
        }
        # Optional fields set by the cookie store on writes
        action = getattr(record, "action", None)
        if action is not None:
            log_data["action"] = action
        cookie_bytes = getattr(record, "cookie_bytes", None)
        if cookie_bytes is not None:
            log_data["cookie_bytes"] = cookie_bytes
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_data, ensure_ascii=False)


def setup_logging(level: str = "INFO") -> None:
    """Install the structured handler on the root logger and the audit logger."""
    handler = logging.StreamHandler()
    handler.setFormatter(StructuredFormatter())
    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    # audit lines are already JSON, emit them verbatim
    audit = logging.getLogger("audit")
    audit.propagate = False
    audit.handlers.clear()
    audit_handler = logging.StreamHandler()
    audit_handler.setFormatter(logging.Formatter("%(message)s"))
    audit.addHandler(audit_handler)
    audit.setLevel(logging.INFO)


def audit_log(event: str, cookie_name: str, **kwargs) -> None:
    """Record a security relevant session event. Key material and cookie values are redacted."""
    from datetime import datetime
    data = {
        "event": event,
        "cookie": cookie_name,
        "ts": datetime.now(UTC).isoformat(),
    }
    for k, v in kwargs.items():
        data[k] = "[redacted]" if k in REDACTED_FIELDS else v
    logging.getLogger("audit").info(json.dumps(data, ensure_ascii=False))
