"""
Logging Sanitizer Utility

Strips credentials and tokens out of request payloads before they reach the
log files. Login, signup and order forms are logged through this.
"""

from typing import Any, Dict

from werkzeug.datastructures import MultiDict

REDACTED = '[REDACTED]'

# Field names (compared lower-case) whose values are never logged
SENSITIVE_FIELDS = {
    'password',
    'password_confirm',
    'confirm_password',
    'new_password',
    'current_password',
    'secret',
    'secret_key',
    'token',
    'access_token',
    'api_key',
    'session_id',
    'csrf_token',
}


def sanitize_dict(data: Dict[str, Any], redact_text: str = REDACTED) -> Dict[str, Any]:
    """
    Return a copy of data with sensitive values replaced.

    Nested dictionaries and lists of dictionaries are sanitized as well.

    Example:
        >>> sanitize_dict({'username': 'admin', 'password': 'hunter2'})
        {'username': 'admin', 'password': '[REDACTED]'}
    """
    if not data:
        return data

    sanitized = {}
    for key, value in data.items():
        if str(key).lower() in SENSITIVE_FIELDS:
            sanitized[key] = redact_text
        elif isinstance(value, dict):
            sanitized[key] = sanitize_dict(value, redact_text)
        elif isinstance(value, list):
            sanitized[key] = [
                sanitize_dict(entry, redact_text) if isinstance(entry, dict) else entry
                for entry in value
            ]
        else:
            sanitized[key] = value
    return sanitized


def sanitize_form_data(form_data: MultiDict, redact_text: str = REDACTED) -> Dict[str, Any]:
    """
    Sanitize request.form for logging. Repeated fields (the order form's
    medicine_id/quantity rows) are kept as lists.
    """
    flattened = {
        key: values if len(values) > 1 else values[0]
        for key, values in form_data.lists()
    }
    return sanitize_dict(flattened, redact_text)
