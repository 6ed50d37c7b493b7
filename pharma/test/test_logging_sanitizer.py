"""
Test the logging sanitizer utility.
Passwords and tokens must never reach the log files.
"""

from werkzeug.datastructures import ImmutableMultiDict

from pharma.utils.logging_sanitizer import sanitize_dict, sanitize_form_data, SENSITIVE_FIELDS


def test_sanitize_dict():
    test_data = {
        'username': 'admin',
        'password': 'secret123',
        'email': 'admin@example.com'
    }
    result = sanitize_dict(test_data)
    assert result['username'] == 'admin', "Username should not be redacted"
    assert result['password'] == '[REDACTED]', "Password should be redacted"
    assert result['email'] == 'admin@example.com', "Email should not be redacted"

    # Case insensitivity
    result = sanitize_dict({'Password': 'a', 'CSRF_TOKEN': 'b'})
    assert result == {'Password': '[REDACTED]', 'CSRF_TOKEN': '[REDACTED]'}

    # Nested dictionaries and lists of dictionaries
    result = sanitize_dict({
        'user': {'username': 'admin', 'password': 'secret123'},
        'items': [{'medicine_id': 1, 'token': 'xyz'}, 'plain'],
    })
    assert result['user']['password'] == '[REDACTED]'
    assert result['items'][0] == {'medicine_id': 1, 'token': '[REDACTED]'}
    assert result['items'][1] == 'plain'

    assert sanitize_dict({}) == {}


def test_sanitize_form_data():
    form_data = ImmutableMultiDict([
        ('username', 'admin'),
        ('password', 'secret123'),
        ('csrf_token', 'abc'),
    ])
    result = sanitize_form_data(form_data)
    assert result == {'username': 'admin', 'password': '[REDACTED]', 'csrf_token': '[REDACTED]'}


def test_sanitize_form_data_keeps_repeated_fields():
    form_data = ImmutableMultiDict([
        ('medicine_id', '3'), ('quantity', '2'),
        ('medicine_id', '5'), ('quantity', '1'),
    ])
    result = sanitize_form_data(form_data)
    assert result == {'medicine_id': ['3', '5'], 'quantity': ['2', '1']}


def test_custom_redact_text():
    result = sanitize_dict({'password': 'x'}, redact_text='***')
    assert result['password'] == '***'


def test_sensitive_fields_cover_credentials():
    for field in ('password', 'secret_key', 'api_key', 'csrf_token'):
        assert field in SENSITIVE_FIELDS
