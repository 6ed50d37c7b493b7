"""
Password validation for self-service signup
"""

import re


class PasswordValidator:

    MIN_LENGTH = 8
    MAX_LENGTH = 128
    REQUIRE_LETTER = True
    REQUIRE_DIGIT = True

    @classmethod
    def validate(cls, password):
        """
        Returns:
            tuple: (is_valid, error_message) - error_message is '' when valid
        """
        if not password:
            return False, "Password is required"

        if len(password) < cls.MIN_LENGTH:
            return False, f"Password must be at least {cls.MIN_LENGTH} characters"

        if len(password) > cls.MAX_LENGTH:
            return False, f"Password must be less than {cls.MAX_LENGTH} characters"

        if cls.REQUIRE_LETTER and not re.search(r'[A-Za-z]', password):
            return False, "Password must contain at least one letter"

        if cls.REQUIRE_DIGIT and not re.search(r'\d', password):
            return False, "Password must contain at least one digit"

        return True, ""

    @classmethod
    def get_requirements_text(cls):
        parts = [f"at least {cls.MIN_LENGTH} characters"]
        if cls.REQUIRE_LETTER:
            parts.append("one letter")
        if cls.REQUIRE_DIGIT:
            parts.append("one digit")
        return "Password must contain " + ", ".join(parts)
