"""Login identifier value object.

Users log in with either their email address or their mobile number. Anything
containing ``@`` is an email; everything else is read as a mobile number and
normalized to ``+<digits>``, the form mobile numbers are stored in.
"""

import re
from dataclasses import dataclass
from enum import Enum

from authsession.core.constants import MOBILE_PREFIX

_MOBILE_SEPARATORS = re.compile(r"[\s\-().]")
_MOBILE_DIGITS = re.compile(r"\d{6,15}")


class LoginIdKind(str, Enum):
    EMAIL = "email"
    MOBILE = "mobile"


@dataclass(frozen=True, slots=True)
class LoginId:
    """Parsed login identifier.

    Attributes:
        kind: EMAIL or MOBILE.
        value: Lowercased email, or ``+<digits>`` mobile number.

    Example:
        >>> LoginId.parse(" Tutor@Example.com ")
        LoginId(kind=<LoginIdKind.EMAIL: 'email'>, value='tutor@example.com')
        >>> LoginId.parse("+1 (555) 123-4567").value
        '+15551234567'
    """

    kind: LoginIdKind
    value: str

    @classmethod
    def parse(cls, raw: str) -> "LoginId | None":
        """Classify and normalize a login identifier.

        Returns:
            LoginId, or None when the input is neither a plausible email nor
            a plausible phone number.
        """
        text = raw.strip()
        if not text:
            return None
        if "@" in text:
            local, _, domain = text.partition("@")
            if not local or not domain:
                return None
            return cls(LoginIdKind.EMAIL, text.lower())

        digits = _MOBILE_SEPARATORS.sub("", text).removeprefix(MOBILE_PREFIX)
        if not _MOBILE_DIGITS.fullmatch(digits):
            return None
        return cls(LoginIdKind.MOBILE, f"{MOBILE_PREFIX}{digits}")
