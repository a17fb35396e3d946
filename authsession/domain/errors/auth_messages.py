"""Authentication error message constants.

Log-oriented messages shared by the login, refresh and access-token paths.
"""


class AuthMessages:
    """Authentication failure messages."""

    INVALID_CREDENTIALS = "Invalid login credentials"
    SIGNUP_INCOMPLETE = "Signup has not been completed"
    INVALID_TOKEN = "Invalid token"
    EXPIRED_TOKEN = "Token expired"
    ACCOUNT_UNAVAILABLE = "Account is inactive or deleted"
