"""Domain value objects."""

from authsession.domain.value_objects.login_id import LoginId, LoginIdKind

__all__ = ["LoginId", "LoginIdKind"]
