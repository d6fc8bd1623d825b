"""Authentication: acting identity resolution."""

from cookbook.auth.dependencies import ActingUserDep, get_acting_user


__all__ = ["ActingUserDep", "get_acting_user"]
