"""Register roles."""

from __future__ import annotations

from enum import StrEnum


class Role(StrEnum):
    """Who is operating the register.

    Technicians are viewers; admins are editors.
    """

    ADMIN = "admin"
    TECHNICIAN = "technician"

    @property
    def can_edit(self) -> bool:
        return self is Role.ADMIN
