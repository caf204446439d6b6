from dataclasses import dataclass


@dataclass(frozen=True)
class Actor:
    """Identity and role of the caller, passed explicitly into each operation."""

    user_id: int
    email: str
    role: str
    is_active: bool = True

    @classmethod
    def from_user(cls, user):
        return cls(
            user_id=user.user_id,
            email=user.email,
            role=user.role,
            is_active=bool(user.is_active),
        )

    @property
    def is_admin(self):
        return self.role == "admin" and self.is_active
