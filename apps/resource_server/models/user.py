"""
Authenticated API user
"""
from typing import Iterable, Optional


class User:
    """User resolved from the request credentials"""

    def __init__(self, email: str, department: Optional[str] = None,
                 authorities: Iterable[str] = ()):
        self.email = email
        self.department = department
        self.authorities = frozenset(authorities)

    def has_authority(self, authority: str) -> bool:
        return authority in self.authorities

    def to_dict(self):
        """Representation sent to the backend with every call"""
        return {
            'email': self.email,
            'department': self.department,
        }

    def __repr__(self):
        return f"User(email={self.email!r}, authorities={sorted(self.authorities)})"
