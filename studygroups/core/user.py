"""
A shared user reference that is serialized.
"""

from pydantic import BaseModel


class UserReference(BaseModel):
    user_id: int
