"""
app/models/user.py

Purpose: User registration document model

- Name and email as submitted
- Generated filename of the profile picture
- Ordered generated filenames of the additional uploads
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, List


class NewUser(BaseModel):
    """A registration that has not been saved yet."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    name: str
    email: str
    profile_pic: str = Field(alias="profilePic")
    uploaded_files: List[str] = Field(default_factory=list, alias="uploadedFiles")

    def to_document(self) -> Dict[str, Any]:
        """Document as stored in the users collection (camelCase keys)."""
        return self.model_dump(by_alias=True)


class UserRecord(NewUser):
    """A saved registration with its database id."""

    id: str

    @classmethod
    def from_document(cls, document: Dict[str, Any]) -> "UserRecord":
        return cls(
            id=str(document["_id"]),
            name=document.get("name", ""),
            email=document.get("email", ""),
            profilePic=document.get("profilePic", ""),
            uploadedFiles=list(document.get("uploadedFiles") or []),
        )
