import base64
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class Profile(BaseModel):
    id: Optional[str] = None
    display_name: Optional[str] = None
    mail: Optional[str] = None
    user_principal_name: Optional[str] = None
    raw: Dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_graph(cls, data: Dict[str, Any]) -> "Profile":
        return cls(
            id=data.get("id"),
            display_name=data.get("displayName"),
            mail=data.get("mail"),
            user_principal_name=data.get("userPrincipalName"),
            raw=data,
        )


class FileAttachment(BaseModel):
    name: str
    content_type: str
    content_bytes: bytes

    def to_graph(self) -> Dict[str, Any]:
        return {
            "@odata.type": "#microsoft.graph.fileAttachment",
            "name": self.name,
            "contentType": self.content_type,
            "contentBytes": base64.b64encode(self.content_bytes).decode("ascii"),
        }


class MailMessage(BaseModel):
    subject: str
    html_body: str
    to_recipients: List[str] = []
    attachments: List[FileAttachment] = []

    def to_graph(self) -> Dict[str, Any]:
        return {
            "subject": self.subject,
            "body": {"contentType": "HTML", "content": self.html_body},
            "toRecipients": [{"emailAddress": {"address": r}} for r in self.to_recipients],
            "attachments": [a.to_graph() for a in self.attachments],
        }
