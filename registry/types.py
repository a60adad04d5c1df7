"""
Registry data model.

PURE DATA MODELS - NO I/O
Defines the record persisted per registered user and the public view
returned to listing callers.
"""

from typing import Any, Optional

from pydantic import BaseModel, Field


class PublicUser(BaseModel):
    """Public fields of a registered user. Never carries the secret."""

    name: str
    phone: str
    address: str

    class Config:
        frozen = True


class UserRecord(BaseModel):
    """
    One registered user.

    The display name is kept as typed; lookups use the case-folded key.
    The secret is stored in cleartext alongside the record.
    """

    name: str = Field(..., description="Display name, case preserved")
    phone: str = Field(..., description="E.164-like phone identifier")
    address: str = Field(..., description="Ledger account address (hex)")
    secret: Optional[str] = Field(
        None,
        description="Signing credential for the account, if stored"
    )

    class Config:
        frozen = True  # Replaced wholesale, never patched

    @property
    def key(self) -> str:
        """Lookup key for this record."""
        return self.name.lower()

    def public(self) -> PublicUser:
        return PublicUser(name=self.name, phone=self.phone, address=self.address)

    def to_document(self) -> dict[str, str]:
        """Serialize for the JSON document. `secret` only when present."""
        doc = {"name": self.name, "phone": self.phone, "address": self.address}
        if self.secret:
            doc["secret"] = self.secret
        return doc

    @classmethod
    def from_document(cls, key: str, doc: dict[str, Any]) -> "UserRecord":
        """
        Build a record from one entry of the JSON document.

        Older files name the secret `privateKey` and may omit `name`;
        the document key is used as the name in that case.
        """
        return cls(
            name=doc.get("name") or key,
            phone=doc["phone"],
            address=doc["address"],
            secret=doc.get("secret") or doc.get("privateKey"),
        )
