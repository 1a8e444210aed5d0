from typing import Optional

from pydantic import BaseModel, field_validator


class Address(BaseModel):
    street: Optional[str] = None
    city: Optional[str] = None
    country: Optional[str] = None

    @field_validator("street", "city", "country")
    @classmethod
    def not_blank(cls, v, info):
        # missing parts are allowed, empty strings are not
        if v is not None and not v.strip():
            raise ValueError(f"{info.field_name} cannot be blank")
        return v


class Customer(BaseModel):
    mongo_id: str
    name: str
    email: str
    address: Address

    @field_validator("mongo_id", "name", "email")
    @classmethod
    def required_text(cls, v, info):
        if not v.strip():
            raise ValueError(f"{info.field_name} cannot be blank")
        return v

    @classmethod
    def from_document(cls, doc: dict) -> "Customer":
        """Build a Customer from a raw `customers` document.

        Raises pydantic.ValidationError when a required field is missing or
        blank, or when the document carries no embedded address.
        """
        _id = doc.get("_id")
        return cls(
            mongo_id=str(_id) if _id is not None else "",
            name=doc.get("name") or "",
            email=doc.get("email") or "",
            address=doc.get("address"),
        )
