"""
Pydantic schemas for the users resource.

UserPayload is what POST and PUT bodies decode into. UserOut is the JSON
view returned by the read handlers; it keeps the Spanish wire names
("edad", "telefono") that existing clients of the service expect.
"""

from typing import List, Optional, Sequence

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, TypeAdapter


class UserPayload(BaseModel):
    """
    Request body for creating or replacing a user.

    name and email are required. age and phone may be absent or null;
    both mean "no value". The optional fields accept their English or
    Spanish name. Types are checked strictly: "30" is not an age.
    Unknown keys, including a client-supplied "id", are ignored.
    """
    model_config = ConfigDict(strict=True, extra="ignore")

    name: str
    email: str
    age: Optional[int] = Field(default=None, validation_alias=AliasChoices("age", "edad"))
    phone: Optional[str] = Field(default=None, validation_alias=AliasChoices("phone", "telefono"))


class UserOut(BaseModel):
    """JSON representation of a stored user."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    age: Optional[int] = Field(default=None, serialization_alias="edad")
    phone: Optional[str] = Field(default=None, serialization_alias="telefono")

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True)


_user_list = TypeAdapter(List[UserOut])


def users_to_json(users: Sequence[UserOut]) -> str:
    """Serialize a sequence of users as a compact JSON array."""
    return _user_list.dump_json(list(users), by_alias=True).decode("utf-8")
