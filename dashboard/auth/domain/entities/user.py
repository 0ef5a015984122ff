from dataclasses import dataclass
from typing import Any, Mapping


@dataclass(frozen=True, slots=True)
class User:
    id: str
    name: str
    email: str
    password_hash: str

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "User":
        return cls(
            id=str(record["id"]),
            name=record["name"],
            email=record["email"],
            password_hash=record["password"],
        )
