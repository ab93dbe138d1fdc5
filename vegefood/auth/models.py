"""Auth models: registered users and form payloads."""
from dataclasses import dataclass
from typing import Optional


@dataclass
class User:
    """
    Registered user.

    `password` is only present on registry records; the current-session
    projection leaves it as None.
    """
    username: str
    email: str
    password: Optional[str] = None

    def public(self) -> "User":
        return User(username=self.username, email=self.email)

    def to_dict(self) -> dict:
        data = {"username": self.username, "email": self.email}
        if self.password is not None:
            data["password"] = self.password
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "User":
        return cls(
            username=str(data["username"]),
            email=str(data["email"]),
            password=data.get("password"),
        )


@dataclass
class RegisterData:
    username: str
    email: str
    password: str


@dataclass
class LoginData:
    email: str
    password: str
