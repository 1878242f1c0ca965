from pydantic import BaseModel


class User(BaseModel):
    """Staff member whose state decides weekend convention and holidays."""

    id: int
    name: str
    email: str
    department: str | None = None
    state: str
