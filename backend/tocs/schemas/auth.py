from pydantic import BaseModel, Field


class SessionUserOut(BaseModel):
    id: str
    email: str
    name: str
    image: str | None = None


class SessionResponse(BaseModel):
    user: SessionUserOut


class TokenRequest(BaseModel):
    email: str = Field(min_length=3, max_length=320, pattern=r"^[^@\s]+@[^@\s]+$")
    name: str | None = Field(None, max_length=200)


class TokenResponse(BaseModel):
    token: str
    tokenType: str = "bearer"
    expiresAt: str
    user: SessionUserOut
