from sqlmodel import SQLModel

class Token(SQLModel):
    """
    Schema for JWT access token.
    """
    access_token: str
    token_type: str
