"""Response envelopes shared by several resources."""

from pydantic import BaseModel, Field


class CreatedResponse(BaseModel):
    """Body returned after a document was written."""

    id: str = Field(..., examples=["Xq3v9LkP0aZt7bNc2Rw1"])
    message: str


class MessageResponse(BaseModel):
    message: str
