from pydantic import BaseModel


class Notification(BaseModel):
    """Fire-and-forget notification shown to the user"""
    title: str
    message: str
    created_at_ms: int
