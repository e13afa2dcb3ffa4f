# app/schemas/user.py
from typing import Optional
from pydantic import BaseModel, ConfigDict
import uuid

# Public fields returned on GET /users/me
class UserRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    email: str
    full_name: Optional[str] = None
    is_active: bool
