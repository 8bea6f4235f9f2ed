# models.py
# Pydantic models for the records the API exchanges.
# Users and projects are passed through as plain dicts, no schema enforced.

from pydantic import BaseModel, ConfigDict, StrictBool, StrictInt


class AccessRecord(BaseModel):
    # extra fields are allowed and kept
    model_config = ConfigDict(extra="allow")

    user_id: StrictInt
    project_id: StrictInt
    read_access: StrictBool
    write_access: StrictBool


class WriteResult(BaseModel):
    ok: bool = True
    count: int
