"""API request models."""

from uuid import UUID

from pydantic import BaseModel

NIL_UUID = UUID(int=0)


class SampleCreateRequest(BaseModel):
    """Request to create a sample contact."""

    name: str = ""
    email: str = ""
    phone: str = ""
    website: str = ""
    auto_redirect: bool = False


class SampleUpdateRequest(SampleCreateRequest):
    """Request to update an existing sample contact."""

    id: UUID = NIL_UUID


class SampleReadRequest(BaseModel):
    """Query parameters for reading forecasts."""

    id: str = ""
    page: int = 1
    page_size: int = 20
