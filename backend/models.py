from pydantic import BaseModel, Field
from typing import Optional
from enum import Enum

class SyncStatus(str, Enum):
    UP_TO_DATE = "UpToDate"
    SUCCESS = "Success"
    FAILED = "Failed"

class SyncResult(BaseModel):
    status: SyncStatus = Field(..., description="Outcome of the pull")
    detail: Optional[str] = Field(None, description="Raw git output, only set when the pull failed")

    @classmethod
    def up_to_date(cls) -> "SyncResult":
        return cls(status=SyncStatus.UP_TO_DATE)

    @classmethod
    def success(cls) -> "SyncResult":
        return cls(status=SyncStatus.SUCCESS)

    @classmethod
    def failed(cls, detail: str) -> "SyncResult":
        return cls(status=SyncStatus.FAILED, detail=detail)

    def __str__(self) -> str:
        """Plain text body sent back to the webhook sender"""
        if self.status == SyncStatus.FAILED:
            return f"Failed({self.detail})"
        return self.status.value
