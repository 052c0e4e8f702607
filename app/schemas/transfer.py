# schemas/transfer.py

from pydantic import BaseModel
from typing import List


class ImportRowError(BaseModel):
    row: int
    detail: str


class ImportSummary(BaseModel):
    total: int
    success: int
    failed: int
    skipped: int
    errors: List[ImportRowError]


class UploadResponse(BaseModel):
    success: bool
    filename: str
    url: str
