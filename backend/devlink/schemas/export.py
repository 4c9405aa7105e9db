from pydantic import BaseModel
from typing import Optional


class ExportRequest(BaseModel):
    # Unknown formats are rejected by the exporter, after the portfolio lookup
    format: Optional[str] = None
