from dataclasses import dataclass
from datetime import datetime


@dataclass
class DocumentRecord:
    """Represents a row from the documents table."""

    id: int
    user_id: str
    filename: str
    file_path: str
    content: str
    file_type: str
    created_at: datetime | None = None
