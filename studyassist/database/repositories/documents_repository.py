from typing import Any

from psycopg.rows import dict_row

from studyassist.chat.models import ReferenceDocument
from studyassist.database.connection import get_connection
from studyassist.database.models import DocumentRecord
from studyassist.ingestion.exceptions import DocumentNotFoundError


def _to_record(row: dict[str, Any]) -> DocumentRecord:
    return DocumentRecord(
        id=row["id"],
        user_id=str(row["user_id"]),
        filename=row["filename"],
        file_path=row["file_path"],
        content=row["content"] or "",
        file_type=row["file_type"] or "",
        created_at=row.get("created_at"),
    )


class DocumentsRepository:
    """Database operations for the documents table.

    Rows are partitioned by ``user_id``; this class never reads across users.
    """

    def insert(
        self,
        *,
        user_id: str,
        filename: str,
        file_path: str,
        content: str,
        file_type: str,
    ) -> DocumentRecord:
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    """
                    INSERT INTO documents (user_id, filename, file_path, content, file_type)
                    VALUES (%s, %s, %s, %s, %s)
                    RETURNING id, user_id, filename, file_path, content, file_type, created_at
                    """,
                    (user_id, filename, file_path, content, file_type),
                )
                row = cur.fetchone()
            conn.commit()
        if row is None:
            raise RuntimeError(f"Insert of document '{filename}' returned no row")
        return _to_record(row)

    def find_by_id(self, document_id: int) -> DocumentRecord:
        """Raises DocumentNotFoundError if no document with this ID exists."""
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    """
                    SELECT id, user_id, filename, file_path, content, file_type, created_at
                    FROM documents
                    WHERE id = %s
                    """,
                    (document_id,),
                )
                row = cur.fetchone()
        if row is None:
            raise DocumentNotFoundError(f"Document {document_id} not found")
        return _to_record(row)

    def list_for_user(self, user_id: str) -> list[DocumentRecord]:
        """The user's documents, newest first."""
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    """
                    SELECT id, user_id, filename, file_path, content, file_type, created_at
                    FROM documents
                    WHERE user_id = %s
                    ORDER BY created_at DESC, id DESC
                    """,
                    (user_id,),
                )
                rows = cur.fetchall()
        return [_to_record(row) for row in rows]

    def list_reference_documents(self, user_id: str) -> list[ReferenceDocument]:
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    "SELECT filename, content FROM documents WHERE user_id = %s",
                    (user_id,),
                )
                rows = cur.fetchall()
        return [
            ReferenceDocument(filename=row["filename"], content=row["content"] or "")
            for row in rows
        ]

    def delete(self, document_id: int) -> None:
        """Raises DocumentNotFoundError if no document with this ID exists."""
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute("DELETE FROM documents WHERE id = %s", (document_id,))
                if cur.rowcount == 0:
                    raise DocumentNotFoundError(f"Document {document_id} not found")
            conn.commit()
