from studyassist.database.connection import get_connection

DEFAULT_LANGUAGE = "en"


class ProfilesRepository:
    """Database operations for the profiles table."""

    def get_preferred_language(self, user_id: str) -> str:
        """Return the user's language code, or 'en' when none is stored."""
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    "SELECT preferred_language FROM profiles WHERE user_id = %s",
                    (user_id,),
                )
                row = cur.fetchone()
        if row is None or not row[0]:
            return DEFAULT_LANGUAGE
        return str(row[0])

    def update_preferred_language(self, user_id: str, language: str) -> None:
        with get_connection() as conn:
            conn.execute(
                """
                INSERT INTO profiles (user_id, preferred_language)
                VALUES (%s, %s)
                ON CONFLICT (user_id) DO UPDATE SET preferred_language = EXCLUDED.preferred_language
                """,
                (user_id, language),
            )
            conn.commit()
