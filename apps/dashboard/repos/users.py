from typing import Optional, Dict, Any
from psycopg import Connection

# Fetches a single user by email. Returns None if not found.
def get_user_by_email(conn: Connection, email: str) -> Optional[Dict[str, Any]]:
    with conn.cursor() as cur:
        cur.execute(
            """
            SELECT id::text AS id, name, email, password
            FROM users
            WHERE email = %s
            """,
            (email,),
        )
        row = cur.fetchone()
        if not row:
            return None
        columns = [c[0] for c in cur.description]
        return dict(zip(columns, row))
