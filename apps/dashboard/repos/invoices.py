from typing import List, Dict, Any
from psycopg import Connection

# Inserts a new invoice row. `amount` is already in cents and `date` is an
# ISO calendar date; the id is generated by the database.
def insert_invoice(conn: Connection, *, customer_id: str, amount: int, status: str, date: str) -> None:
    sql = """
    INSERT INTO invoices (customer_id, amount, status, date)
    VALUES (%(customer_id)s, %(amount)s, %(status)s, %(date)s)
    """
    with conn.cursor() as cur:
        cur.execute(sql, {
            "customer_id": customer_id,
            "amount": amount,
            "status": status,
            "date": date,
        })

# Replaces the editable fields of an invoice. id and date are never written.
# Returns True if a row was updated.
def update_invoice(conn: Connection, invoice_id: str, *, customer_id: str, amount: int, status: str) -> bool:
    sql = """
    UPDATE invoices
    SET customer_id = %(customer_id)s, amount = %(amount)s, status = %(status)s
    WHERE id = %(id)s
    """
    with conn.cursor() as cur:
        cur.execute(sql, {
            "customer_id": customer_id,
            "amount": amount,
            "status": status,
            "id": invoice_id,
        })
        return cur.rowcount > 0

# Deletes an invoice by id. Returns True if a row was removed.
def delete_invoice(conn: Connection, invoice_id: str) -> bool:
    with conn.cursor() as cur:
        cur.execute("DELETE FROM invoices WHERE id = %(id)s", {"id": invoice_id})
        return cur.rowcount > 0


# Lists invoices with their customer, newest first.
# LIMIT = page size; OFFSET = start index
def list_invoices(conn: Connection, limit: int = 50, offset: int = 0) -> List[Dict[str, Any]]:
    with conn.cursor() as cur:
        cur.execute(
            """
            SELECT i.id::text AS id, i.customer_id::text AS customer_id, i.amount, i.status, i.date, c.name, c.email
            FROM invoices i
            LEFT JOIN customers c ON c.id = i.customer_id
            ORDER BY i.date DESC, i.id
            LIMIT %s OFFSET %s
            """,
            (limit, offset),
        )
        columns = [col[0] for col in cur.description] # DB metadata
        return [dict(zip(columns, row)) for row in cur.fetchall()]
