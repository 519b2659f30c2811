from sqlalchemy.orm import Session
from sqlalchemy.dialects import mysql, postgresql, sqlite


def insert_or_ignore(db: Session, model, rows: list):
    """
    Inserts rows, silently skipping any that hit a unique constraint.
    Returns the number of rows actually written.
    """
    table = model.__table__
    dialect = db.get_bind().dialect.name

    if dialect == "postgresql":
        stmt = postgresql.insert(table).values(rows).on_conflict_do_nothing()
    elif dialect == "sqlite":
        stmt = sqlite.insert(table).values(rows).on_conflict_do_nothing()
    elif dialect in ("mysql", "mariadb"):
        stmt = mysql.insert(table).values(rows).prefix_with("IGNORE")
    else:
        raise NotImplementedError(f"insert_or_ignore is not supported on {dialect}")

    result = db.execute(stmt)
    return result.rowcount
