from distributor.database import SessionLocal


def get_db():
    """
    Dependency that yields a database session per request
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
