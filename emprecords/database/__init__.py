from .database import Base, engine, SessionLocal, get_db, build_engine, init_db
