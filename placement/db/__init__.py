from placement.db.session import SessionLocal, build_engine, build_session_factory, engine, get_db

__all__ = ["SessionLocal", "build_engine", "build_session_factory", "engine", "get_db"]
