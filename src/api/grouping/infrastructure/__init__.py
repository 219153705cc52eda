"""Infrastructure for the grouping context: SQLAlchemy models, repositories and stores."""
