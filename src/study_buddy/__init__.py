"""StudyBuddy Planner: a small study task list persisted to a local key-value store."""

__version__ = "0.1.0"
