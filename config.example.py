# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
This file exists to make the repo self-documenting even without opening .env.
"""

ENV_VARS = {
    # App / logging
    "STUDYBUDDY_APP_NAME": "App display name (default: StudyBuddy Planner).",
    "STUDYBUDDY_LOG_LEVEL": "Console logging level (default: INFO). The log file always gets DEBUG.",
    # Local data
    "STUDYBUDDY_DATA_DIR": "Local data directory for logs and the preferences DB (default: .local/studybuddy).",
    "STUDYBUDDY_PREFS_DB_PATH": "SQLite key-value DB path (default: <data_dir>/tasks_prefs.sqlite3).",
    "STUDYBUDDY_TASKS_KEY": "Key of the slot that holds the encoded task list (default: tasks_data).",
}
