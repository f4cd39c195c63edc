# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
Do NOT commit real secrets. Use .env (local, gitignored).

This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "TODO_SYNC_APP_NAME": "App display name (default: todo-sync).",
    "TODO_SYNC_LOG_LEVEL": "Console logging level (default: INFO).",
    "TODO_SYNC_CONSOLE_ENABLED": "Run the interactive console (true/false, default: true).",
    # Remote store
    "TODO_SYNC_STORE_URL": "Project URL of the Supabase/PostgREST backend (fallback: SUPABASE_URL).",
    "TODO_SYNC_STORE_API_KEY": "Public anon API key (fallback: SUPABASE_ANON_KEY).",
    "TODO_SYNC_STORE_TABLE": "Table holding the task rows (default: todos).",
    "TODO_SYNC_STRICT_OWNER_SCOPE": (
        "Also filter rename/delete by user_id (default: true). "
        "false restores id-only rename/delete."
    ),
    "TODO_SYNC_HTTP_TIMEOUT_SECONDS": "Timeout for store/auth/webhook calls (default: 10).",
    # Creation workflow
    "TODO_SYNC_CREATION_WEBHOOK_URL": (
        "Webhook that inserts new tasks (fallback: N8N_PRODUCTION_URL). "
        "Missing => adding tasks fails, everything else works."
    ),
    # Paths (gitignored)
    "TODO_SYNC_DATA_DIR": "Local data directory for logs (default: .local/todo_sync).",
    "TODO_SYNC_SESSION_PATH": (
        "Stored session JSON with an access_token (default: <data_dir>/session.json)."
    ),
}
