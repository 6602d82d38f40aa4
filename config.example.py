# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "TICKLOOP_APP_NAME": "App display name (default: tickloop).",
    "TICKLOOP_LOG_LEVEL": "Console logging level (default: INFO).",
    "TICKLOOP_DATA_DIR": "Local directory for tickloop.log (default: .local/tickloop).",
    # Demo handlers
    "TICKLOOP_HELLO_FILE": "File read by menu option 2; created if missing (default: hello.txt).",
    "TICKLOOP_GREETING": "Payload of menu option 1 (default: How are you doing today?).",
    # Remote fetcher
    "TICKLOOP_API_BASE_URL": "Posts API base URL (default: https://jsonplaceholder.typicode.com).",
    "TICKLOOP_API_POST_ID": "Post id fetched by menu option 3 (default: 2).",
    "TICKLOOP_HTTP_TIMEOUT_SECONDS": "HTTP timeout for the fetcher (default: 10).",
    # Async dispatch
    "TICKLOOP_ASYNC_TIMEOUT_SECONDS": (
        "Deadline for async handlers; unset or <= 0 means no deadline (default: unset)."
    ),
}
