"""Root conftest — shared test configuration."""

import os

# Ensure tests never reach a real order backend
os.environ["SUPABASE_URL"] = ""
os.environ["SUPABASE_KEY"] = ""
os.environ.setdefault("LOG_FORMAT", "text")
