"""Connection status API."""
