"""Chat Geo Stage: channel-scoped real-time messaging backend."""
