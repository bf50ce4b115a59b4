"""HTTP and WebSocket API for Chat Geo."""
