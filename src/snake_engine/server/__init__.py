"""HTTP and WebSocket host for snake engine sessions."""
