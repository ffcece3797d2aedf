"""Web dashboard -- HTML pages, JSON API and WebSocket push."""
