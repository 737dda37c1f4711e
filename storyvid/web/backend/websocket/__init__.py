"""WebSocket push of render job updates."""

from .manager import WebSocketManager, job_update_message

__all__ = ["WebSocketManager", "job_update_message"]
