"""WebSocket connection manager for real-time updates.

Handles client connections and broadcasts render job updates
to clients subscribed to the job's project.
"""

import logging
from typing import TYPE_CHECKING, Any

from fastapi import WebSocket

if TYPE_CHECKING:
    from ..services.job_manager import RenderJob

logger = logging.getLogger(__name__)


def job_update_message(job: "RenderJob") -> dict[str, Any]:
    """Build the ``job_update`` message for a job snapshot."""
    from ..models.responses import RenderJobResponse

    return {
        "type": "job_update",
        "job": RenderJobResponse.from_job(job).model_dump(mode="json", by_alias=True),
    }


class WebSocketManager:
    """Manages WebSocket connections and subscriptions.

    Clients subscribe to projects to receive real-time
    updates about their render jobs.
    """

    def __init__(self):
        """Initialize the WebSocket manager."""
        self._connections: dict[str, WebSocket] = {}
        self._project_subscriptions: dict[str, set[str]] = {}  # project_id -> client_ids

    async def connect(self, websocket: WebSocket, client_id: str) -> None:
        """Accept a new WebSocket connection.

        Args:
            websocket: The WebSocket connection.
            client_id: Unique client identifier.
        """
        await websocket.accept()
        self._connections[client_id] = websocket
        logger.debug("Client %s connected", client_id)

    def disconnect(self, client_id: str) -> None:
        """Handle client disconnection.

        Args:
            client_id: The client identifier.
        """
        self._connections.pop(client_id, None)
        for subscribers in self._project_subscriptions.values():
            subscribers.discard(client_id)

    async def subscribe_to_project(self, client_id: str, project_id: str) -> None:
        """Subscribe a client to a project's updates.

        Args:
            client_id: The client identifier.
            project_id: The project to subscribe to.
        """
        self._project_subscriptions.setdefault(project_id, set()).add(client_id)

    async def unsubscribe_from_project(self, client_id: str, project_id: str) -> None:
        """Unsubscribe a client from a project.

        Args:
            client_id: The client identifier.
            project_id: The project to unsubscribe from.
        """
        if project_id in self._project_subscriptions:
            self._project_subscriptions[project_id].discard(client_id)

    async def broadcast_job_update(self, job: "RenderJob") -> None:
        """Send a job update to every client subscribed to its project.

        Clients whose send fails are disconnected.

        Args:
            job: Snapshot of the job with updated status.
        """
        subscribers = list(self._project_subscriptions.get(job.project_id, ()))
        if not subscribers:
            return

        message = job_update_message(job)
        disconnected = []
        for client_id in subscribers:
            websocket = self._connections.get(client_id)
            if websocket:
                try:
                    await websocket.send_json(message)
                except Exception as e:
                    logger.debug("Dropping client %s: %s", client_id, e)
                    disconnected.append(client_id)

        for client_id in disconnected:
            self.disconnect(client_id)

    async def send_to_client(self, client_id: str, message: dict) -> bool:
        """Send a message to a specific client.

        Args:
            client_id: The client identifier.
            message: The message to send.

        Returns:
            True if sent successfully, False otherwise.
        """
        websocket = self._connections.get(client_id)
        if not websocket:
            return False
        try:
            await websocket.send_json(message)
            return True
        except Exception:
            self.disconnect(client_id)
            return False

    @property
    def connection_count(self) -> int:
        """Get the number of active connections."""
        return len(self._connections)

    def get_subscribed_projects(self, client_id: str) -> list[str]:
        """Get projects a client is subscribed to.

        Args:
            client_id: The client identifier.

        Returns:
            List of project IDs.
        """
        return [
            project_id
            for project_id, subscribers in self._project_subscriptions.items()
            if client_id in subscribers
        ]
