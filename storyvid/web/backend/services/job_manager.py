"""Render job tracker.

Each submitted render runs through a fixed pipeline of phases on a
thread pool. Jobs only move forward: progress never decreases and a job
that reaches a terminal status is never touched again. Every mutation
is broadcast via WebSocket to subscribers of the job's project.
"""

import asyncio
import copy
import logging
import threading
import time
import uuid
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Any, Callable, TYPE_CHECKING

from ....config import RenderConfig
from ....errors import NotFoundError, ValidationError

if TYPE_CHECKING:
    from ..websocket.manager import WebSocketManager

logger = logging.getLogger(__name__)


class JobStatus(str, Enum):
    """Status of a render job."""

    PENDING = "pending"
    PROCESSING = "processing"
    RENDERING = "rendering"
    ENCODING = "encoding"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self in TERMINAL_STATUSES


TERMINAL_STATUSES = frozenset({JobStatus.COMPLETED, JobStatus.FAILED, JobStatus.CANCELLED})


@dataclass(frozen=True)
class RenderPhase:
    """One step of the render pipeline.

    ``estimated_time_remaining`` of None keeps the job's current estimate.
    ``delay_seconds`` is how long the simulated work of the phase takes.
    """

    status: JobStatus
    progress: int
    label: str
    estimated_time_remaining: float | None = None
    delay_seconds: float = 0.0


RENDER_PHASES: tuple[RenderPhase, ...] = (
    RenderPhase(JobStatus.PENDING, 0, "Initializing render...", None, 0.5),
    RenderPhase(JobStatus.PROCESSING, 10, "Generating voiceovers...", None, 2.0),
    RenderPhase(JobStatus.RENDERING, 30, "Rendering video frames...", 90, 3.0),
    RenderPhase(JobStatus.RENDERING, 50, "Applying animations...", 60, 3.0),
    RenderPhase(JobStatus.ENCODING, 70, "Encoding video...", 30, 3.0),
    RenderPhase(JobStatus.ENCODING, 85, "Mixing audio tracks...", 15, 2.0),
    RenderPhase(JobStatus.ENCODING, 95, "Finalizing video...", 5, 2.0),
    RenderPhase(JobStatus.COMPLETED, 100, "Render complete!", 0),
)


@dataclass
class RenderJob:
    """A render request and its progress through the pipeline."""

    id: str
    project_id: str
    config: Any
    status: JobStatus = JobStatus.PENDING
    progress: int = 0
    current_step: str = ""
    start_time: datetime = field(default_factory=datetime.now)
    end_time: datetime | None = None
    estimated_time_remaining: float = 0
    output_url: str | None = None
    error: str | None = None
    updated_at: datetime = field(default_factory=datetime.now)
    _future: Future | None = field(default=None, repr=False, compare=False)


# Called with a job snapshot and the phase just published; raising fails the job
PhaseRunner = Callable[[RenderJob, RenderPhase], None]


class JobManager:
    """Owns the render job registry and drives each job through its phases.

    Jobs are executed in a thread pool. The registry lock is held only
    while a job record is read or written, never while a phase runs.
    """

    def __init__(
        self,
        max_workers: int = 8,
        estimated_duration: float = 120,
        phase_delay_scale: float = 1.0,
        output_url_prefix: str = "/videos",
        job_ttl_seconds: int | None = 3600,
        phase_runner: PhaseRunner | None = None,
        phases: tuple[RenderPhase, ...] = RENDER_PHASES,
    ):
        """Initialize the job manager.

        Args:
            max_workers: Maximum number of jobs advancing at once.
            estimated_duration: Advisory total render time in seconds.
            phase_delay_scale: Multiplier for the simulated phase delays.
            output_url_prefix: Prefix of the URL assigned to finished renders.
            job_ttl_seconds: Age after which finished jobs are evicted
                (None keeps them forever).
            phase_runner: Work executed for each non-terminal phase. Defaults
                to waiting out the phase delay.
            phases: Pipeline to run; the first phase is the creation state
                and the last must be COMPLETED.
        """
        if not phases or phases[-1].status is not JobStatus.COMPLETED:
            raise ValueError("Render pipeline must end in the completed phase")

        self._jobs: dict[str, RenderJob] = {}
        self._cancel_events: dict[str, threading.Event] = {}
        self._lock = threading.Lock()
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="render")
        self._ws_manager: "WebSocketManager | None" = None
        self._loop: asyncio.AbstractEventLoop | None = None

        self.estimated_duration = estimated_duration
        self.phase_delay_scale = phase_delay_scale
        self.output_url_prefix = output_url_prefix.rstrip("/")
        self.job_ttl_seconds = job_ttl_seconds
        self.phases = phases
        self.phase_runner = phase_runner or self._wait_out_phase

    @classmethod
    def from_config(cls, config: RenderConfig, **kwargs: Any) -> "JobManager":
        """Build a job manager from the ``render`` configuration section."""
        return cls(
            max_workers=config.max_workers,
            estimated_duration=config.estimated_duration_seconds,
            phase_delay_scale=config.phase_delay_scale,
            output_url_prefix=config.output_url_prefix,
            job_ttl_seconds=config.job_ttl_seconds,
            **kwargs,
        )

    def set_websocket_manager(self, ws_manager: "WebSocketManager") -> None:
        """Set the WebSocket manager for broadcasting updates.

        Args:
            ws_manager: WebSocket manager instance.
        """
        self._ws_manager = ws_manager

    def set_event_loop(self, loop: asyncio.AbstractEventLoop) -> None:
        """Set the event loop for async callbacks.

        Args:
            loop: The asyncio event loop.
        """
        self._loop = loop

    def submit_render(self, project_id: str, config: Any) -> str:
        """Register a render job and start advancing it in the background.

        Args:
            project_id: ID of the project being rendered.
            config: Render configuration, stored as given.

        Returns:
            The job ID.

        Raises:
            ValidationError: If the project ID or config is missing.
        """
        if not project_id or not str(project_id).strip():
            raise ValidationError("Project ID and config are required")
        if config is None:
            raise ValidationError("Project ID and config are required")

        if self.job_ttl_seconds is not None:
            self.cleanup_old_jobs(self.job_ttl_seconds)

        initial = self.phases[0]
        job_id = f"job_{int(time.time() * 1000)}_{uuid.uuid4().hex[:9]}"
        job = RenderJob(
            id=job_id,
            project_id=project_id,
            config=copy.deepcopy(config),
            status=initial.status,
            progress=initial.progress,
            current_step=initial.label,
            estimated_time_remaining=self.estimated_duration,
        )

        with self._lock:
            self._jobs[job_id] = job
            self._cancel_events[job_id] = threading.Event()
            self._broadcast_update(self._snapshot(job))

        logger.info("Render job %s queued for project %s", job_id, project_id)
        job._future = self._executor.submit(self._advance, job_id)
        return job_id

    def _advance(self, job_id: str) -> None:
        """Run the pipeline for one job until it finishes, fails or is cancelled."""
        try:
            for index, phase in enumerate(self.phases):
                if index == 0:
                    job = self.get_job(job_id)
                else:
                    job = self._apply_phase(job_id, phase)
                if job is None or job.status.is_terminal:
                    return
                self.phase_runner(job, phase)
        except Exception as e:
            logger.exception("Render job %s failed", job_id)
            self._fail(job_id, str(e) or type(e).__name__)

    def _wait_out_phase(self, job: RenderJob, phase: RenderPhase) -> None:
        delay = phase.delay_seconds * self.phase_delay_scale
        if delay <= 0:
            return
        event = self._cancel_events.get(job.id)
        if event is not None:
            event.wait(delay)
        else:
            time.sleep(delay)

    def _apply_phase(self, job_id: str, phase: RenderPhase) -> RenderJob | None:
        """Publish ``phase`` on the job; returns a snapshot, or None if it can't move."""
        with self._lock:
            job = self._jobs.get(job_id)
            if job is None or job.status.is_terminal:
                return None

            now = datetime.now()
            job.status = phase.status
            job.progress = max(job.progress, phase.progress)
            job.current_step = phase.label
            if phase.estimated_time_remaining is not None:
                job.estimated_time_remaining = min(
                    job.estimated_time_remaining, phase.estimated_time_remaining
                )
            if phase.status is JobStatus.COMPLETED:
                job.progress = 100
                job.estimated_time_remaining = 0
                job.output_url = f"{self.output_url_prefix}/{job_id}.mp4"
                job.end_time = now
            job.updated_at = now

            snapshot = self._snapshot(job)
            self._broadcast_update(snapshot)

        if phase.status is JobStatus.COMPLETED:
            logger.info("Render job %s completed: %s", job_id, snapshot.output_url)
        return snapshot

    def _fail(self, job_id: str, message: str) -> None:
        with self._lock:
            job = self._jobs.get(job_id)
            if job is None or job.status.is_terminal:
                return
            now = datetime.now()
            job.status = JobStatus.FAILED
            job.error = message
            job.end_time = now
            job.updated_at = now
            self._broadcast_update(self._snapshot(job))

    @staticmethod
    def _snapshot(job: RenderJob) -> RenderJob:
        # config is caller data and may be mutable; snapshots get their own copy
        return replace(job, config=copy.deepcopy(job.config), _future=None)

    def _broadcast_update(self, job: RenderJob) -> None:
        """Broadcast job update via WebSocket.

        Args:
            job: Snapshot of the job to broadcast.
        """
        if self._ws_manager and self._loop:
            coro = self._ws_manager.broadcast_job_update(job)
            try:
                asyncio.run_coroutine_threadsafe(coro, self._loop)
            except RuntimeError:
                # Event loop already closed (server shutting down)
                coro.close()
                logger.debug("Dropped update for %s: event loop closed", job.id)

    def get_job(self, job_id: str) -> RenderJob | None:
        """Get a snapshot of a job by ID.

        Args:
            job_id: The job ID.

        Returns:
            A copy of the job, or None if not found.
        """
        with self._lock:
            job = self._jobs.get(job_id)
            return self._snapshot(job) if job else None

    def get_status(self, job_id: str) -> RenderJob:
        """Get a snapshot of a job, failing if it does not exist.

        Raises:
            NotFoundError: If no job has this ID.
        """
        job = self.get_job(job_id)
        if job is None:
            raise NotFoundError("Render job not found")
        return job

    def list_jobs(self, project_id: str | None = None) -> list[RenderJob]:
        """List all jobs, optionally filtered by project.

        Args:
            project_id: Optional project ID to filter by.

        Returns:
            Job snapshots, newest first.
        """
        with self._lock:
            jobs = [self._snapshot(j) for j in self._jobs.values()]
        if project_id:
            jobs = [j for j in jobs if j.project_id == project_id]
        return sorted(jobs, key=lambda j: j.start_time, reverse=True)

    def cancel_job(self, job_id: str) -> bool:
        """Cancel a job that has not finished yet.

        Args:
            job_id: The job ID.

        Returns:
            True if the job was cancelled, False if it is unknown or finished.
        """
        with self._lock:
            job = self._jobs.get(job_id)
            if not job or job.status.is_terminal:
                return False
            if job._future:
                job._future.cancel()
            now = datetime.now()
            job.status = JobStatus.CANCELLED
            job.error = "Render cancelled"
            job.end_time = now
            job.updated_at = now
            self._broadcast_update(self._snapshot(job))
            event = self._cancel_events.get(job_id)

        if event is not None:
            event.set()
        logger.info("Render job %s cancelled", job_id)
        return True

    def cleanup_old_jobs(self, max_age_seconds: int = 3600) -> int:
        """Remove finished jobs older than ``max_age_seconds``.

        Args:
            max_age_seconds: Maximum age of finished jobs to keep.

        Returns:
            Number of jobs removed.
        """
        cutoff = datetime.now()
        with self._lock:
            to_remove = [
                job_id
                for job_id, job in self._jobs.items()
                if job.status.is_terminal
                and (cutoff - job.updated_at).total_seconds() > max_age_seconds
            ]
            for job_id in to_remove:
                del self._jobs[job_id]
                self._cancel_events.pop(job_id, None)
        if to_remove:
            logger.debug("Evicted %d finished render jobs", len(to_remove))
        return len(to_remove)

    def shutdown(self, wait: bool = True) -> None:
        """Shutdown the job manager.

        Args:
            wait: Whether to wait for running jobs to complete.
        """
        self._executor.shutdown(wait=wait, cancel_futures=not wait)
