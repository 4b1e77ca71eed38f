"""FastAPI application factory."""

import asyncio
import contextlib
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import date

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse

from study_tracker.api.models import (
    DayReportResponse,
    NotificationPreference,
    PrayerMarkResponse,
    PrayerStatesResponse,
    ProfilePayload,
    TrackerResponse,
)
from study_tracker.api.tasks import router as tasks_router
from study_tracker.app_logging import configure_logging
from study_tracker.containers import AppContainer
from study_tracker.domain.activities import ActivityKind
from study_tracker.domain.prayers import PrayerName, PrayerState
from study_tracker.services.notifications import (
    TEST_NOTICE,
    prayer_notice,
    session_notices,
)
from study_tracker.services.tracker import TrackerService


def create_app(container: AppContainer) -> FastAPI:  # noqa: PLR0915
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    async def refresh_prayers_periodically(
        tracker_service: TrackerService, interval: float
    ) -> None:
        while True:
            await asyncio.sleep(interval)
            try:
                tracker_service.refresh_prayers()
            except Exception:
                logger.exception("Periodic prayer refresh failed")

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        app.state.container.tracker_service.resume()
        refresher = asyncio.create_task(
            refresh_prayers_periodically(
                app.state.container.tracker_service,
                app.state.container.settings.prayer_refresh_seconds,
            )
        )
        yield
        refresher.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await refresher
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(tasks_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/tracker")
    async def tracker(request: Request) -> TrackerResponse:
        """Return today's timers with live elapsed time."""
        state_container: AppContainer = request.app.state.container
        return TrackerResponse.from_snapshot(
            state_container.tracker_service.snapshot()
        )

    @app.post("/tracker/activities/{kind}/start")
    async def start_activity(kind: ActivityKind, request: Request) -> TrackerResponse:
        """Start, switch to, or toggle off an activity."""
        state_container: AppContainer = request.app.state.container
        tracker_service = state_container.tracker_service
        change = tracker_service.start(kind)
        await state_container.notification_service.dispatch_all(
            session_notices(change),
            enabled=tracker_service.notifications_enabled(),
        )
        return TrackerResponse.from_snapshot(tracker_service.snapshot())

    @app.post("/tracker/stop")
    async def stop_activity(request: Request) -> TrackerResponse:
        """Stop the running activity."""
        state_container: AppContainer = request.app.state.container
        tracker_service = state_container.tracker_service
        change = tracker_service.stop()
        await state_container.notification_service.dispatch_all(
            session_notices(change),
            enabled=tracker_service.notifications_enabled(),
        )
        return TrackerResponse.from_snapshot(tracker_service.snapshot())

    @app.post("/tracker/resume")
    async def resume(request: Request) -> TrackerResponse:
        """Recompute everything after the UI returns to the foreground."""
        state_container: AppContainer = request.app.state.container
        return TrackerResponse.from_snapshot(state_container.tracker_service.resume())

    @app.post("/tracker/reset-today")
    async def reset_today(request: Request) -> TrackerResponse:
        """Clear today's data and stop the running activity."""
        state_container: AppContainer = request.app.state.container
        state_container.tracker_service.reset_today()
        return TrackerResponse.from_snapshot(
            state_container.tracker_service.snapshot()
        )

    @app.get("/prayers/{day}")
    async def prayers(day: date, request: Request) -> PrayerStatesResponse:
        """Return prayer states for a day."""
        state_container: AppContainer = request.app.state.container
        key = day.isoformat()
        return PrayerStatesResponse(
            day=key, prayers=state_container.tracker_service.prayer_states(key)
        )

    @app.post("/prayers/{prayer}/mark", response_model=PrayerMarkResponse)
    async def mark_prayer(prayer: PrayerName, request: Request) -> object:
        """Toggle today's prayer between active and completed."""
        state_container: AppContainer = request.app.state.container
        tracker_service = state_container.tracker_service
        mark = tracker_service.mark_prayer(prayer)
        body = PrayerMarkResponse.from_mark(mark)
        if not mark.accepted:
            return JSONResponse(
                status_code=status.HTTP_409_CONFLICT,
                content=body.model_dump(mode="json"),
            )
        if mark.state is PrayerState.COMPLETED:
            await state_container.notification_service.dispatch(
                prayer_notice(prayer),
                enabled=tracker_service.notifications_enabled(),
            )
        return body

    @app.get("/days")
    async def days(request: Request) -> dict[str, list[str]]:
        """Return known dates for the report picker, newest first."""
        state_container: AppContainer = request.app.state.container
        return {"dates": state_container.tracker_service.known_dates()}

    @app.get("/days/{day}")
    async def day_report(day: date, request: Request) -> DayReportResponse:
        """Return the report for a day."""
        state_container: AppContainer = request.app.state.container
        return DayReportResponse.from_report(
            state_container.tracker_service.day_report(day.isoformat())
        )

    @app.get("/profile")
    async def get_profile(request: Request) -> ProfilePayload | None:
        """Return the saved profile, or null."""
        state_container: AppContainer = request.app.state.container
        profile = state_container.tracker_service.get_profile()
        return ProfilePayload.from_profile(profile) if profile else None

    @app.put("/profile")
    async def put_profile(payload: ProfilePayload, request: Request) -> ProfilePayload:
        """Save the profile."""
        state_container: AppContainer = request.app.state.container
        try:
            profile = state_container.tracker_service.set_profile(
                payload.name, payload.group_label
            )
        except ValueError as exc:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
            ) from exc
        return ProfilePayload.from_profile(profile)

    @app.put("/settings/notifications")
    async def put_notifications(
        payload: NotificationPreference, request: Request
    ) -> NotificationPreference:
        """Switch notifications on or off."""
        state_container: AppContainer = request.app.state.container
        state_container.tracker_service.set_notifications_enabled(
            enabled=payload.enabled
        )
        return NotificationPreference(
            enabled=state_container.tracker_service.notifications_enabled()
        )

    @app.post("/settings/notifications/test")
    async def test_notification(request: Request) -> dict[str, bool]:
        """Send a test notice through the configured channel."""
        state_container: AppContainer = request.app.state.container
        delivered = await state_container.notification_service.dispatch(
            TEST_NOTICE,
            enabled=state_container.tracker_service.notifications_enabled(),
        )
        return {"delivered": delivered}

    return app
