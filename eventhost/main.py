"""FastAPI application entry point."""
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from eventhost.config import settings
from eventhost.database import Base, engine
from eventhost.exception_handlers import register_exception_handlers

# Import routers
from eventhost.routers import users, events, rsvps, comments, notifications

# Import all models so Base.metadata knows about them
from eventhost.models.user import User                  # noqa: F401
from eventhost.models.event import Event                # noqa: F401
from eventhost.models.rsvp import Rsvp                  # noqa: F401
from eventhost.models.comment import Comment            # noqa: F401
from eventhost.models.mention import Mention            # noqa: F401
from eventhost.models.notification import Notification  # noqa: F401

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title="EventHost",
    description="Event hosting with capacity-checked RSVPs, comments, mentions and notifications",
    version="0.1.0",
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS.split(","),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Register routers
app.include_router(users.router, prefix="/api/users", tags=["Users"])
app.include_router(events.router, prefix="/api/events", tags=["Events"])
app.include_router(rsvps.router, prefix="/api/rsvps", tags=["RSVPs"])
app.include_router(comments.router, prefix="/api/comments", tags=["Comments"])
app.include_router(comments.mentions_router, prefix="/api/mentions", tags=["Mentions"])
app.include_router(notifications.router, prefix="/api/notifications", tags=["Notifications"])


@app.on_event("startup")
def on_startup():
    """Create database tables on startup (for SQLite dev mode)."""
    if settings.DATABASE_URL.startswith("sqlite"):
        Base.metadata.create_all(bind=engine)


@app.get("/api/health")
def health_check():
    return {"status": "ok"}
