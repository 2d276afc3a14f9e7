import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import CORS_ORIGINS, LOG_LEVEL
from app.database.db import Base, engine
from app.models import attendees, events, settings  # noqa: F401  register tables
from app.routes import attendees as attendee_routes
from app.routes import auth as auth_routes
from app.routes import events as event_routes
from app.routes import images as image_routes
from app.routes import registrations as registration_routes
from app.routes import settings as settings_routes

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title="Event Registration Portal")

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Create all tables (in production, use migrations such as Alembic)
Base.metadata.create_all(bind=engine)

# Include the routers
app.include_router(settings_routes.router)
app.include_router(event_routes.router)
app.include_router(registration_routes.router)
app.include_router(auth_routes.router)
app.include_router(event_routes.admin_router)
app.include_router(attendee_routes.router)
app.include_router(image_routes.router)
