import logging
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Ensure all SQLAlchemy models are imported so relationships resolve
import church_admin.models  # noqa: F401

from church_admin.api import (
    admins,     # /users/admin
    auth,       # /auth/*, /create-admin
    churches,   # /church
    positions,  # /positions
    subjects,   # /subjects
    users,      # /users
    workers,    # /users/workers
)

# Ops/system endpoints (/health, /version)
from church_admin.api.system import APP_NAME, router as system_router
from church_admin.errors import setup_error_handlers

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

DEFAULT_CORS_ORIGINS = (
    "http://localhost:3000,http://127.0.0.1:3000,"
    "http://localhost:5173,http://127.0.0.1:5173"
)


def _cors_origins() -> list[str]:
    raw = os.getenv("CORS_ORIGINS", DEFAULT_CORS_ORIGINS)
    return [o.strip() for o in raw.split(",") if o.strip()]


app = FastAPI(title=APP_NAME)

# --- CORS for the admin dashboard ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

setup_error_handlers(app)

# Routers
app.include_router(system_router)  # /health, /version
app.include_router(auth.router)

app.include_router(churches.router)
app.include_router(positions.router)
app.include_router(subjects.router)

# Scoped user routers must come before /users/{user_id}
app.include_router(workers.router)
app.include_router(admins.router)
app.include_router(users.router)
