"""Back-office FastAPI application."""

from fastapi import FastAPI
from sqladmin import Admin

from cinereserve.admin.auth import AdminAuth
from cinereserve.admin.views import (
    MovieAdmin,
    OccupancyView,
    ReservationAdmin,
    RoomAdmin,
    ScreeningAdmin,
    UserAdmin,
)
from cinereserve.config import settings
from cinereserve.database import engine


def create_admin_app() -> FastAPI:
    app = FastAPI(title="CineReserve Admin")
    auth = AdminAuth(secret_key=settings.admin_secret_key)
    admin = Admin(app, engine, authentication_backend=auth, title="CineReserve Admin")
    for view in [MovieAdmin, ScreeningAdmin, RoomAdmin, ReservationAdmin, UserAdmin, OccupancyView]:
        admin.add_view(view)
    return app


admin_app = create_admin_app()
