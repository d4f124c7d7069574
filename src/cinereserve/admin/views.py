"""SQLAdmin model and dashboard views."""

from sqladmin import BaseView, ModelView, expose
from starlette.requests import Request
from starlette.responses import HTMLResponse

from cinereserve.database import AsyncSessionLocal
from cinereserve.models import Movie, Reservation, Room, Screening, User
from cinereserve.services.catalog import CatalogService


class MovieAdmin(ModelView, model=Movie):
    column_list = [
        Movie.id,
        Movie.title,
        Movie.duration,
        Movie.start_date,
        Movie.end_date,
        Movie.room,
    ]
    column_searchable_list = [Movie.title]
    column_sortable_list = [Movie.title, Movie.start_date, Movie.end_date]


class ScreeningAdmin(ModelView, model=Screening):
    column_list = [Screening.id, Screening.movie_id, Screening.screening_time]
    column_sortable_list = [Screening.screening_time]
    # Screening sets are replaced through the movie endpoints
    can_create = False
    can_edit = False


class RoomAdmin(ModelView, model=Room):
    column_list = [Room.id, Room.name]
    column_searchable_list = [Room.name]


class ReservationAdmin(ModelView, model=Reservation):
    column_list = [
        Reservation.id,
        Reservation.screening_id,
        Reservation.seat_number,
        Reservation.user_id,
        Reservation.reservation_time,
    ]
    column_sortable_list = [Reservation.reservation_time]
    can_create = False
    can_edit = False


class UserAdmin(ModelView, model=User):
    column_list = [User.id, User.username, User.role]
    column_searchable_list = [User.username]
    column_sortable_list = [User.username, User.role]
    column_details_exclude_list = [User.password]
    form_excluded_columns = [User.password, User.reservations]
    can_create = False


_OCCUPANCY_TEMPLATE = """\
{% extends "sqladmin/layout.html" %}
{% block content %}
<div class="container-fluid p-4">
  <h2>Upcoming screenings</h2>
  {% if stats %}
  <table class="table table-sm table-bordered mt-3">
    <thead>
      <tr>
        <th>Time</th><th>Movie</th>
        <th class="text-end">Reserved</th><th class="text-end">Available</th>
        <th class="text-end">Occupancy</th>
      </tr>
    </thead>
    <tbody>
    {% for s in stats %}
      <tr>
        <td>{{ s.screening_time }}</td>
        <td>{{ s.movie_title }}</td>
        <td class="text-end">{{ s.reserved_seats }} / {{ s.total_seats }}</td>
        <td class="text-end">{{ s.available_seats }}</td>
        <td class="text-end">{{ s.occupancy_rate }}%</td>
      </tr>
    {% endfor %}
    </tbody>
  </table>
  {% else %}
  <p class="mt-3">No upcoming screenings.</p>
  {% endif %}
</div>
{% endblock %}
"""


class OccupancyView(BaseView):
    name = "Occupancy"
    icon = "fa-chair"

    @expose("/occupancy", methods=["GET"])
    async def occupancy(self, request: Request) -> HTMLResponse:
        async with AsyncSessionLocal() as db:
            stats = await CatalogService(db).upcoming_screening_stats()

        tmpl = self.templates.env.from_string(_OCCUPANCY_TEMPLATE)
        content = await tmpl.render_async(request=request, stats=stats)
        return HTMLResponse(content)
