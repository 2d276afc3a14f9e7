from datetime import datetime
from typing import Iterable

from app.models.attendees import Attendee

CSV_HEADER = "Nome,Email,Telefone,Empresa,Data"


def format_registration_date(value: str) -> str:
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).strftime("%d/%m/%Y")
    except ValueError:
        return value


def attendees_to_csv(attendees: Iterable[Attendee]) -> str:
    """
    Render attendees as the CSV organizers download.

    Values are written as-is: a comma inside a name or company shifts the
    columns of that row.
    """
    rows = [
        f"{a.full_name},{a.email},{a.phone},{a.company},{format_registration_date(a.registration_date)}"
        for a in attendees
    ]
    return "\n".join([CSV_HEADER, *rows])
