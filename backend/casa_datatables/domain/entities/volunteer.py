"""Domain entity — one volunteer as rendered in the volunteers datatable."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass
class SupervisorRef:
    """The supervisor column of a row; both fields are None when unassigned."""

    id: int | None = None
    name: str | None = None


@dataclass
class MostRecentContact:
    """Latest contact event across the volunteer's cases, if any."""

    case_id: int | None = None
    occurred_at: datetime | None = None


@dataclass
class VolunteerRow:
    """A volunteer with the derived values the datatable displays and sorts by."""

    id: int
    display_name: str
    email: str
    active: bool
    supervisor: SupervisorRef = field(default_factory=SupervisorRef)
    has_transition_aged_youth_cases: bool = False
    most_recent_contact: MostRecentContact = field(default_factory=MostRecentContact)
    contacts_made_in_past_days: int = 0
    made_contact_with_all_cases_in_days: bool = True
