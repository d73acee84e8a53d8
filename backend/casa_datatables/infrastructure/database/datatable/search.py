"""Free-text search across volunteer, supervisor and case fields."""

from sqlalchemy import Select, or_

from casa_datatables.infrastructure.database.datatable.derived import case_number_matches
from casa_datatables.infrastructure.database.models import SupervisorModel, VolunteerModel


def apply_search(stmt: Select, search_term: str | None) -> Select:
    """Keep volunteers where any searchable field contains the term.

    Matching is a case-insensitive substring test; ``%`` and ``_`` in the
    term match literally. A blank term leaves ``stmt`` untouched. Case
    numbers are matched through EXISTS so a volunteer matching on several
    cases is still returned once. ``stmt`` must be outer-joined to
    ``SupervisorModel``.
    """
    term = (search_term or "").strip()
    if not term:
        return stmt

    return stmt.where(
        or_(
            VolunteerModel.display_name.icontains(term, autoescape=True),
            VolunteerModel.email.icontains(term, autoescape=True),
            SupervisorModel.display_name.icontains(term, autoescape=True),
            SupervisorModel.email.icontains(term, autoescape=True),
            case_number_matches(term),
        )
    )
