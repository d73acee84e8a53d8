"""SQLAlchemy ORM models for the CASA entities the volunteers datatable reads."""

from datetime import datetime, timezone

from sqlalchemy import (
    Boolean,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from casa_datatables.infrastructure.database.base import Base


class CasaOrgModel(Base):
    """ORM model — maps to the 'casa_orgs' table."""

    __tablename__ = "casa_orgs"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)

    volunteers: Mapped[list["VolunteerModel"]] = relationship(back_populates="casa_org")

    def __repr__(self) -> str:
        return f"<CasaOrgModel(id={self.id}, name='{self.name}')>"


class SupervisorModel(Base):
    """ORM model — maps to the 'supervisors' table."""

    __tablename__ = "supervisors"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    casa_org_id: Mapped[int] = mapped_column(
        ForeignKey("casa_orgs.id", ondelete="CASCADE"), nullable=False, index=True
    )
    display_name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    volunteers: Mapped[list["VolunteerModel"]] = relationship(back_populates="supervisor")


class VolunteerModel(Base):
    """ORM model — maps to the 'volunteers' table."""

    __tablename__ = "volunteers"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    casa_org_id: Mapped[int] = mapped_column(
        ForeignKey("casa_orgs.id", ondelete="CASCADE"), nullable=False
    )
    supervisor_id: Mapped[int | None] = mapped_column(
        ForeignKey("supervisors.id", ondelete="SET NULL"), nullable=True
    )
    display_name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    casa_org: Mapped[CasaOrgModel] = relationship(back_populates="volunteers")
    supervisor: Mapped[SupervisorModel | None] = relationship(back_populates="volunteers")
    case_assignments: Mapped[list["CaseAssignmentModel"]] = relationship(
        back_populates="volunteer", cascade="all, delete-orphan"
    )

    __table_args__ = (
        Index("ix_volunteers_org", "casa_org_id"),
        Index("ix_volunteers_supervisor", "supervisor_id"),
    )

    def __repr__(self) -> str:
        return f"<VolunteerModel(id={self.id}, display_name='{self.display_name}')>"


class CasaCaseModel(Base):
    """ORM model — maps to the 'casa_cases' table."""

    __tablename__ = "casa_cases"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    casa_org_id: Mapped[int] = mapped_column(
        ForeignKey("casa_orgs.id", ondelete="CASCADE"), nullable=False, index=True
    )
    case_number: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    transition_aged_youth: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    case_assignments: Mapped[list["CaseAssignmentModel"]] = relationship(
        back_populates="casa_case", cascade="all, delete-orphan"
    )
    case_contacts: Mapped[list["CaseContactModel"]] = relationship(
        back_populates="casa_case", cascade="all, delete-orphan"
    )


class CaseAssignmentModel(Base):
    """ORM model — maps to the 'case_assignments' table (volunteer ↔ case)."""

    __tablename__ = "case_assignments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    volunteer_id: Mapped[int] = mapped_column(
        ForeignKey("volunteers.id", ondelete="CASCADE"), nullable=False
    )
    casa_case_id: Mapped[int] = mapped_column(
        ForeignKey("casa_cases.id", ondelete="CASCADE"), nullable=False
    )
    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    volunteer: Mapped[VolunteerModel] = relationship(back_populates="case_assignments")
    casa_case: Mapped[CasaCaseModel] = relationship(back_populates="case_assignments")

    __table_args__ = (
        UniqueConstraint("volunteer_id", "casa_case_id", name="uq_case_assignments_pair"),
        Index("ix_case_assignments_case", "casa_case_id"),
    )


class CaseContactModel(Base):
    """ORM model — maps to the 'case_contacts' table."""

    __tablename__ = "case_contacts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    casa_case_id: Mapped[int] = mapped_column(
        ForeignKey("casa_cases.id", ondelete="CASCADE"), nullable=False
    )
    creator_id: Mapped[int | None] = mapped_column(
        ForeignKey("volunteers.id", ondelete="SET NULL"), nullable=True
    )
    occurred_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    contact_made: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    casa_case: Mapped[CasaCaseModel] = relationship(back_populates="case_contacts")

    __table_args__ = (
        Index("ix_case_contacts_case_occurred", "casa_case_id", "occurred_at"),
    )
