"""
Service Planning / Schedule aggregate service.
Creation atomique, upserts par cle composite, assemblage de la vue, suppression ordonnee.
Atomic creation, composite-key upserts, read-model assembly, ordered teardown.

Aucun verrou applicatif : chaque cellule (user, candidate) ou (schedule, user)
est ecrite par un seul INSERT ... ON CONFLICT DO UPDATE, le dernier commit gagne.
No application lock: each (user, candidate) or (schedule, user) cell is written
by a single INSERT ... ON CONFLICT DO UPDATE, last commit wins.
"""

import logging
from dataclasses import dataclass, field
from typing import Any

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.base import Executable

from app.config import settings
from app.database import upsert_insert
from app.exceptions import ConstraintViolation, NotFoundError, ValidationError
from app.models.availability import Availability
from app.models.candidate import Candidate
from app.models.comment import Comment
from app.models.schedule import Schedule
from app.models.user import User
from app.schemas.auth import SessionUser

log = logging.getLogger(__name__)

# Constantes / Constants
NAME_MAX_LENGTH = 255       # schedule_name, candidate_name
COMMENT_MAX_LENGTH = 255
UNKNOWN_AVAILABILITY = 0


@dataclass
class Participant:
    user_id: int
    username: str


@dataclass
class ScheduleView:
    """Vue denormalisee d'un planning / Denormalized schedule read model."""

    schedule: Schedule
    creator: Participant
    candidates: list[Candidate]
    participants: list[Participant]
    # (candidate_id, user_id) -> valeur / value
    availabilities: dict[tuple[int, int], int] = field(default_factory=dict)
    # user_id -> commentaire / comment
    comments: dict[int, str] = field(default_factory=dict)

    def availability_of(self, candidate_id: int, user_id: int) -> int:
        return self.availabilities.get((candidate_id, user_id), UNKNOWN_AVAILABILITY)

    def comment_of(self, user_id: int) -> str:
        return self.comments.get(user_id, "")


def parse_candidate_names(text: str) -> list[str]:
    """Une ligne non vide = un creneau, ordre conserve / One non-blank line per candidate, order kept.

    >>> parse_candidate_names("A\\r\\nB\\r\\n\\r\\nC")
    ['A', 'B', 'C']
    """
    names = [line.rstrip("\r").strip() for line in text.split("\n")]
    return [name for name in names if name]


def parse_availability(raw: Any) -> int:
    """Valeur absente ou illisible -> inconnu (0) / Missing or unparseable value -> unknown (0)."""
    if raw is None or raw == "" or isinstance(raw, bool):
        return UNKNOWN_AVAILABILITY
    try:
        return int(raw)
    except (TypeError, ValueError, OverflowError):
        return UNKNOWN_AVAILABILITY


async def _commit(db: AsyncSession, what: str, stmt: Executable | None = None) -> None:
    """Commit, IntegrityError -> ConstraintViolation sans retry / without retry."""
    try:
        if stmt is not None:
            await db.execute(stmt)
        await db.commit()
    except IntegrityError as exc:
        await db.rollback()
        log.warning("Constraint violation on %s: %s", what, exc.orig)
        raise ConstraintViolation(f"Constraint violation on {what}") from exc


async def create_schedule(
    db: AsyncSession,
    schedule_name: str,
    memo: str,
    candidates_text: str,
    creator: SessionUser,
) -> str:
    """Creer le planning et ses creneaux en une transaction / Create schedule and candidates in one transaction."""
    name = (schedule_name or "").strip()
    if not name:
        raise ValidationError("scheduleName is required")
    if len(name) > NAME_MAX_LENGTH:
        raise ValidationError(f"scheduleName must be at most {NAME_MAX_LENGTH} characters")

    candidate_names = parse_candidate_names(candidates_text or "")
    if not candidate_names:
        raise ValidationError("At least one candidate is required")
    for candidate_name in candidate_names:
        if len(candidate_name) > NAME_MAX_LENGTH:
            raise ValidationError(f"Candidate names must be at most {NAME_MAX_LENGTH} characters")

    schedule = Schedule(
        schedule_name=name,
        memo=memo or "",
        created_by=creator.user_id,
        candidates=[
            Candidate(candidate_name=candidate_name, display_order=order)
            for order, candidate_name in enumerate(candidate_names)
        ],
    )
    db.add(schedule)
    await _commit(db, "schedule creation")

    log.info("Schedule %s created by user %s with %d candidates",
             schedule.schedule_id, creator.user_id, len(candidate_names))
    return schedule.schedule_id


async def upsert_availability(
    db: AsyncSession,
    schedule_id: str,
    user_id: int,
    candidate_id: int,
    availability: Any,
) -> int:
    """Ecrire ou remplacer la disponibilite (user, candidate) / Write or overwrite the (user, candidate) availability."""
    value = parse_availability(availability)
    if not settings.AVAILABILITY_MIN <= value <= settings.AVAILABILITY_MAX:
        raise ValidationError(
            f"availability must be between {settings.AVAILABILITY_MIN} and {settings.AVAILABILITY_MAX}"
        )

    # Le creneau doit appartenir au planning du chemin / Candidate must belong to the path schedule
    result = await db.execute(
        select(Candidate.schedule_id).where(Candidate.candidate_id == candidate_id)
    )
    owner = result.scalar_one_or_none()
    if owner is None or owner != schedule_id:
        raise NotFoundError("Candidate not found in this schedule")

    stmt = upsert_insert(db, Availability).values(
        schedule_id=schedule_id,
        user_id=user_id,
        candidate_id=candidate_id,
        availability=value,
    )
    stmt = stmt.on_conflict_do_update(
        index_elements=["candidate_id", "user_id"],
        set_={"availability": stmt.excluded.availability, "schedule_id": stmt.excluded.schedule_id},
    )
    await _commit(db, "availability", stmt)
    return value


async def upsert_comment(db: AsyncSession, schedule_id: str, user_id: int, comment: Any) -> str:
    """Ecrire ou remplacer le commentaire (schedule, user) / Write or overwrite the (schedule, user) comment."""
    if not isinstance(comment, str):
        raise ValidationError("comment must be a string")
    if len(comment) > COMMENT_MAX_LENGTH:
        raise ValidationError(f"comment must be at most {COMMENT_MAX_LENGTH} characters")

    result = await db.execute(select(Schedule.schedule_id).where(Schedule.schedule_id == schedule_id))
    if result.scalar_one_or_none() is None:
        raise NotFoundError("Schedule not found")

    stmt = upsert_insert(db, Comment).values(schedule_id=schedule_id, user_id=user_id, comment=comment)
    stmt = stmt.on_conflict_do_update(
        index_elements=["schedule_id", "user_id"],
        set_={"comment": stmt.excluded.comment},
    )
    await _commit(db, "comment", stmt)
    return comment


async def get_schedule_view(
    db: AsyncSession,
    schedule_id: str,
    viewer: SessionUser | None = None,
) -> ScheduleView:
    """Assembler la vue du planning, sans ecriture / Assemble the schedule read model, no writes."""
    schedule = await db.get(Schedule, schedule_id)
    if schedule is None:
        raise NotFoundError("Schedule not found")
    creator_name = (await db.execute(
        select(User.username).where(User.user_id == schedule.created_by)
    )).scalar_one()

    candidates = (await db.execute(
        select(Candidate)
        .where(Candidate.schedule_id == schedule_id)
        .order_by(Candidate.display_order)
    )).scalars().all()
    availabilities = (await db.execute(
        select(Availability).where(Availability.schedule_id == schedule_id)
    )).scalars().all()
    comments = (await db.execute(
        select(Comment).where(Comment.schedule_id == schedule_id)
    )).scalars().all()

    participant_ids = {a.user_id for a in availabilities} | {c.user_id for c in comments}
    others: list[Participant] = []
    if participant_ids:
        users = (await db.execute(
            select(User).where(User.user_id.in_(participant_ids)).order_by(User.user_id)
        )).scalars().all()
        others = [Participant(user_id=u.user_id, username=u.username) for u in users]

    # Le lecteur en premier, meme sans reponse / Viewer first, even without answers
    participants = others
    if viewer is not None:
        participants = [Participant(user_id=viewer.user_id, username=viewer.username)]
        participants += [p for p in others if p.user_id != viewer.user_id]

    return ScheduleView(
        schedule=schedule,
        creator=Participant(user_id=schedule.created_by, username=creator_name),
        candidates=list(candidates),
        participants=participants,
        availabilities={(a.candidate_id, a.user_id): a.availability for a in availabilities},
        comments={c.user_id: c.comment for c in comments},
    )


async def list_schedules_created_by(db: AsyncSession, user_id: int) -> list[Schedule]:
    """Plannings crees par l'utilisateur, recents d'abord / User's schedules, newest first."""
    result = await db.execute(
        select(Schedule)
        .where(Schedule.created_by == user_id)
        .order_by(Schedule.created_at.desc(), Schedule.schedule_id)
    )
    return list(result.scalars().all())


async def delete_schedule_aggregate(db: AsyncSession, schedule_id: str) -> None:
    """Supprimer l'agregat, enfants d'abord / Delete the aggregate, children first.

    Ordre explicite, pas de cascade en base :
    Availability -> Candidate -> Comment -> Schedule.
    """
    result = await db.execute(select(Schedule.schedule_id).where(Schedule.schedule_id == schedule_id))
    if result.scalar_one_or_none() is None:
        raise NotFoundError("Schedule not found")

    await db.execute(delete(Availability).where(Availability.schedule_id == schedule_id))
    await db.execute(delete(Candidate).where(Candidate.schedule_id == schedule_id))
    await db.execute(delete(Comment).where(Comment.schedule_id == schedule_id))
    await db.execute(delete(Schedule).where(Schedule.schedule_id == schedule_id))
    await _commit(db, "schedule teardown")

    log.info("Schedule aggregate %s deleted", schedule_id)
