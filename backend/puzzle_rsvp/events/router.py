from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from puzzle_rsvp.auth.dependencies import require_admin
from puzzle_rsvp.database import get_db
from puzzle_rsvp.events.models import EventCreate, EventDB, EventRead, EventUpdate
from puzzle_rsvp.events.repository import EventRepository
from puzzle_rsvp.invites.dependencies import get_invite_store
from puzzle_rsvp.invites.models import InviteDB
from puzzle_rsvp.invites.schemas import InviteAdminRead, InviteCreate
from puzzle_rsvp.invites.service import build_invite_url
from puzzle_rsvp.invites.store import InviteStore

router = APIRouter(
    prefix="/admin/events",
    tags=["admin"],
    dependencies=[Depends(require_admin)],
)


def get_event_repository(db: AsyncSession = Depends(get_db)) -> EventRepository:
    return EventRepository(db)


async def _get_event_or_404(slug: str, repository: EventRepository) -> EventDB:
    event = await repository.get(slug)
    if event is None:
        raise HTTPException(status_code=404, detail="Event not found")
    return event


def _invite_to_admin_read(invite: InviteDB, include_url: bool = False) -> InviteAdminRead:
    return InviteAdminRead(
        id=invite.id,
        token=invite.token,
        event_slug=invite.event_slug,
        guest_name=invite.guest_name,
        puzzle_solved=invite.puzzle_solved,
        rsvp_status=invite.rsvp_status.value if invite.rsvp_status else None,
        rsvp_data=invite.rsvp_data,
        invite_url=build_invite_url(invite.token) if include_url else None,
        created_at=invite.created_at,
        solved_at=invite.solved_at,
        rsvp_at=invite.rsvp_at,
    )


@router.post("/", response_model=EventRead, status_code=201)
async def create_event(
    data: EventCreate,
    repository: EventRepository = Depends(get_event_repository),
) -> EventRead:
    """Create an event. Slugs are permanent once created."""
    if await repository.get(data.slug):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Event slug already exists",
        )
    return await repository.create(data)


@router.get("/", response_model=list[EventRead])
async def list_events(
    active_only: bool = False,
    repository: EventRepository = Depends(get_event_repository),
) -> list[EventRead]:
    return await repository.list_all(active_only=active_only)


@router.patch("/{slug}", response_model=EventRead)
async def update_event(
    slug: str,
    event_update: EventUpdate,
    repository: EventRepository = Depends(get_event_repository),
) -> EventRead:
    """Edit an event's display fields or archive it via is_active."""
    event = await _get_event_or_404(slug, repository)
    return await repository.update(event, event_update.model_dump(exclude_unset=True))


@router.post("/{slug}/invites", response_model=InviteAdminRead, status_code=201)
async def create_invite(
    slug: str,
    data: InviteCreate,
    repository: EventRepository = Depends(get_event_repository),
    store: InviteStore = Depends(get_invite_store),
) -> InviteAdminRead:
    await _get_event_or_404(slug, repository)
    invite = await store.create(slug, data.guest_name)
    return _invite_to_admin_read(invite, include_url=True)


@router.get("/{slug}/invites", response_model=list[InviteAdminRead])
async def list_invites(
    slug: str,
    repository: EventRepository = Depends(get_event_repository),
    store: InviteStore = Depends(get_invite_store),
) -> list[InviteAdminRead]:
    await _get_event_or_404(slug, repository)
    invites = await store.list_for_event(slug)
    return [_invite_to_admin_read(invite, include_url=True) for invite in invites]
