from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from puzzle_rsvp.events.models import EventCreate, EventDB


class EventRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, slug: str) -> EventDB | None:
        result = await self.db.execute(select(EventDB).where(EventDB.slug == slug))
        return result.scalar_one_or_none()

    async def list_all(self, active_only: bool = False) -> list[EventDB]:
        query = select(EventDB).order_by(EventDB.created_at.asc())
        if active_only:
            query = query.where(EventDB.is_active.is_(True))
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def create(self, data: EventCreate) -> EventDB:
        db_event = EventDB.model_validate(data)
        self.db.add(db_event)
        await self.db.commit()
        await self.db.refresh(db_event)
        return db_event

    async def update(self, event: EventDB, data: dict) -> EventDB:
        for key, value in data.items():
            setattr(event, key, value)
        self.db.add(event)
        await self.db.commit()
        await self.db.refresh(event)
        return event
