import uuid
from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

import pytest
from sqlmodel import select

from app.core.config import settings
from app.core.errors import (
    Forbidden,
    MissingServiceCredential,
    NotFound,
    ServiceNotConfigured,
    Unauthenticated,
    ValidationFailed,
)
from app.models.notification import Notification
from app.services.notifications import NotificationGateway, PrivilegedNotificationWriter, build_notification
from tests.utils import seed_notification, seed_user


class RecordingSession:
    """
    Stands in for AsyncSession and keeps every statement it is given.
    """

    def __init__(self):
        self.statements = []

    async def execute(self, stmt):
        self.statements.append(stmt)
        return MagicMock(rowcount=0)

    async def commit(self):
        pass

    async def rollback(self):
        pass


def where_params(stmt) -> dict:
    return stmt.whereclause.compile().params


@pytest.mark.asyncio
async def test_gateway_requires_caller():
    with pytest.raises(Unauthenticated):
        NotificationGateway(RecordingSession(), None)


@pytest.mark.asyncio
async def test_mark_as_read_is_scoped_to_id_and_owner():
    caller = MagicMock(id=uuid.UUID("00000000-0000-0000-0000-0000000000a1"))
    notification_id = uuid.UUID("00000000-0000-0000-0000-0000000000b1")
    store = RecordingSession()

    await NotificationGateway(store, caller).mark_as_read(notification_id)

    (stmt,) = store.statements
    params = where_params(stmt)
    assert params["id_1"] == notification_id
    assert params["user_id_1"] == caller.id


@pytest.mark.asyncio
async def test_bulk_operations_are_scoped_to_owner():
    caller = MagicMock(id=uuid.uuid4())
    store = RecordingSession()
    gateway = NotificationGateway(store, caller)

    await gateway.mark_all_as_read()
    await gateway.delete(uuid.uuid4())
    await gateway.delete_all()

    mark_all, delete_one, delete_all = store.statements
    assert where_params(mark_all)["user_id_1"] == caller.id
    assert "notification.read" in str(mark_all.whereclause)
    assert where_params(delete_one)["user_id_1"] == caller.id
    assert "id_1" in where_params(delete_one)
    assert where_params(delete_all) == {"user_id_1": caller.id}


@pytest.mark.asyncio
async def test_list_only_returns_own_rows_newest_first(session):
    me = await seed_user(session)
    other = await seed_user(session)
    base = datetime.now(timezone.utc)
    await seed_notification(session, me.id, "older", created_at=base - timedelta(minutes=5))
    await seed_notification(session, me.id, "newer", created_at=base)
    await seed_notification(session, other.id, "not mine")

    rows = await NotificationGateway(session, me).list()

    assert [n.title for n in rows] == ["newer", "older"]
    assert all(n.user_id == me.id for n in rows)


@pytest.mark.asyncio
async def test_list_is_bounded(session, monkeypatch):
    me = await seed_user(session)
    for i in range(5):
        await seed_notification(session, me.id, f"n{i}")

    gateway = NotificationGateway(session, me)
    assert len(await gateway.list(limit=3)) == 3

    monkeypatch.setattr(settings, "NOTIFICATIONS_MAX_PAGE_SIZE", 2)
    assert len(await gateway.list(limit=50)) == 2


@pytest.mark.asyncio
async def test_unread_count_counts_own_unread_rows(session):
    me = await seed_user(session)
    other = await seed_user(session)
    await seed_notification(session, me.id, "a")
    await seed_notification(session, me.id, "b")
    await seed_notification(session, me.id, "c", read=True)
    await seed_notification(session, other.id, "d")

    assert await NotificationGateway(session, me).unread_count() == 2


@pytest.mark.asyncio
async def test_mark_as_read_leaves_other_users_rows_untouched(session):
    me = await seed_user(session)
    other = await seed_user(session)
    theirs = await seed_notification(session, other.id, "theirs")
    mine = await seed_notification(session, me.id, "mine")

    theirs_id, mine_id = theirs.id, mine.id
    gateway = NotificationGateway(session, me)
    await gateway.mark_as_read(theirs_id)
    await gateway.mark_as_read(mine_id)

    session.expire_all()
    assert (await session.get(Notification, theirs_id)).read is False
    assert (await session.get(Notification, mine_id)).read is True


@pytest.mark.asyncio
async def test_mark_all_and_delete_all_only_touch_own_rows(session):
    me = await seed_user(session)
    other = await seed_user(session)
    await seed_notification(session, me.id, "a")
    await seed_notification(session, me.id, "b", read=True)
    theirs = await seed_notification(session, other.id, "c")
    theirs_id = theirs.id

    gateway = NotificationGateway(session, me)
    assert await gateway.mark_all_as_read() == 1
    assert await gateway.unread_count() == 0

    session.expire_all()
    assert (await session.get(Notification, theirs_id)).read is False

    assert await gateway.delete_all() == 2
    result = await session.execute(select(Notification))
    remaining = result.scalars().all()
    assert [n.id for n in remaining] == [theirs_id]


@pytest.mark.asyncio
async def test_delete_ignores_rows_of_other_users(session):
    me = await seed_user(session)
    other = await seed_user(session)
    theirs = await seed_notification(session, other.id, "theirs")
    theirs_id = theirs.id

    await NotificationGateway(session, me).delete(theirs_id)

    session.expire_all()
    assert await session.get(Notification, theirs_id) is not None


@pytest.mark.asyncio
async def test_create_self_forces_owner_and_defaults(session):
    me = await seed_user(session)

    notification = await NotificationGateway(session, me).create_self("Title", "Body")

    assert notification.user_id == me.id
    assert notification.type == "pharmacy"
    assert notification.read is False
    assert notification.data is None


@pytest.mark.asyncio
async def test_create_self_keeps_empty_payload(session):
    me = await seed_user(session)

    notification = await NotificationGateway(session, me).create_self("Title", "Body", data={})

    assert notification.data == {}


def test_new_notification_timestamps_are_utc_aware():
    notification = build_notification(uuid.uuid4(), "Title", "Body")

    assert notification.created_at.tzinfo is not None
    assert notification.created_at.utcoffset() == timedelta(0)
    assert notification.updated_at.tzinfo is not None


@pytest.mark.asyncio
@pytest.mark.parametrize("title,message", [("", "Body"), ("Title", "   "), (None, "Body")])
async def test_create_self_rejects_missing_fields(session, title, message):
    me = await seed_user(session)

    with pytest.raises(ValidationFailed):
        await NotificationGateway(session, me).create_self(title, message)


@pytest.mark.asyncio
async def test_privileged_writer_checks_credential(session, monkeypatch):
    with pytest.raises(MissingServiceCredential):
        PrivilegedNotificationWriter(session, None)
    with pytest.raises(Forbidden):
        PrivilegedNotificationWriter(session, "wrong-key")

    monkeypatch.setattr(settings, "SERVICE_ROLE_KEY", None)
    with pytest.raises(ServiceNotConfigured):
        PrivilegedNotificationWriter(session, "test-service-key")


@pytest.mark.asyncio
async def test_privileged_writer_creates_row_for_target(session):
    patient = await seed_user(session)
    writer = PrivilegedNotificationWriter(session, settings.SERVICE_ROLE_KEY)

    notification = await writer.create(
        patient.id, "New response", "A pharmacy answered", data={"prescription_id": "p-1"}
    )

    assert notification.user_id == patient.id
    assert notification.read is False
    assert notification.data == {"prescription_id": "p-1"}


@pytest.mark.asyncio
async def test_privileged_writer_validates_target(session):
    writer = PrivilegedNotificationWriter(session, settings.SERVICE_ROLE_KEY)

    with pytest.raises(ValidationFailed):
        await writer.create(None, "t", "m")
    with pytest.raises(ValidationFailed):
        await writer.create("not-a-uuid", "t", "m")
    with pytest.raises(NotFound):
        await writer.create(uuid.uuid4(), "t", "m")
