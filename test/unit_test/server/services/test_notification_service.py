"""
Unit tests for in-app notifications.
"""

from __future__ import annotations

from unittest.mock import AsyncMock, patch

import pytest

from legal_aid.core.database.repositories.bundle import RepoBundle
from legal_aid.core.errors import NotFound
from legal_aid.core.models.domain.enums import NotificationStatus, NotificationType
from legal_aid.server.services.notifications import NotificationService


@pytest.fixture
def notifications(repos) -> NotificationService:
    return NotificationService(repos)


class TestNotificationService:
    @pytest.mark.asyncio
    async def test_after_commit_dedupes_and_skips_missing(self, notifications, factory):
        user = await factory.admin()

        delivered = await notifications.notify_after_commit(
            [user.id, None, user.id], "Payment updated", "Paid", type=NotificationType.PAYMENT
        )

        assert delivered == 1
        items = await notifications.list_for_user(user.id)
        assert [(n.title, n.type) for n in items] == [("Payment updated", "PAYMENT")]

    @pytest.mark.asyncio
    async def test_after_commit_without_recipients(self, notifications):
        assert await notifications.notify_after_commit([None], "t", "m") == 0

    @pytest.mark.asyncio
    async def test_after_commit_failure_is_contained(self, notifications, factory):
        user = await factory.admin()
        user_id = user.id

        with patch.object(RepoBundle, "commit", new=AsyncMock(side_effect=RuntimeError("db down"))):
            delivered = await notifications.notify_after_commit([user_id], "t", "m")

        assert delivered == 0
        assert await notifications.unread_count(user_id) == 0

    @pytest.mark.asyncio
    async def test_mark_read_and_unread_count(self, notifications, repos, factory):
        user = await factory.admin()
        first = await notifications.notify(user.id, "One", "first")
        await notifications.notify(user.id, "Two", "second")
        await repos.commit()
        assert await notifications.unread_count(user.id) == 2

        read = await notifications.mark_read(user.id, first.id)

        assert read.status == NotificationStatus.READ.value
        assert read.read_at is not None
        assert await notifications.unread_count(user.id) == 1
        unread = await notifications.list_for_user(user.id, unread_only=True)
        assert [n.title for n in unread] == ["Two"]

    @pytest.mark.asyncio
    async def test_cannot_read_someone_elses_notification(self, notifications, repos, factory):
        owner = await factory.admin()
        other = await factory.admin()
        notification = await notifications.notify(owner.id, "Private", "for owner")
        await repos.commit()

        with pytest.raises(NotFound):
            await notifications.mark_read(other.id, notification.id)

    @pytest.mark.asyncio
    async def test_mark_all_read(self, notifications, repos, factory):
        user = await factory.admin()
        for i in range(3):
            await notifications.notify(user.id, f"N{i}", "m")
        await repos.commit()

        assert await notifications.mark_all_read(user.id) == 3
        assert await notifications.unread_count(user.id) == 0
