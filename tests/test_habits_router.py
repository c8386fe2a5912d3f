"""API tests for habit CRUD and completion tracking."""

from datetime import UTC, datetime, timedelta
from unittest.mock import patch
from uuid import uuid4

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from lifeboard.models import Habit, HabitType


async def _create_habit(client: AsyncClient, **overrides) -> dict:
    payload = {"name": "Read", "type": "positive", **overrides}
    resp = await client.post("/habits", json=payload)
    assert resp.status_code == 201, resp.text
    return resp.json()


class TestHabitCrud:
    @pytest.mark.asyncio
    async def test_create_defaults(self, client: AsyncClient):
        habit = await _create_habit(client, reminder={"enabled": True, "time": "07:30"})
        assert habit["streak"] == 0
        assert habit["completed"] is False
        assert habit["completionDates"] == []
        assert habit["frequency"] == "daily"
        assert habit["reminder"] == {"enabled": True, "time": "07:30"}

    @pytest.mark.asyncio
    async def test_invalid_reminder_time(self, client: AsyncClient):
        resp = await client.post(
            "/habits", json={"name": "Run", "type": "positive", "reminder": {"enabled": True, "time": "25:00"}}
        )
        assert resp.status_code == 422

    @pytest.mark.asyncio
    async def test_get_update_delete(self, client: AsyncClient):
        habit = await _create_habit(client)

        resp = await client.put(f"/habits/{habit['id']}", json={"name": "Read 20 pages", "completed": True})
        assert resp.status_code == 200
        assert resp.json()["name"] == "Read 20 pages"
        assert resp.json()["completed"] is True

        resp = await client.get(f"/habits/{habit['id']}")
        assert resp.json()["name"] == "Read 20 pages"

        assert (await client.delete(f"/habits/{habit['id']}")).status_code == 204
        assert (await client.get(f"/habits/{habit['id']}")).status_code == 404

    @pytest.mark.asyncio
    async def test_list_is_scoped_to_user(self, client: AsyncClient, db: AsyncSession):
        db.add(Habit(user_id=uuid4(), name="Not mine", type=HabitType.NEGATIVE, completion_dates_raw=[]))
        await db.commit()
        await _create_habit(client)

        names = [h["name"] for h in (await client.get("/habits")).json()]
        assert names == ["Read"]


class TestCompleteHabit:
    @pytest.mark.asyncio
    async def test_first_completion(self, client: AsyncClient):
        habit = await _create_habit(client)

        resp = await client.post(f"/habits/{habit['id']}/complete")

        assert resp.status_code == 200
        body = resp.json()
        assert body["streak"] == 1
        assert len(body["completionDates"]) == 1
        assert body["version"] == habit["version"] + 1

    @pytest.mark.asyncio
    async def test_days_one_two_four(self, client: AsyncClient):
        habit = await _create_habit(client)
        day_1 = datetime(2024, 1, 1, 8, 0, tzinfo=UTC)
        streaks = []

        for offset in (0, 1, 3):
            moment = day_1 + timedelta(days=offset)
            with patch("lifeboard.services.habits.datetime") as mock_dt:
                mock_dt.now.return_value = moment
                resp = await client.post(f"/habits/{habit['id']}/complete")
            streaks.append(resp.json()["streak"])

        assert streaks == [1, 2, 1]
        assert len(resp.json()["completionDates"]) == 3

    @pytest.mark.asyncio
    async def test_unknown_habit(self, client: AsyncClient):
        resp = await client.post(f"/habits/{uuid4()}/complete")
        assert resp.status_code == 404

    @pytest.mark.asyncio
    async def test_streak_cannot_be_written_directly(self, client: AsyncClient):
        habit = await _create_habit(client)
        resp = await client.put(f"/habits/{habit['id']}", json={"streak": 99})
        assert resp.status_code == 200
        assert resp.json()["streak"] == 0
