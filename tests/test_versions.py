"""Tests for note version history: snapshots, numbering and restore."""

import asyncio
from unittest.mock import patch
from uuid import uuid4

import pytest
from httpx import AsyncClient
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from notevault.models import Note, NoteVersion, User
from notevault.services import version_service
from notevault.services.version_service import NoteLockRegistry


@pytest.mark.asyncio
class TestNoteLockRegistry:
    """Tests for the per-note asyncio lock registry."""

    async def test_same_note_is_serialized(self):
        registry = NoteLockRegistry()
        note_id = uuid4()
        active = 0
        peak = 0

        async def worker():
            nonlocal active, peak
            async with registry.hold(note_id):
                active += 1
                peak = max(peak, active)
                await asyncio.sleep(0.01)
                active -= 1

        await asyncio.gather(*[worker() for _ in range(5)])

        assert peak == 1

    async def test_different_notes_run_in_parallel(self):
        registry = NoteLockRegistry()
        first, second = uuid4(), uuid4()

        async with registry.hold(first):
            # Would block forever if the lock were shared
            await asyncio.wait_for(self._enter(registry, second), timeout=1)

    async def test_locks_are_dropped_when_released(self):
        registry = NoteLockRegistry()
        note_id = uuid4()

        async with registry.hold(note_id):
            assert len(registry) == 1

        assert len(registry) == 0

    @staticmethod
    async def _enter(registry: NoteLockRegistry, note_id):
        async with registry.hold(note_id):
            return True


@pytest.mark.asyncio
class TestSaveSnapshot:
    """Tests for saving versions."""

    async def test_first_snapshot_is_version_one(
        self, client: AsyncClient, auth_headers: dict, test_note: Note
    ):
        response = await client.post(f"/api/notes/{test_note.id}/versions", headers=auth_headers)

        assert response.status_code == 201
        data = response.json()
        assert data["versionNumber"] == 1
        assert data["noteId"] == str(test_note.id)
        assert data["title"] == "Test Note"
        assert data["content"] == "<p>Test note content</p>"

    async def test_snapshot_does_not_modify_note(
        self, client: AsyncClient, auth_headers: dict, test_note: Note
    ):
        before = (await client.get(f"/api/notes/{test_note.id}", headers=auth_headers)).json()

        await client.post(f"/api/notes/{test_note.id}/versions", headers=auth_headers)

        after = (await client.get(f"/api/notes/{test_note.id}", headers=auth_headers)).json()
        assert after == before

    async def test_sequential_snapshots_are_numbered_in_order(
        self, client: AsyncClient, auth_headers: dict, test_note: Note
    ):
        numbers = []
        for _ in range(3):
            response = await client.post(
                f"/api/notes/{test_note.id}/versions", headers=auth_headers
            )
            numbers.append(response.json()["versionNumber"])

        assert numbers == [1, 2, 3]

    async def test_numbering_is_per_note(
        self, client: AsyncClient, auth_headers: dict, test_note: Note
    ):
        other = (await client.post("/api/notes", json={"title": "Other"}, headers=auth_headers)).json()

        await client.post(f"/api/notes/{test_note.id}/versions", headers=auth_headers)
        await client.post(f"/api/notes/{test_note.id}/versions", headers=auth_headers)
        response = await client.post(f"/api/notes/{other['id']}/versions", headers=auth_headers)

        assert response.json()["versionNumber"] == 1

    async def test_concurrent_snapshots_get_distinct_consecutive_numbers(
        self, client: AsyncClient, auth_headers: dict, db_session: AsyncSession, test_note: Note
    ):
        """K simultaneous snapshots on one note yield exactly 1..K, no gaps or repeats."""
        count = 8

        responses = await asyncio.gather(
            *[
                client.post(f"/api/notes/{test_note.id}/versions", headers=auth_headers)
                for _ in range(count)
            ]
        )

        assert all(r.status_code == 201 for r in responses)
        assert sorted(r.json()["versionNumber"] for r in responses) == list(range(1, count + 1))

        stored = (
            await db_session.execute(
                select(NoteVersion.version_number).where(NoteVersion.note_id == test_note.id)
            )
        ).scalars().all()
        assert sorted(stored) == list(range(1, count + 1))

    async def test_snapshot_of_missing_note(self, client: AsyncClient, auth_headers: dict):
        response = await client.post(f"/api/notes/{uuid4()}/versions", headers=auth_headers)

        assert response.status_code == 404


@pytest.mark.asyncio
class TestListAndGetVersions:
    """Tests for reading version history."""

    async def test_list_is_newest_first_without_content(
        self, client: AsyncClient, auth_headers: dict, test_note: Note
    ):
        for _ in range(3):
            await client.post(f"/api/notes/{test_note.id}/versions", headers=auth_headers)

        response = await client.get(f"/api/notes/{test_note.id}/versions", headers=auth_headers)

        assert response.status_code == 200
        data = response.json()
        assert [v["versionNumber"] for v in data] == [3, 2, 1]
        assert all("content" not in v for v in data)
        assert set(data[0]) == {"id", "versionNumber", "title", "createdAt"}

    async def test_list_versions_of_foreign_note(
        self, client: AsyncClient, auth_headers_2: dict, test_note: Note
    ):
        response = await client.get(f"/api/notes/{test_note.id}/versions", headers=auth_headers_2)

        assert response.status_code == 404

    async def test_get_version_includes_content(
        self, client: AsyncClient, auth_headers: dict, test_note: Note
    ):
        created = (
            await client.post(f"/api/notes/{test_note.id}/versions", headers=auth_headers)
        ).json()

        response = await client.get(
            f"/api/notes/{test_note.id}/versions/{created['id']}", headers=auth_headers
        )

        assert response.status_code == 200
        assert response.json()["content"] == "<p>Test note content</p>"

    async def test_get_version_through_wrong_note(
        self, client: AsyncClient, auth_headers: dict, test_note: Note
    ):
        other = (await client.post("/api/notes", json={}, headers=auth_headers)).json()
        version = (
            await client.post(f"/api/notes/{test_note.id}/versions", headers=auth_headers)
        ).json()

        response = await client.get(
            f"/api/notes/{other['id']}/versions/{version['id']}", headers=auth_headers
        )

        assert response.status_code == 404


@pytest.mark.asyncio
class TestRestoreVersion:
    """Tests for restoring a note to an earlier version."""

    async def test_snapshot_edit_restore_scenario(
        self, client: AsyncClient, auth_headers: dict, test_user: User
    ):
        """v1, edit, v2, restore v1: note has v1 text and v3 holds the pre-restore state."""
        note = (
            await client.post(
                "/api/notes", json={"title": "Draft", "content": "<p>one</p>"}, headers=auth_headers
            )
        ).json()
        note_id = note["id"]

        v1 = (await client.post(f"/api/notes/{note_id}/versions", headers=auth_headers)).json()
        await client.put(
            f"/api/notes/{note_id}",
            json={"title": "Final", "content": "<p>two</p>"},
            headers=auth_headers,
        )
        v2 = (await client.post(f"/api/notes/{note_id}/versions", headers=auth_headers)).json()
        assert (v1["versionNumber"], v2["versionNumber"]) == (1, 2)

        restored = await client.put(
            f"/api/notes/{note_id}/versions/{v1['id']}/restore", headers=auth_headers
        )

        assert restored.status_code == 200
        assert restored.json()["title"] == "Draft"
        assert restored.json()["content"] == "<p>one</p>"

        versions = (
            await client.get(f"/api/notes/{note_id}/versions", headers=auth_headers)
        ).json()
        assert [v["versionNumber"] for v in versions] == [3, 2, 1]

        v3 = (
            await client.get(f"/api/notes/{note_id}/versions/{versions[0]['id']}", headers=auth_headers)
        ).json()
        assert v3["title"] == "Final"
        assert v3["content"] == "<p>two</p>"

    async def test_restore_adds_exactly_one_version(
        self, client: AsyncClient, auth_headers: dict, test_note: Note
    ):
        version = (
            await client.post(f"/api/notes/{test_note.id}/versions", headers=auth_headers)
        ).json()

        await client.put(
            f"/api/notes/{test_note.id}/versions/{version['id']}/restore", headers=auth_headers
        )

        versions = (
            await client.get(f"/api/notes/{test_note.id}/versions", headers=auth_headers)
        ).json()
        assert len(versions) == 2

    async def test_restore_bumps_updated_at(
        self, client: AsyncClient, auth_headers: dict, db_session: AsyncSession, test_note: Note
    ):
        original = test_note.updated_at
        version = (
            await client.post(f"/api/notes/{test_note.id}/versions", headers=auth_headers)
        ).json()

        await client.put(
            f"/api/notes/{test_note.id}/versions/{version['id']}/restore", headers=auth_headers
        )

        stored = await db_session.scalar(select(Note.updated_at).where(Note.id == test_note.id))
        assert stored > original

    async def test_restore_with_other_notes_version_mutates_nothing(
        self, client: AsyncClient, auth_headers: dict, test_note: Note
    ):
        other = (
            await client.post(
                "/api/notes", json={"title": "Other", "content": "<p>other</p>"}, headers=auth_headers
            )
        ).json()
        foreign_version = (
            await client.post(f"/api/notes/{other['id']}/versions", headers=auth_headers)
        ).json()
        before_note = (await client.get(f"/api/notes/{test_note.id}", headers=auth_headers)).json()
        before_other = (await client.get(f"/api/notes/{other['id']}", headers=auth_headers)).json()

        response = await client.put(
            f"/api/notes/{test_note.id}/versions/{foreign_version['id']}/restore",
            headers=auth_headers,
        )

        assert response.status_code == 404
        assert (await client.get(f"/api/notes/{test_note.id}", headers=auth_headers)).json() == before_note
        assert (await client.get(f"/api/notes/{other['id']}", headers=auth_headers)).json() == before_other

        counts = {}
        for note_id in (test_note.id, other["id"]):
            rows = await client.get(f"/api/notes/{note_id}/versions", headers=auth_headers)
            counts[str(note_id)] = len(rows.json())
        assert counts == {str(test_note.id): 0, other["id"]: 1}

    async def test_failed_pre_restore_snapshot_rolls_back(
        self, client: AsyncClient, auth_headers: dict, db_session: AsyncSession, test_note: Note
    ):
        """If saving the current state fails, the note and its history stay as they were."""
        v1 = (await client.post(f"/api/notes/{test_note.id}/versions", headers=auth_headers)).json()
        await client.put(
            f"/api/notes/{test_note.id}",
            json={"title": "Edited", "content": "<p>edited</p>"},
            headers=auth_headers,
        )
        before = (await client.get(f"/api/notes/{test_note.id}", headers=auth_headers)).json()
        stored_before = await db_session.scalar(
            select(Note.updated_at).where(Note.id == test_note.id)
        )

        real_append = version_service.append_version

        async def failing_append(db, note):
            # Counter bump and insert are flushed before the failure
            await real_append(db, note)
            raise RuntimeError("snapshot write failed")

        with patch.object(version_service, "append_version", side_effect=failing_append):
            with pytest.raises(RuntimeError):
                await client.put(
                    f"/api/notes/{test_note.id}/versions/{v1['id']}/restore",
                    headers=auth_headers,
                )

        after = (await client.get(f"/api/notes/{test_note.id}", headers=auth_headers)).json()
        assert after == before
        assert after["title"] == "Edited"
        assert after["content"] == "<p>edited</p>"
        stored_after = await db_session.scalar(
            select(Note.updated_at).where(Note.id == test_note.id)
        )
        assert stored_after == stored_before

        versions = (
            await client.get(f"/api/notes/{test_note.id}/versions", headers=auth_headers)
        ).json()
        assert [v["versionNumber"] for v in versions] == [1]
        assert len(version_service.note_locks) == 0

        # The claimed number was rolled back too
        retry = await client.post(f"/api/notes/{test_note.id}/versions", headers=auth_headers)
        assert retry.json()["versionNumber"] == 2

    async def test_restore_unknown_version(
        self, client: AsyncClient, auth_headers: dict, test_note: Note
    ):
        response = await client.put(
            f"/api/notes/{test_note.id}/versions/{uuid4()}/restore", headers=auth_headers
        )

        assert response.status_code == 404

    async def test_restore_by_non_owner(
        self, client: AsyncClient, auth_headers: dict, auth_headers_2: dict, test_note: Note
    ):
        version = (
            await client.post(f"/api/notes/{test_note.id}/versions", headers=auth_headers)
        ).json()

        response = await client.put(
            f"/api/notes/{test_note.id}/versions/{version['id']}/restore", headers=auth_headers_2
        )

        assert response.status_code == 404

    async def test_concurrent_snapshots_and_restores_keep_numbering_dense(
        self, client: AsyncClient, auth_headers: dict, test_note: Note
    ):
        first = (
            await client.post(f"/api/notes/{test_note.id}/versions", headers=auth_headers)
        ).json()

        calls = []
        for i in range(6):
            if i % 2:
                calls.append(
                    client.put(
                        f"/api/notes/{test_note.id}/versions/{first['id']}/restore",
                        headers=auth_headers,
                    )
                )
            else:
                calls.append(client.post(f"/api/notes/{test_note.id}/versions", headers=auth_headers))

        responses = await asyncio.gather(*calls)

        assert all(r.status_code in (200, 201) for r in responses)
        versions = (
            await client.get(f"/api/notes/{test_note.id}/versions", headers=auth_headers)
        ).json()
        assert sorted(v["versionNumber"] for v in versions) == list(range(1, 8))
