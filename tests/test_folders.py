"""Tests for Folder CRUD API endpoints."""

from datetime import datetime
from uuid import uuid4

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from notevault.models import Folder, Note, User


@pytest.mark.asyncio
class TestFolders:
    """Tests for folder endpoints."""

    async def test_create_folder_defaults(self, client: AsyncClient, auth_headers: dict):
        response = await client.post("/api/folders", json={}, headers=auth_headers)

        assert response.status_code == 201
        data = response.json()
        assert data["name"] == "New Folder"
        assert data["icon"] == "📁"
        assert data["noteCount"] == 0

    async def test_create_folder_blank_name_uses_default(
        self, client: AsyncClient, auth_headers: dict
    ):
        response = await client.post("/api/folders", json={"name": "   "}, headers=auth_headers)

        assert response.json()["name"] == "New Folder"

    async def test_list_folders_sorted_with_counts(
        self, client: AsyncClient, auth_headers: dict, db_session: AsyncSession, test_user: User
    ):
        recipes = Folder(user_id=test_user.id, name="Recipes")
        archive = Folder(user_id=test_user.id, name="Archive")
        db_session.add_all([recipes, archive])
        await db_session.flush()
        db_session.add_all(
            [
                Note(user_id=test_user.id, title="Soup", tags=[], folder_id=recipes.id),
                Note(user_id=test_user.id, title="Bread", tags=[], folder_id=recipes.id),
                Note(
                    user_id=test_user.id,
                    title="Burnt",
                    tags=[],
                    folder_id=recipes.id,
                    is_trashed=True,
                    trashed_at=datetime.utcnow(),
                ),
            ]
        )
        await db_session.commit()

        response = await client.get("/api/folders", headers=auth_headers)

        assert response.status_code == 200
        data = response.json()
        assert [f["name"] for f in data] == ["Archive", "Recipes"]
        assert [f["noteCount"] for f in data] == [0, 2]

    async def test_list_only_own_folders(
        self, client: AsyncClient, auth_headers_2: dict, test_folder: Folder
    ):
        response = await client.get("/api/folders", headers=auth_headers_2)

        assert response.json() == []

    async def test_update_folder(self, client: AsyncClient, auth_headers: dict, test_folder: Folder):
        response = await client.put(
            f"/api/folders/{test_folder.id}", json={"name": "Office"}, headers=auth_headers
        )

        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "Office"
        assert data["icon"] == "💼"

    async def test_update_folder_rejects_blank_name(
        self, client: AsyncClient, auth_headers: dict, test_folder: Folder
    ):
        response = await client.put(
            f"/api/folders/{test_folder.id}", json={"name": "  "}, headers=auth_headers
        )

        assert response.status_code == 400

    async def test_update_foreign_folder(
        self, client: AsyncClient, auth_headers_2: dict, test_folder: Folder
    ):
        response = await client.put(
            f"/api/folders/{test_folder.id}", json={"name": "Mine now"}, headers=auth_headers_2
        )

        assert response.status_code == 404

    async def test_delete_folder_unfiles_notes(
        self, client: AsyncClient, auth_headers: dict, test_folder: Folder, test_note: Note
    ):
        await client.put(
            f"/api/notes/{test_note.id}", json={"folder": str(test_folder.id)}, headers=auth_headers
        )

        response = await client.delete(f"/api/folders/{test_folder.id}", headers=auth_headers)

        assert response.status_code == 200
        assert response.json() == {"message": "Folder deleted"}
        note = (await client.get(f"/api/notes/{test_note.id}", headers=auth_headers)).json()
        assert note["folder"] is None
        assert (await client.get("/api/folders", headers=auth_headers)).json() == []

    async def test_delete_missing_folder(self, client: AsyncClient, auth_headers: dict):
        response = await client.delete(f"/api/folders/{uuid4()}", headers=auth_headers)

        assert response.status_code == 404
