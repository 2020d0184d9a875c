"""
Integration tests for technician profiles and discovery.

Tests:
- Technicians upsert their own profile
- Clients only see technicians whose audience includes them
- Unavailable technicians are never listed
- Credentials and stats endpoints
"""

import pytest

from tests.factories import ClientFactory, TechProfileFactory, UserFactory


class TestTechProfile:
    """Tests for /api/tech-profile."""

    @pytest.mark.asyncio
    async def test_profile_absent_then_upserted(self, client, staff_headers, staff_user):
        missing = await client.get("/api/tech-profile", headers=staff_headers)
        assert missing.status_code == 200
        assert missing.json() is None

        saved = await client.post(
            "/api/tech-profile",
            headers=staff_headers,
            json={
                "name": "Omar Khalil",
                "isAvailable": True,
                "availabilityMode": "specific",
                "allowedClientIds": [3, 4],
                "hourlyRate": 55.5,
            },
        )
        assert saved.status_code == 200
        body = saved.json()
        assert body["userId"] == staff_user.id
        assert body["availabilityMode"] == "specific"
        assert body["allowedClientIds"] == [3, 4]
        assert body["hourlyRate"] == 55.5

        fetched = await client.get("/api/tech-profile", headers=staff_headers)
        assert fetched.json()["id"] == body["id"]

    @pytest.mark.asyncio
    async def test_unknown_availability_mode_rejected(self, client, staff_headers):
        response = await client.post(
            "/api/tech-profile",
            headers=staff_headers,
            json={"availabilityMode": "weekends"},
        )
        assert response.status_code == 400


class TestAvailableTechs:
    """Tests for GET /api/client/available-techs."""

    @pytest.mark.asyncio
    async def test_visibility_per_client(self, client, db_session, login_as):
        seven = ClientFactory.create(password="portal-pass")
        eight = ClientFactory.create(password="portal-pass")
        users = [UserFactory.create() for _ in range(3)]
        db_session.add_all([seven, eight, *users])
        await db_session.commit()

        public = TechProfileFactory.create(user_id=users[0].id, availability_mode="all")
        restricted = TechProfileFactory.create(
            user_id=users[1].id,
            availability_mode="specific",
            allowed_client_ids=[seven.id],
        )
        off_duty = TechProfileFactory.create(
            user_id=users[2].id, is_available=False, availability_mode="all"
        )
        db_session.add_all([public, restricted, off_duty])
        await db_session.commit()

        await login_as(seven.email)
        for_seven = await client.get("/api/client/available-techs")
        assert for_seven.status_code == 200
        assert {t["id"] for t in for_seven.json()} == {public.id, restricted.id}

        await login_as(eight.email)
        for_eight = await client.get("/api/client/available-techs")
        assert {t["id"] for t in for_eight.json()} == {public.id}

        listed = for_seven.json()[0]
        assert "allowedClientIds" not in listed
        assert "personalEmail" not in listed
        assert "userId" not in listed

    @pytest.mark.asyncio
    async def test_requires_client_session(self, client, staff_headers):
        response = await client.get("/api/client/available-techs", headers=staff_headers)
        assert response.status_code == 401


class TestCredentialsAndStats:
    """Tests for certifications, skills, completions and stats."""

    @pytest.mark.asyncio
    async def test_completions_feed_stats(self, client, db_session, staff_headers, staff_user):
        profile = TechProfileFactory.create(user_id=staff_user.id)
        db_session.add(profile)
        await db_session.commit()

        for hours, rating, category in [(2.0, 5, "repair"), (3.5, None, "repair")]:
            response = await client.post(
                "/api/service-completions",
                headers=staff_headers,
                json={
                    "techProfileId": profile.id,
                    "title": "Board swap",
                    "hoursWorked": hours,
                    "clientSatisfactionRating": rating,
                    "category": category,
                },
            )
            assert response.status_code == 200, response.text

        stats = await client.get(f"/api/tech-stats/{profile.id}", headers=staff_headers)

        assert stats.status_code == 200
        assert stats.json() == {
            "totalCompletions": 2,
            "totalHours": 5.5,
            "averageRating": 5.0,
            "categories": [{"category": "repair", "count": 2}],
        }

    @pytest.mark.asyncio
    async def test_certification_lifecycle(self, client, db_session, staff_headers, staff_user):
        profile = TechProfileFactory.create(user_id=staff_user.id)
        db_session.add(profile)
        await db_session.commit()

        created = await client.post(
            "/api/tech-certifications",
            headers=staff_headers,
            json={
                "techProfileId": profile.id,
                "name": "CompTIA A+",
                "issuingOrganization": "CompTIA",
            },
        )
        assert created.status_code == 200
        cert_id = created.json()["id"]

        patched = await client.patch(
            f"/api/tech-certifications/{cert_id}",
            headers=staff_headers,
            json={"credentialId": "A-123"},
        )
        assert patched.json()["credentialId"] == "A-123"
        assert patched.json()["name"] == "CompTIA A+"

        listed = await client.get(
            f"/api/tech-certifications/{profile.id}", headers=staff_headers
        )
        assert [c["id"] for c in listed.json()] == [cert_id]

        deleted = await client.delete(
            f"/api/tech-certifications/{cert_id}", headers=staff_headers
        )
        assert deleted.status_code == 200
        listed = await client.get(
            f"/api/tech-certifications/{profile.id}", headers=staff_headers
        )
        assert listed.json() == []

    @pytest.mark.asyncio
    async def test_skills_ordered_by_category(self, client, db_session, staff_headers, staff_user):
        profile = TechProfileFactory.create(user_id=staff_user.id)
        db_session.add(profile)
        await db_session.commit()

        for name, category in [("Cabling", "networking"), ("Soldering", "hardware")]:
            await client.post(
                "/api/tech-skills",
                headers=staff_headers,
                json={"techProfileId": profile.id, "name": name, "category": category},
            )

        listed = await client.get(f"/api/tech-skills/{profile.id}", headers=staff_headers)

        assert [s["name"] for s in listed.json()] == ["Soldering", "Cabling"]

    @pytest.mark.asyncio
    async def test_null_required_credential_fields_ignored(
        self, client, db_session, staff_headers, staff_user
    ):
        profile = TechProfileFactory.create(user_id=staff_user.id)
        db_session.add(profile)
        await db_session.commit()

        skill = await client.post(
            "/api/tech-skills",
            headers=staff_headers,
            json={"techProfileId": profile.id, "name": "Cabling", "verified": True},
        )
        patched = await client.patch(
            f"/api/tech-skills/{skill.json()['id']}",
            headers=staff_headers,
            json={"name": None, "verified": None, "category": "networking"},
        )
        assert patched.status_code == 200, patched.text
        assert patched.json()["name"] == "Cabling"
        assert patched.json()["verified"] is True
        assert patched.json()["category"] == "networking"

        cert = await client.post(
            "/api/tech-certifications",
            headers=staff_headers,
            json={
                "techProfileId": profile.id,
                "name": "CCNA",
                "issuingOrganization": "Cisco",
            },
        )
        patched = await client.patch(
            f"/api/tech-certifications/{cert.json()['id']}",
            headers=staff_headers,
            json={"name": None, "issuingOrganization": None},
        )
        assert patched.status_code == 200, patched.text
        assert patched.json()["name"] == "CCNA"
        assert patched.json()["issuingOrganization"] == "Cisco"

    @pytest.mark.asyncio
    async def test_completion_delete_reports_result(
        self, client, db_session, staff_headers, staff_user
    ):
        profile = TechProfileFactory.create(user_id=staff_user.id)
        db_session.add(profile)
        await db_session.commit()

        created = await client.post(
            "/api/service-completions",
            headers=staff_headers,
            json={"techProfileId": profile.id, "title": "Fan replacement"},
        )
        completion_id = created.json()["id"]

        first = await client.delete(
            f"/api/service-completions/{completion_id}", headers=staff_headers
        )
        second = await client.delete(
            f"/api/service-completions/{completion_id}", headers=staff_headers
        )

        assert first.json() == {"success": True}
        assert second.json() == {"success": False}
