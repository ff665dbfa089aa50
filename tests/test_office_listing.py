# ================================
# OFFICE LISTING TESTS (test_office_listing.py)
# ================================

from office_api.models import Office, Reservation
from office_api.utils.geo import haversine_km

from factories import create_image, create_office, create_reservation, create_tag, create_user


class TestListOffices:
    """GET /offices"""

    def test_lists_offices_paginated(self, client, db):
        """Response carries data, meta and links."""
        for _ in range(3):
            create_office(db)

        response = client.get("/offices")

        assert response.status_code == 200
        body = response.json()
        assert len(body["data"]) == 3
        assert body["data"][0]["id"] is not None
        assert body["meta"]["total"] == 3
        assert body["meta"]["per_page"] == 20
        assert body["links"]["first"].endswith("page=1")

    def test_pages_hold_twenty_offices(self, client, db):
        """25 offices split into pages of 20 and 5."""
        user = create_user(db)
        for _ in range(25):
            create_office(db, user=user)

        first = client.get("/offices").json()
        assert len(first["data"]) == 20
        assert first["meta"]["last_page"] == 2
        assert first["meta"]["from"] == 1
        assert first["meta"]["to"] == 20
        assert first["links"]["prev"] is None
        assert "page=2" in first["links"]["next"]

        second = client.get("/offices", params={"page": 2}).json()
        assert len(second["data"]) == 5
        assert second["meta"]["current_page"] == 2
        assert second["links"]["next"] is None
        assert {o["id"] for o in first["data"]}.isdisjoint({o["id"] for o in second["data"]})

    def test_lists_only_approved_and_visible_offices(self, client, db):
        """Hidden, pending and rejected offices never appear."""
        visible = [create_office(db) for _ in range(3)]
        create_office(db, hidden=True)
        create_office(db, approval_status=Office.APPROVAL_PENDING)
        create_office(db, approval_status=Office.APPROVAL_REJECTED)

        response = client.get("/offices")

        assert response.status_code == 200
        data = response.json()["data"]
        assert [o["id"] for o in data] == [o.id for o in visible]
        assert all(o["approval_status"] == Office.APPROVAL_APPROVED for o in data)
        assert all(o["hidden"] is False for o in data)

    def test_filters_by_host(self, client, db):
        """user_id returns exactly the host's offices."""
        for _ in range(3):
            create_office(db)
        host = create_user(db)
        owned = [create_office(db, user=host), create_office(db, user=host)]

        response = client.get("/offices", params={"user_id": host.id})

        assert response.status_code == 200
        assert [o["id"] for o in response.json()["data"]] == [o.id for o in owned]

    def test_page_links_keep_filters(self, client, db):
        host = create_user(db)
        for _ in range(21):
            create_office(db, user=host)

        response = client.get("/offices", params={"user_id": host.id})

        assert response.status_code == 200
        links = response.json()["links"]
        assert links["next"].endswith(f"?user_id={host.id}&page=2")
        assert links["first"].endswith(f"?user_id={host.id}&page=1")

    def test_filters_by_visitor(self, client, db):
        """visitor_id returns offices the visitor reserved, once each."""
        for _ in range(3):
            create_office(db)
        visitor = create_user(db)
        office = create_office(db)
        create_reservation(db, create_office(db))
        create_reservation(db, office, user=visitor)
        create_reservation(db, office, user=visitor, status=Reservation.STATUS_CANCELLED)

        response = client.get("/offices", params={"visitor_id": visitor.id})

        assert response.status_code == 200
        data = response.json()["data"]
        assert len(data) == 1
        assert data[0]["id"] == office.id

    def test_host_and_visitor_filters_combine(self, client, db):
        """Both filters apply together."""
        host = create_user(db)
        visitor = create_user(db)
        reserved_own = create_office(db, user=host)
        create_office(db, user=host)
        create_reservation(db, reserved_own, user=visitor)
        create_reservation(db, create_office(db), user=visitor)

        response = client.get("/offices", params={"user_id": host.id, "visitor_id": visitor.id})

        assert [o["id"] for o in response.json()["data"]] == [reserved_own.id]

    def test_includes_images_tags_and_user(self, client, db):
        user = create_user(db)
        tag = create_tag(db)
        office = create_office(db, user=user)
        office.tags.append(tag)
        db.commit()
        create_image(db, office, "image.jpg")

        response = client.get("/offices")

        assert response.status_code == 200
        item = response.json()["data"][0]
        assert item["tags"] == [{"id": tag.id, "name": tag.name}]
        assert len(item["images"]) == 1
        assert item["images"][0]["path"] == "image.jpg"
        assert item["user"]["id"] == user.id

    def test_counts_only_active_reservations(self, client, db):
        office = create_office(db)
        create_reservation(db, office, status=Reservation.STATUS_ACTIVE)
        create_reservation(db, office, status=Reservation.STATUS_CANCELLED)
        create_office(db)

        response = client.get("/offices")

        assert response.status_code == 200
        data = response.json()["data"]
        assert data[0]["reservations_count"] == 1
        assert data[1]["reservations_count"] == 0

    def test_orders_by_distance_when_coordinates_are_given(self, client, db):
        """Torres Vedras is closer to Lisbon than Leiria."""
        create_office(db, lat=39.740517284644046, lng=-8.7703753783453807, title="Leiria")
        create_office(db, lat=39.0775661384644046, lng=-9.281266783453807, title="Torres Vedras")

        response = client.get("/offices", params={"lat": "38.720661384644046", "lng": "-9.16044783453807"})
        assert response.status_code == 200
        assert [o["title"] for o in response.json()["data"]] == ["Torres Vedras", "Leiria"]

        response = client.get("/offices")
        assert response.status_code == 200
        assert [o["title"] for o in response.json()["data"]] == ["Leiria", "Torres Vedras"]

    def test_distance_order_is_non_decreasing(self, client, db):
        origin = (41.1579, -8.6291)  # Porto
        points = [
            (38.7223, -9.1393),  # Lisbon
            (40.2033, -8.4103),  # Coimbra
            (41.5454, -8.4265),  # Braga
            (37.0194, -7.9304),  # Faro
            (41.1496, -8.6109),  # Porto centre
        ]
        for lat, lng in points:
            create_office(db, lat=lat, lng=lng)

        response = client.get("/offices", params={"lat": origin[0], "lng": origin[1]})

        data = response.json()["data"]
        distances = [haversine_km(origin[0], origin[1], o["lat"], o["lng"]) for o in data]
        assert len(data) == len(points)
        assert distances == sorted(distances)

    def test_equal_distance_falls_back_to_id(self, client, db):
        first = create_office(db, lat=10.0, lng=10.0)
        second = create_office(db, lat=10.0, lng=10.0)

        response = client.get("/offices", params={"lat": 0, "lng": 0})

        assert [o["id"] for o in response.json()["data"]] == [first.id, second.id]


class TestListOfficesMalformedParameters:
    """Malformed numeric filters are ignored, never rejected."""

    def test_ignores_non_numeric_user_id(self, client, db):
        offices = [create_office(db), create_office(db)]

        response = client.get("/offices", params={"user_id": "abc", "visitor_id": "1.5x"})

        assert response.status_code == 200
        assert [o["id"] for o in response.json()["data"]] == [o.id for o in offices]

    def test_bad_coordinates_fall_back_to_id_order(self, client, db):
        far = create_office(db, lat=60.0, lng=20.0)
        near = create_office(db, lat=0.1, lng=0.1)

        for params in (
            {"lat": "abc", "lng": "0"},
            {"lat": "0"},
            {"lat": "0", "lng": "nan"},
            {"lat": "95", "lng": "0"},
        ):
            response = client.get("/offices", params=params)
            assert response.status_code == 200
            assert [o["id"] for o in response.json()["data"]] == [far.id, near.id]

    def test_bad_page_means_first_page(self, client, db):
        create_office(db)

        response = client.get("/offices", params={"page": "zero"})

        assert response.status_code == 200
        assert response.json()["meta"]["current_page"] == 1


class TestShowOffice:
    """GET /offices/{id}"""

    def test_shows_the_office(self, client, db):
        user = create_user(db)
        tag = create_tag(db)
        office = create_office(db, user=user)
        office.tags.append(tag)
        db.commit()
        create_image(db, office)
        create_reservation(db, office, status=Reservation.STATUS_ACTIVE)
        create_reservation(db, office, status=Reservation.STATUS_CANCELLED)

        response = client.get(f"/offices/{office.id}")

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["id"] == office.id
        assert data["reservations_count"] == 1
        assert len(data["tags"]) == 1
        assert len(data["images"]) == 1
        assert data["user"]["id"] == user.id

    def test_returns_404_for_unknown_office(self, client, db):
        response = client.get("/offices/999")

        assert response.status_code == 404
        assert response.json()["error_code"] == "NOT_FOUND"


class TestListTags:
    """GET /tags"""

    def test_lists_tags(self, client, db):
        tags = [create_tag(db, "has_ac"), create_tag(db, "private_bathroom")]

        response = client.get("/tags")

        assert response.status_code == 200
        assert response.json()["data"] == [{"id": t.id, "name": t.name} for t in tags]
