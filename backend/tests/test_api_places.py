"""
HiddenHeu Backend — Catalog, Review and Narration API Tests
=============================================================

Runs against the seeded sample data:
    Delhi (1): places 1 and 5 · Mumbai (2): place 6 · Jaipur (3): place 2
    Bangalore (4): places 3 and 4 · featured: places 1-4
"""

import pytest


def _ids(items):
    return [item["id"] for item in items]


class TestCities:

    @pytest.mark.asyncio
    async def test_list_cities(self, test_client):
        response = await test_client.get("/api/cities")

        assert response.status_code == 200
        cities = response.json()["cities"]
        assert len(cities) == 6
        assert cities[0]["name"] == "Delhi"
        assert "imageUrl" in cities[0]

    @pytest.mark.asyncio
    async def test_get_city(self, test_client):
        response = await test_client.get("/api/cities/2")
        assert response.json()["city"]["name"] == "Mumbai"

    @pytest.mark.asyncio
    async def test_missing_city_is_404(self, test_client):
        response = await test_client.get("/api/cities/99")

        assert response.status_code == 404
        assert response.json()["error"] == "not_found"

    @pytest.mark.asyncio
    async def test_non_integer_city_id_is_400(self, test_client):
        response = await test_client.get("/api/cities/delhi")
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_list_categories(self, test_client):
        response = await test_client.get("/api/categories")

        categories = response.json()["categories"]
        assert len(categories) == 5
        assert "colorClass" in categories[0]


class TestPlaces:

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "query, expected",
        [
            ("", [1, 2, 3, 4, 5, 6]),
            ("?cityId=1", [1, 5]),
            ("?categoryId=2", [5, 6]),
            ("?cityId=1&categoryId=2", [5]),
            ("?cityId=0", [1, 2, 3, 4, 5, 6]),
            ("?cityId=99", []),
        ],
    )
    async def test_filtering(self, test_client, query, expected):
        response = await test_client.get(f"/api/places{query}")

        assert response.status_code == 200
        assert _ids(response.json()["places"]) == expected

    @pytest.mark.asyncio
    async def test_featured(self, test_client):
        places = (await test_client.get("/api/places/featured")).json()["places"]

        assert _ids(places) == [1, 2, 3, 4]
        assert all(p["isFeatured"] for p in places)

    @pytest.mark.asyncio
    async def test_get_place(self, test_client):
        place = (await test_client.get("/api/places/1")).json()["place"]

        assert place["cityId"] == 1
        assert place["reviewCount"] == 0
        assert isinstance(place["tags"], list)

    @pytest.mark.asyncio
    async def test_missing_place_is_404(self, test_client):
        response = await test_client.get("/api/places/999")
        assert response.status_code == 404


class TestNearby:

    @pytest.mark.asyncio
    async def test_sorted_by_distance_within_radius(self, test_client):
        """From central Delhi, only the two Old Delhi places are within 10 km."""
        response = await test_client.get(
            "/api/places/nearby", params={"lat": 28.6139, "lng": 77.2090, "radiusKm": 10}
        )

        places = response.json()["places"]
        assert _ids(places) == [5, 1]
        distances = [p["distanceKm"] for p in places]
        assert distances == sorted(distances)
        assert all(d <= 10 for d in distances)

    @pytest.mark.asyncio
    async def test_limit(self, test_client):
        response = await test_client.get(
            "/api/places/nearby",
            params={"lat": 20.0, "lng": 78.0, "radiusKm": 5000, "limit": 2},
        )
        assert len(response.json()["places"]) == 2

    @pytest.mark.asyncio
    async def test_requires_coordinates(self, test_client):
        response = await test_client.get("/api/places/nearby", params={"lat": 28.6})
        assert response.status_code == 400


class TestReviews:

    @pytest.mark.asyncio
    async def test_create_requires_session(self, test_client):
        response = await test_client.post("/api/places/1/reviews", json={"rating": 5})
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_create_and_list(self, test_client, register_user):
        user = (await register_user(test_client, "alice", "alice@x.com")).json()["user"]

        response = await test_client.post(
            "/api/places/1/reviews", json={"rating": 4, "comment": "Best parathas in town"}
        )

        assert response.status_code == 201
        review = response.json()["review"]
        assert review["userId"] == user["id"]
        assert review["placeId"] == 1

        reviews = (await test_client.get("/api/places/1/reviews")).json()["reviews"]
        assert _ids(reviews) == [review["id"]]
        place = (await test_client.get("/api/places/1")).json()["place"]
        assert place["reviewCount"] == 1

    @pytest.mark.asyncio
    async def test_review_for_missing_place_is_404(self, test_client, register_user, store):
        await register_user(test_client, "alice", "alice@x.com")

        response = await test_client.post("/api/places/999/reviews", json={"rating": 3})

        assert response.status_code == 404
        assert store.counts()["reviews"] == 0

    @pytest.mark.asyncio
    async def test_rating_out_of_range(self, test_client, register_user):
        await register_user(test_client, "alice", "alice@x.com")
        response = await test_client.post("/api/places/1/reviews", json={"rating": 6})
        assert response.status_code == 400


class TestNarration:

    @pytest.mark.asyncio
    async def test_translated_narration(self, test_client, store):
        response = await test_client.get("/api/places/2/narration", params={"language": "hindi"})

        assert response.status_code == 200
        body = response.json()
        assert body["placeId"] == 2
        assert body["language"] == "Hindi"
        assert body["languageCode"] == "hi"
        assert body["translated"] is True
        assert body["text"] == f"[hi] {store.get_place(2).description}"

    @pytest.mark.asyncio
    async def test_english_is_passed_through(self, test_client, store, fake_provider):
        body = (await test_client.get("/api/places/2/narration")).json()

        assert body["languageCode"] == "en"
        assert body["translated"] is False
        assert body["text"] == store.get_place(2).description
        assert fake_provider.calls == []

    @pytest.mark.asyncio
    async def test_unsupported_language(self, test_client):
        response = await test_client.get("/api/places/2/narration", params={"language": "Klingon"})
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_missing_place(self, test_client):
        response = await test_client.get("/api/places/999/narration", params={"language": "Hindi"})
        assert response.status_code == 404


@pytest.mark.asyncio
async def test_testimonials(test_client):
    testimonials = (await test_client.get("/api/testimonials")).json()["testimonials"]

    assert len(testimonials) == 3
    # Testimonial ratings are tenths of a star, 0-50
    assert [t["rating"] for t in testimonials] == [50, 45, 50]
