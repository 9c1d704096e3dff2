"""Health Probes — liveness and readiness.

Tests cover:
    - liveness always answers 200
    - readiness answers 503 while the database manager is not initialized
"""


async def test_liveness(client):
    response = await client.get("/api/v1/health/")
    assert response.status_code == 200
    assert response.json()["service"] == "teamgate-api"


async def test_readiness_without_database(client):
    response = await client.get("/api/v1/health/ready")
    assert response.status_code == 503
    assert response.json()["reason"] == "database_unavailable"
