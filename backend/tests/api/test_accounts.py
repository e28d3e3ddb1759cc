# backend/tests/api/test_accounts.py
import jwt
import pytest
from fastapi import status

from agrifund.config import settings
from agrifund.models import User, Investor


@pytest.fixture
def user_payload():
    return {
        "name": "Asha Devi",
        "email": "asha.devi@gramfarm.in",
        "password": "harvest-2025",
        "phone": "9123456780",
        "address": "Ward 4, Sangli",
        "occupation": "Dairy farmer"
    }


def test_create_user_hashes_password(client, user_payload, db_session):
    response = client.post("/api/users/create", json=user_payload)

    assert response.status_code == status.HTTP_201_CREATED
    assert response.json() == {"message": "Account created successfully!"}
    user = db_session.query(User).filter(User.email == user_payload["email"]).first()
    assert user is not None
    assert user.password != user_payload["password"]
    assert user.password.startswith("$2")


def test_create_user_duplicate_email(client, user_payload):
    client.post("/api/users/create", json=user_payload)
    response = client.post("/api/users/create", json=user_payload)
    assert response.status_code == status.HTTP_409_CONFLICT


def test_create_user_missing_password(client, user_payload):
    del user_payload["password"]
    response = client.post("/api/users/create", json=user_payload)
    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_login_user(client, user_payload):
    client.post("/api/users/create", json=user_payload)

    response = client.post("/api/users/login", json={
        "email": user_payload["email"],
        "password": user_payload["password"]
    })

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["message"] == "Login successful"
    assert data["user"]["name"] == "Asha Devi"
    assert "password" not in data["user"]
    payload = jwt.decode(data["access_token"], settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    assert payload["sub"] == data["user"]["id"]
    assert payload["role"] == "owner"


def test_login_user_wrong_password(client, user_payload):
    client.post("/api/users/create", json=user_payload)
    response = client.post("/api/users/login", json={"email": user_payload["email"], "password": "wrong"})
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_login_unknown_user(client):
    response = client.post("/api/users/login", json={"email": "ghost@gramfarm.in", "password": "x"})
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_get_user(client, sample_owner):
    response = client.get(f"/api/users/{sample_owner.id}")

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["email"] == sample_owner.email
    assert "password" not in data


def test_get_user_invalid_and_missing(client):
    assert client.get("/api/users/xyz").status_code == status.HTTP_400_BAD_REQUEST
    assert client.get(f"/api/users/{'e' * 32}").status_code == status.HTTP_404_NOT_FOUND


def test_investor_signup_and_login(client, db_session):
    signup = client.post("/api/investors/create", json={
        "email": "vikram@agrocapital.in",
        "password": "patient-capital",
        "occupation": "Banker"
    })
    assert signup.status_code == status.HTTP_201_CREATED

    investor = db_session.query(Investor).filter(Investor.email == "vikram@agrocapital.in").first()
    assert investor.password != "patient-capital"

    response = client.post("/api/investors/login", json={
        "email": "vikram@agrocapital.in",
        "password": "patient-capital"
    })
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["user"] == {"id": investor.id, "email": "vikram@agrocapital.in", "role": "investor"}


def test_investor_duplicate_email(client):
    body = {"email": "vikram@agrocapital.in", "password": "pw", "occupation": "Banker"}
    client.post("/api/investors/create", json=body)
    response = client.post("/api/investors/create", json=body)
    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_investor_login_bad_password(client):
    client.post("/api/investors/create", json={
        "email": "vikram@agrocapital.in", "password": "pw", "occupation": "Banker"
    })
    response = client.post("/api/investors/login", json={"email": "vikram@agrocapital.in", "password": "nope"})
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_contact_submission(client, sample_owner):
    response = client.post("/api/contact", json={
        "name": "Suresh",
        "email": "suresh@gramfarm.in",
        "query_type": "payment",
        "message": "When will my pledge be reviewed?",
        "user_id": sample_owner.id
    })

    assert response.status_code == status.HTTP_201_CREATED
    assert response.json() == {"message": "Contact form submitted successfully!"}


@pytest.mark.parametrize("payload", [
    {"name": "Suresh", "email": "suresh@gramfarm.in", "message": "Hi"},
    {"name": "Suresh", "email": "suresh@gramfarm.in", "query_type": "complaint", "message": "Hi"},
    {"name": "Suresh", "email": "not-an-email", "query_type": "general", "message": "Hi"},
    {"name": "", "email": "suresh@gramfarm.in", "query_type": "general", "message": "Hi"},
])
def test_contact_validation(client, payload):
    response = client.post("/api/contact", json=payload)
    assert response.status_code == status.HTTP_400_BAD_REQUEST
