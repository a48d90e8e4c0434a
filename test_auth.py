"""
Tests for token verification, sign-up/login and the profile endpoints.
"""

import jwt
import pytest
from fastapi import HTTPException

from conftest import make_token, seed_profile
from mindpal.core.auth import decode_user_id
from mindpal.core.config import settings

API = settings.api_v1_prefix


class TestDecodeUserId:
    def test_valid_token(self):
        assert decode_user_id(make_token("user-123")) == "user-123"

    def test_expired_token(self):
        with pytest.raises(HTTPException) as excinfo:
            decode_user_id(make_token("user-123", expires_in=-60))

        assert excinfo.value.status_code == 401
        assert excinfo.value.detail == "Token has expired"

    def test_wrong_secret(self):
        token = jwt.encode(
            {"sub": "user-123", "aud": "authenticated"},
            "some-other-secret-that-is-long-enough",
            algorithm="HS256",
        )

        with pytest.raises(HTTPException) as excinfo:
            decode_user_id(token)

        assert excinfo.value.status_code == 401

    def test_wrong_audience(self):
        with pytest.raises(HTTPException) as excinfo:
            decode_user_id(make_token("user-123", aud="anon"))

        assert excinfo.value.status_code == 401

    def test_missing_subject(self):
        token = jwt.encode(
            {"aud": "authenticated"}, settings.supabase_jwt_secret, algorithm="HS256"
        )

        with pytest.raises(HTTPException) as excinfo:
            decode_user_id(token)

        assert excinfo.value.detail == "Invalid token: missing user ID"


class TestSignUpAndLogin:
    def test_user_signup_creates_profile(self, client, fake_supabase):
        response = client.post(
            f"{API}/auth/signup",
            json={"email": "sam@example.com", "password": "secret123", "username": "sam"},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["user_type"] == "user"
        assert decode_user_id(body["access_token"]) == body["user_id"]

        [profile] = fake_supabase.tables["profiles"]
        assert profile["coins"] == settings.starting_coins
        assert fake_supabase.tables["therapists"] == []

    def test_therapist_signup_creates_listing(self, client, fake_supabase):
        response = client.post(
            f"{API}/auth/signup",
            json={
                "email": "kim@clinic.com",
                "password": "secret123",
                "user_type": "therapist",
                "name": "Dr. Kim",
                "specialization": "Anxiety",
            },
        )

        assert response.status_code == 200
        [profile] = fake_supabase.tables["profiles"]
        [listing] = fake_supabase.tables["therapists"]
        assert profile["coins"] == 0
        assert listing["id"] == response.json()["user_id"]
        assert listing["name"] == "Dr. Kim"

    def test_duplicate_signup(self, client):
        payload = {"email": "sam@example.com", "password": "secret123"}
        client.post(f"{API}/auth/signup", json=payload)

        response = client.post(f"{API}/auth/signup", json=payload)

        assert response.status_code == 400

    def test_short_password(self, client):
        response = client.post(
            f"{API}/auth/signup", json={"email": "sam@example.com", "password": "123"}
        )

        assert response.status_code == 422

    def test_login(self, client):
        client.post(
            f"{API}/auth/signup",
            json={"email": "kim@clinic.com", "password": "secret123", "user_type": "therapist"},
        )

        response = client.post(
            f"{API}/auth/login", json={"email": "kim@clinic.com", "password": "secret123"}
        )

        assert response.status_code == 200
        assert response.json()["user_type"] == "therapist"
        assert response.json()["access_token"]

    def test_bad_password(self, client):
        client.post(f"{API}/auth/signup", json={"email": "sam@example.com", "password": "secret123"})

        response = client.post(
            f"{API}/auth/login", json={"email": "sam@example.com", "password": "wrong-one"}
        )

        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid email or password"


class TestProfile:
    def test_created_on_first_access(self, client, headers, user_id, fake_supabase):
        response = client.get(f"{API}/profile", headers=headers)

        assert response.status_code == 200
        assert response.json()["id"] == user_id
        assert response.json()["coins"] == settings.starting_coins
        assert len(fake_supabase.tables["profiles"]) == 1

        client.get(f"{API}/profile", headers=headers)
        assert len(fake_supabase.tables["profiles"]) == 1

    def test_update(self, client, headers, user_id, fake_supabase):
        seed_profile(fake_supabase, user_id, coins=42)

        response = client.patch(
            f"{API}/profile", json={"username": "newname", "is_premium": True}, headers=headers
        )

        assert response.status_code == 200
        assert response.json()["username"] == "newname"
        assert response.json()["is_premium"] is True
        assert response.json()["coins"] == 42

    def test_coins_cannot_be_set_directly(self, client, headers, user_id, fake_supabase):
        seed_profile(fake_supabase, user_id, coins=42)

        response = client.patch(f"{API}/profile", json={"coins": 9999}, headers=headers)

        assert response.status_code == 400
        assert fake_supabase.tables["profiles"][0]["coins"] == 42

    def test_update_missing_profile(self, client, headers):
        response = client.patch(f"{API}/profile", json={"username": "x"}, headers=headers)

        assert response.status_code == 404


class TestHealth:
    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["service"] == "mindpal-api"

    def test_root(self, client):
        assert client.get("/").json()["service"] == settings.app_name
