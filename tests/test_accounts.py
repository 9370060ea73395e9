import pytest

from sucoi.src.database.stores import UserStore

SIGNUP = {
    "name": "Maya",
    "email": "maya@example.com",
    "password": "hunter2",
    "securityQuestion": "Favourite colour?",
    "securityAnswer": "  Blue ",
}


async def signup(client, **overrides):
    return await client.post("/signup", json={**SIGNUP, **overrides})


async def test_signup_stores_user_with_normalised_answer(client, database):
    resp = await signup(client)

    assert resp.status_code == 200
    assert resp.json() == {"success": True, "message": "User created successfully!"}
    user = await database.users.find_one({"email": "maya@example.com"})
    assert user["name"] == "Maya"
    assert user["password"] == "hunter2"
    assert user["securityAnswer"] == "blue"
    assert user["createdAt"] is not None


async def test_signup_twice_with_same_email_conflicts(client, database):
    await signup(client)
    resp = await signup(client, name="Other", password="different")

    assert resp.status_code == 400
    assert resp.json() == {"error": "User already exists!"}
    assert await database.users.count_documents({"email": "maya@example.com"}) == 1


async def test_signup_without_security_answer(client, database):
    resp = await client.post("/signup", json={"name": "Noa", "email": "noa@example.com", "password": "pw"})

    assert resp.status_code == 200
    user = await database.users.find_one({"email": "noa@example.com"})
    assert user["securityAnswer"] is None


async def test_signup_requires_email_and_password(client):
    resp = await client.post("/signup", json={"name": "Maya"})
    assert resp.status_code == 422


async def test_signin_returns_public_user(client):
    await signup(client)
    resp = await client.post("/signin", json={"email": "maya@example.com", "password": "hunter2"})

    assert resp.status_code == 200
    assert resp.json() == {"success": True, "user": {"name": "Maya", "email": "maya@example.com"}}


async def test_signin_does_not_reveal_whether_email_exists(client):
    await signup(client)
    wrong_password = await client.post("/signin", json={"email": "maya@example.com", "password": "nope"})
    unknown_email = await client.post("/signin", json={"email": "ghost@example.com", "password": "hunter2"})

    assert wrong_password.status_code == unknown_email.status_code == 401
    assert wrong_password.json() == unknown_email.json() == {"error": "Invalid credentials!"}


async def test_verify_security_returns_question(client):
    await signup(client)
    resp = await client.post("/verify-security", json={"email": "maya@example.com"})

    assert resp.status_code == 200
    assert resp.json() == {"success": True, "securityQuestion": "Favourite colour?"}


async def test_verify_security_unknown_email(client):
    resp = await client.post("/verify-security", json={"email": "ghost@example.com"})

    assert resp.status_code == 404
    assert resp.json() == {"error": "User not found!"}


@pytest.mark.parametrize("answer", ["Blue ", "blue", "BLUE", "  bLuE"])
async def test_reset_password_answer_is_case_and_space_insensitive(client, answer):
    await signup(client, securityAnswer="blue")
    resp = await client.post("/reset-password", json={"email": "maya@example.com", "securityAnswer": answer, "newPassword": "fresh"})

    assert resp.status_code == 200
    assert resp.json() == {"success": True, "message": "Password reset successfully!"}
    signin = await client.post("/signin", json={"email": "maya@example.com", "password": "fresh"})
    assert signin.status_code == 200


async def test_reset_password_wrong_answer_keeps_old_password(client, database):
    await signup(client)
    resp = await client.post("/reset-password", json={"email": "maya@example.com", "securityAnswer": "red", "newPassword": "fresh"})

    assert resp.status_code == 401
    assert resp.json() == {"error": "Incorrect security answer!"}
    user = await database.users.find_one({"email": "maya@example.com"})
    assert user["password"] == "hunter2"


async def test_reset_password_unknown_email(client):
    resp = await client.post("/reset-password", json={"email": "ghost@example.com", "securityAnswer": "blue", "newPassword": "fresh"})
    assert resp.status_code == 404


async def test_reset_password_for_user_without_answer_is_rejected(client):
    await client.post("/signup", json={"name": "Noa", "email": "noa@example.com", "password": "pw"})
    resp = await client.post("/reset-password", json={"email": "noa@example.com", "securityAnswer": "", "newPassword": "fresh"})
    assert resp.status_code == 401


async def test_database_failure_is_a_generic_500(client, monkeypatch):
    async def broken(*args, **kwargs):
        raise RuntimeError("connection reset")

    monkeypatch.setattr(UserStore, "find_by_credentials", broken)
    resp = await client.post("/signin", json={"email": "maya@example.com", "password": "hunter2"})

    assert resp.status_code == 500
    assert resp.json() == {"error": "Failed to sign in"}
