def signup_and_signin(client, username, email, password="s3cret-pass"):
    response = client.post(
        "/api/auth/signup",
        json={"username": username, "email": email, "password": password},
    )
    assert response.status_code == 201, response.text
    response = client.post("/api/auth/signin", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return response.json()
